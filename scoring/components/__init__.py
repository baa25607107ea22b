"""Risk factor components for churn scoring."""

from .base import BaseFactor
from .nps import LowNPSFactor
from .tickets import HighTicketsFactor
from .success import LowSuccessFactor
from .activity import StaleActivityFactor
from .adoption import LowAdoptionFactor

__all__ = [
    "BaseFactor",
    "LowNPSFactor",
    "HighTicketsFactor",
    "LowSuccessFactor",
    "StaleActivityFactor",
    "LowAdoptionFactor",
]
