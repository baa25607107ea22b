"""Feature adoption factor."""

import pandas as pd

from .base import BaseFactor


class LowAdoptionFactor(BaseFactor):
    """
    Flag shallow product usage.

    Rule: feature_adoption < 30% (default 50 when missing)
    """

    name = "low_adoption"
    column = "feature_adoption"

    @property
    def default(self) -> float:
        return self.thresholds.adoption_default

    def flag(self, values: pd.Series) -> pd.Series:
        return values < self.thresholds.adoption_min
