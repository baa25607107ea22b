"""Base class for risk factor components."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd

if TYPE_CHECKING:
    from ..config import FactorThresholds


class BaseFactor(ABC):
    """
    Abstract base class for risk factors.

    Each factor reads one customer metric and flags it against a fixed
    threshold using vectorized pandas operations. Missing columns and
    values that are not numeric fall back to the factor's default, so
    evaluation never fails.
    """

    name: str = "base"
    column: str = ""
    integer: bool = False

    def __init__(self, thresholds: "FactorThresholds"):
        """
        Initialize factor with thresholds.

        Args:
            thresholds: FactorThresholds instance with limits and defaults
        """
        self.thresholds = thresholds

    @property
    @abstractmethod
    def default(self) -> float:
        """Value used when the metric is missing or malformed."""
        pass

    @abstractmethod
    def flag(self, values: pd.Series) -> pd.Series:
        """
        Apply the threshold rule.

        Args:
            values: Clean numeric metric values

        Returns:
            Boolean Series
        """
        pass

    def values(self, df: pd.DataFrame) -> pd.Series:
        """Read the metric column as numbers, defaulting bad entries."""
        if self.column not in df.columns:
            return pd.Series(self.default, index=df.index, dtype=float)

        raw = df[self.column].astype(str).str.strip()
        values = pd.to_numeric(raw, errors="coerce").astype(float)
        values = values.where(np.isfinite(values))
        if self.integer:
            values = np.trunc(values)
        return values.fillna(self.default).astype(float)

    def evaluate(self, df: pd.DataFrame) -> pd.Series:
        """Flag every row of the DataFrame."""
        return self.flag(self.values(df)).astype(bool)
