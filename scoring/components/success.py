"""Payment success rate factor."""

import pandas as pd

from .base import BaseFactor


class LowSuccessFactor(BaseFactor):
    """
    Flag customers whose transactions fail too often.

    Rule: success_rate < 90% (default 100 when missing)
    """

    name = "low_success"
    column = "success_rate"

    @property
    def default(self) -> float:
        return self.thresholds.success_default

    def flag(self, values: pd.Series) -> pd.Series:
        return values < self.thresholds.success_min
