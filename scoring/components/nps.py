"""Net promoter score factor."""

import pandas as pd

from .base import BaseFactor


class LowNPSFactor(BaseFactor):
    """
    Flag detractors by NPS score.

    Customers scoring 4 or lower are unlikely to recommend the product
    and are the strongest single churn signal.

    Rule: nps_score <= 4 (default 0 when missing)
    """

    name = "low_nps"
    column = "nps_score"
    integer = True

    @property
    def default(self) -> float:
        return self.thresholds.nps_default

    def flag(self, values: pd.Series) -> pd.Series:
        return values <= self.thresholds.nps_max
