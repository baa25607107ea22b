"""
Factor evaluation - maps raw customer records to boolean risk factors.

Usage:
    evaluator = FactorEvaluator()
    factors = evaluator.evaluate({"nps_score": 3, "support_tickets": 20})
    table = evaluator.evaluate_frame(customers_df)
"""

from dataclasses import dataclass, asdict
from typing import Mapping, Optional

import pandas as pd

from .config import FACTOR_NAMES, DEFAULT_THRESHOLDS, FactorThresholds
from .components import (
    LowNPSFactor,
    HighTicketsFactor,
    LowSuccessFactor,
    StaleActivityFactor,
    LowAdoptionFactor,
)
from .schemas import FACTORS_SCHEMA


@dataclass(frozen=True)
class Factors:
    """The five risk flags for one customer."""

    low_nps: bool = False
    high_tickets: bool = False
    low_success: bool = False
    stale_activity: bool = False
    low_adoption: bool = False

    @classmethod
    def from_row(cls, row: Mapping) -> "Factors":
        return cls(**{name: bool(row[name]) for name in FACTOR_NAMES})

    def active(self) -> list[str]:
        """Names of the factors that fired."""
        return [name for name, value in asdict(self).items() if value]

    def to_dict(self) -> dict:
        return asdict(self)


class FactorEvaluator:
    """Evaluates every risk factor for a table of customers."""

    def __init__(self, thresholds: Optional[FactorThresholds] = None):
        self.thresholds = thresholds or DEFAULT_THRESHOLDS
        self.components = {
            "low_nps": LowNPSFactor(self.thresholds),
            "high_tickets": HighTicketsFactor(self.thresholds),
            "low_success": LowSuccessFactor(self.thresholds),
            "stale_activity": StaleActivityFactor(self.thresholds),
            "low_adoption": LowAdoptionFactor(self.thresholds),
        }

    def evaluate_frame(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Evaluate all factors for every row.

        Args:
            df: Customer records, one row per customer. Any columns may be
                present; missing metric columns use their defaults.

        Returns:
            DataFrame of booleans, one column per factor, same index as df
        """
        flags = pd.DataFrame(
            {name: component.evaluate(df) for name, component in self.components.items()},
            index=df.index,
            columns=list(FACTOR_NAMES),
        )
        return FACTORS_SCHEMA.validate(flags)

    def evaluate(self, record: Mapping) -> Factors:
        """Evaluate a single customer record."""
        flags = self.evaluate_frame(pd.DataFrame([dict(record)]))
        return Factors.from_row(flags.iloc[0])
