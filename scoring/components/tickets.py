"""Support load factor."""

import pandas as pd

from .base import BaseFactor


class HighTicketsFactor(BaseFactor):
    """
    Flag customers with a heavy support load.

    Rule: support_tickets > 15 in the last 90 days (default 0)
    """

    name = "high_tickets"
    column = "support_tickets"
    integer = True

    @property
    def default(self) -> float:
        return self.thresholds.tickets_default

    def flag(self, values: pd.Series) -> pd.Series:
        return values > self.thresholds.tickets_min
