"""Transaction staleness factor."""

import pandas as pd

from .base import BaseFactor


class StaleActivityFactor(BaseFactor):
    """
    Flag customers who have stopped transacting.

    last_transaction is the number of days since the most recent
    transaction, so a large value means the account has gone quiet.

    Rule: last_transaction > 20 days (default 0)
    """

    name = "stale_activity"
    column = "last_transaction"
    integer = True

    @property
    def default(self) -> float:
        return self.thresholds.last_transaction_default

    def flag(self, values: pd.Series) -> pd.Series:
        return values > self.thresholds.stale_days
