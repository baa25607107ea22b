"""
Unit tests for individual risk factor components.
"""

import pandas as pd
import pytest

from scoring.components.nps import LowNPSFactor
from scoring.components.tickets import HighTicketsFactor
from scoring.components.success import LowSuccessFactor
from scoring.components.activity import StaleActivityFactor
from scoring.components.adoption import LowAdoptionFactor
from scoring.factors import FactorEvaluator, Factors


class TestLowNPSFactor:
    """Tests for NPS detractor flag."""

    def test_threshold_inclusive(self, default_thresholds):
        """nps_score <= 4 is low."""
        factor = LowNPSFactor(default_thresholds)
        df = pd.DataFrame({"nps_score": [1, 4, 5, 10]})
        flags = factor.evaluate(df)

        assert flags.tolist() == [True, True, False, False]

    def test_fraction_truncated(self, default_thresholds):
        """4.9 is read as 4."""
        factor = LowNPSFactor(default_thresholds)
        df = pd.DataFrame({"nps_score": [4.9, "4.9", 5.1]})
        flags = factor.evaluate(df)

        assert flags.tolist() == [True, True, False]

    def test_malformed_uses_default(self, default_thresholds):
        """Default NPS of 0 counts as low."""
        factor = LowNPSFactor(default_thresholds)
        df = pd.DataFrame({"nps_score": ["abc", "", None, "5"]})
        flags = factor.evaluate(df)

        assert flags.tolist() == [True, True, True, False]

    def test_missing_column_uses_default(self, default_thresholds):
        """Missing column should not raise."""
        factor = LowNPSFactor(default_thresholds)
        df = pd.DataFrame({"OTHER_COLUMN": [1, 2]})
        flags = factor.evaluate(df)

        assert flags.tolist() == [True, True]


class TestHighTicketsFactor:
    """Tests for support load flag."""

    def test_threshold_exclusive(self, default_thresholds):
        """support_tickets > 15 is high."""
        factor = HighTicketsFactor(default_thresholds)
        df = pd.DataFrame({"support_tickets": [0, 15, 16, 40]})
        flags = factor.evaluate(df)

        assert flags.tolist() == [False, False, True, True]

    def test_numeric_strings_and_whitespace(self, default_thresholds):
        factor = HighTicketsFactor(default_thresholds)
        df = pd.DataFrame({"support_tickets": [" 16 ", "15", "lots"]})
        flags = factor.evaluate(df)

        assert flags.tolist() == [True, False, False]


class TestLowSuccessFactor:
    """Tests for payment success flag."""

    def test_threshold_exclusive(self, default_thresholds):
        """success_rate < 90 is low."""
        factor = LowSuccessFactor(default_thresholds)
        df = pd.DataFrame({"success_rate": [85.0, 89.9, 90.0, 99.5]})
        flags = factor.evaluate(df)

        assert flags.tolist() == [True, True, False, False]

    def test_missing_defaults_to_healthy(self, default_thresholds):
        """Default success rate is 100."""
        factor = LowSuccessFactor(default_thresholds)
        df = pd.DataFrame({"success_rate": ["", None, "n/a"]})
        flags = factor.evaluate(df)

        assert not flags.any()


class TestStaleActivityFactor:
    """Tests for transaction staleness flag."""

    def test_threshold_exclusive(self, default_thresholds):
        """last_transaction > 20 days is stale."""
        factor = StaleActivityFactor(default_thresholds)
        df = pd.DataFrame({"last_transaction": [0, 5, 20, 21, 60]})
        flags = factor.evaluate(df)

        assert flags.tolist() == [False, False, False, True, True]

    def test_fraction_truncated(self, default_thresholds):
        """20.9 days is read as 20."""
        factor = StaleActivityFactor(default_thresholds)
        df = pd.DataFrame({"last_transaction": [20.9, 21.2]})
        flags = factor.evaluate(df)

        assert flags.tolist() == [False, True]


class TestLowAdoptionFactor:
    """Tests for feature adoption flag."""

    def test_threshold_exclusive(self, default_thresholds):
        """feature_adoption < 30 is low."""
        factor = LowAdoptionFactor(default_thresholds)
        df = pd.DataFrame({"feature_adoption": [10, 29.9, 30, 80]})
        flags = factor.evaluate(df)

        assert flags.tolist() == [True, True, False, False]

    def test_missing_defaults_to_moderate(self, default_thresholds):
        """Default adoption is 50."""
        factor = LowAdoptionFactor(default_thresholds)
        df = pd.DataFrame({"feature_adoption": ["", "unknown"]})
        flags = factor.evaluate(df)

        assert not flags.any()


class TestFactorEvaluator:
    """Tests for evaluating all factors together."""

    def test_all_factors_fire(self, high_risk_customer):
        factors = FactorEvaluator().evaluate(high_risk_customer)

        assert factors == Factors(True, True, True, True, True)
        assert len(factors.active()) == 5

    def test_no_factors_fire(self, healthy_customer):
        factors = FactorEvaluator().evaluate(healthy_customer)

        assert factors == Factors()
        assert factors.active() == []

    def test_empty_record_uses_defaults(self):
        """Only low_nps fires on an empty record (default NPS is 0)."""
        factors = FactorEvaluator().evaluate({})

        assert factors.active() == ["low_nps"]

    def test_edge_cases(self, edge_cases):
        flags = FactorEvaluator().evaluate_frame(edge_cases)

        on_threshold = flags.iloc[0]
        assert on_threshold.tolist() == [True, False, False, False, False]

        past_threshold = flags.iloc[1]
        assert past_threshold.tolist() == [False, True, True, True, True]

        garbage = flags.iloc[2]
        assert garbage.tolist() == [True, False, False, False, False]

    def test_frame_keeps_index(self, sample_data):
        data = sample_data.set_index("customer_id")
        flags = FactorEvaluator().evaluate_frame(data)

        assert list(flags.index) == list(data.index)
        assert list(flags.columns) == [
            "low_nps", "high_tickets", "low_success", "stale_activity", "low_adoption",
        ]
        assert (flags.dtypes == bool).all()

    def test_empty_frame(self):
        flags = FactorEvaluator().evaluate_frame(pd.DataFrame())

        assert len(flags) == 0
