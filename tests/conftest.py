"""
Pytest fixtures for churn scoring tests.
"""

import pandas as pd
import pytest

# Add project root to path
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from scoring.config import DEFAULT_REGISTRY, FactorThresholds
from scoring.factors import Factors
from scoring.scorer import ChurnScorer, generate_sample_data


@pytest.fixture
def default_thresholds():
    """Default factor thresholds."""
    return FactorThresholds()


@pytest.fixture
def registry():
    """Built-in model registry."""
    return DEFAULT_REGISTRY


@pytest.fixture
def deterministic_model(registry):
    """Deterministic default-weight model."""
    return registry.lookup("rules_baseline")


@pytest.fixture
def scorer():
    """ChurnScorer with a fixed seed."""
    return ChurnScorer(seed=42)


@pytest.fixture
def sample_data():
    """100 sample customers with realistic distributions."""
    return generate_sample_data(n_customers=100, seed=42)


@pytest.fixture
def all_factors():
    """Every risk factor active."""
    return Factors(
        low_nps=True,
        high_tickets=True,
        low_success=True,
        stale_activity=True,
        low_adoption=True,
    )


@pytest.fixture
def no_factors():
    """No risk factor active."""
    return Factors()


@pytest.fixture
def high_risk_customer():
    """Customer tripping every threshold."""
    return {
        "nps_score": 3,
        "support_tickets": 20,
        "success_rate": 85,
        "last_transaction": 25,
        "feature_adoption": 20,
    }


@pytest.fixture
def healthy_customer():
    """Customer tripping no threshold."""
    return {
        "nps_score": 8,
        "support_tickets": 2,
        "success_rate": 99,
        "last_transaction": 3,
        "feature_adoption": 70,
    }


@pytest.fixture
def edge_cases():
    """Specific edge cases for testing boundary conditions."""
    return pd.DataFrame([
        # Exactly on every threshold: only low_nps fires (nps <= 4)
        {"customer_id": "EDGE_THRESHOLDS", "nps_score": 4, "support_tickets": 15,
         "success_rate": 90, "last_transaction": 20, "feature_adoption": 30},
        # One step past every threshold
        {"customer_id": "EDGE_PAST", "nps_score": 5, "support_tickets": 16,
         "success_rate": 89.9, "last_transaction": 21, "feature_adoption": 29.9},
        # Nothing usable: every metric falls back to its default
        {"customer_id": "EDGE_GARBAGE", "nps_score": "n/a", "support_tickets": "",
         "success_rate": "unknown", "last_transaction": None, "feature_adoption": "lots"},
    ])


@pytest.fixture
def single_row_csv():
    """Minimal batch input with one healthy customer."""
    return (
        "nps_score,support_tickets,success_rate,last_transaction,feature_adoption\n"
        "8,2,99,3,70\n"
    )
