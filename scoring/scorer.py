"""
Main ChurnScorer class - orchestrates factor evaluation, probability
composition and risk classification.

Usage:
    from scoring import ChurnScorer

    # Default registry, unseeded randomness
    scorer = ChurnScorer()
    result = scorer.predict_one({"nps_score": 3, "support_tickets": 20})

    # Reproducible scoring of a whole table
    scorer = ChurnScorer(seed=7)
    scored = scorer.score(customers_df, model_id="ann")
    print(scored.predictions[["churn_probability", "risk_level"]])
    print(scored.summary())
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional

import numpy as np
import pandas as pd

from .config import (
    DEFAULT_REGISTRY,
    FACTOR_NAMES,
    RISK_LEVEL_ORDER,
    FactorThresholds,
    ModelRegistry,
    get_risk_level,
)
from .compositor import ProbabilityCompositor
from .factors import FactorEvaluator, Factors
from .schemas import PREDICTION_OUTPUT_SCHEMA


@dataclass(frozen=True)
class PredictionResult:
    """Churn prediction for one customer."""

    churn_probability: float
    risk_level: str
    confidence: float
    factors: Factors
    model_id: str

    def to_dict(self) -> dict:
        return {
            "churn_probability": self.churn_probability,
            "risk_level": self.risk_level,
            "confidence": self.confidence,
            "factors": self.factors.to_dict(),
            "model_id": self.model_id,
        }


@dataclass
class ScoringResult:
    """
    Container for scoring results with factor breakdown.

    Attributes:
        predictions: One row per input customer (same index as the input)
            with factor flags and the prediction columns
        results: PredictionResult per customer, in input order
    """

    predictions: pd.DataFrame
    results: list[PredictionResult] = field(default_factory=list)

    def get_high_risk(self, min_level: str = "High") -> pd.DataFrame:
        """
        Get customers at or above a risk level.

        Args:
            min_level: Minimum risk level ("Low", "Medium", "High")

        Returns:
            DataFrame filtered to customers at or above the specified level
        """
        min_idx = RISK_LEVEL_ORDER.index(min_level)
        valid_levels = RISK_LEVEL_ORDER[min_idx:]
        return self.predictions[self.predictions["risk_level"].isin(valid_levels)]

    def summary(self) -> pd.DataFrame:
        """
        Counts and average probability per risk level.

        Returns:
            DataFrame indexed by risk level (all three levels present)
        """
        return (
            self.predictions.groupby("risk_level")
            .agg(
                count=("churn_probability", "count"),
                avg_probability=("churn_probability", "mean"),
            )
            .reindex(RISK_LEVEL_ORDER)
            .fillna({"count": 0})
            .astype({"count": int})
            .round(4)
        )

    def factor_breakdown(self) -> pd.DataFrame:
        """
        Share of customers flagged by each factor.

        Returns:
            DataFrame indexed by factor name
        """
        stats = {}
        for name in FACTOR_NAMES:
            stats[name] = {
                "count": int(self.predictions[name].sum()),
                "share": float(self.predictions[name].mean()) if len(self.predictions) else 0.0,
            }
        return pd.DataFrame(stats).T.round(3)


class ChurnScorer:
    """
    Rule-based churn scoring engine.

    Factors are evaluated for the whole table with pandas operations;
    composition then walks the rows in input order so that random draws
    for non-deterministic models happen in a reproducible sequence.

    Pipeline:
    - Factor Evaluator: five boolean threshold flags
    - Probability Compositor: weights + noise -> probability, confidence
    - Risk Classifier: probability -> Low / Medium / High
    """

    RESULT_COLUMNS = ["churn_probability", "confidence", "risk_level", "model_id"]

    def __init__(
        self,
        registry: Optional[ModelRegistry] = None,
        thresholds: Optional[FactorThresholds] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize scorer.

        Args:
            registry: ModelRegistry to resolve model ids. Uses DEFAULT_REGISTRY if None.
            thresholds: FactorThresholds. Uses DEFAULT_THRESHOLDS if None.
            rng: Random generator for non-deterministic models
            seed: Seed for a fresh generator (ignored when rng is given)
        """
        self.registry = registry or DEFAULT_REGISTRY
        self.evaluator = FactorEvaluator(thresholds)
        if rng is None:
            rng = np.random.default_rng(seed)
        self.compositor = ProbabilityCompositor(rng)

    def _predict(self, factors: Factors, model_id: Optional[str]) -> PredictionResult:
        model = self.registry.lookup(model_id)
        probability, confidence = self.compositor.compose(factors, model)
        return PredictionResult(
            churn_probability=probability,
            risk_level=get_risk_level(probability),
            confidence=confidence,
            factors=factors,
            model_id=model.id,
        )

    def predict_one(
        self,
        raw_fields: Mapping,
        model_id: Optional[str] = None,
    ) -> PredictionResult:
        """
        Score a single customer.

        Args:
            raw_fields: Field name -> string or number. Keys are matched
                case-insensitively.
            model_id: Registry id; unknown or missing ids use the default model

        Returns:
            PredictionResult
        """
        record = {str(key).strip().lower(): value for key, value in raw_fields.items()}
        factors = self.evaluator.evaluate(record)
        return self._predict(factors, model_id)

    def score(self, df: pd.DataFrame, model_id: Optional[str] = None) -> ScoringResult:
        """
        Calculate churn predictions for all customers.

        Args:
            df: DataFrame with one customer per row
            model_id: Registry id; unknown or missing ids use the default model

        Returns:
            ScoringResult with predictions in input order

        Example:
            >>> scorer = ChurnScorer(seed=1)
            >>> result = scorer.score(customer_df, "rules_baseline")
            >>> at_risk = result.get_high_risk("Medium")
        """
        flags = self.evaluator.evaluate_frame(df)

        results = [
            self._predict(Factors.from_row(row), model_id)
            for _, row in flags.iterrows()
        ]

        predictions = flags.copy()
        predictions["churn_probability"] = pd.Series(
            [r.churn_probability for r in results], index=flags.index, dtype=float
        )
        predictions["confidence"] = pd.Series(
            [r.confidence for r in results], index=flags.index, dtype=float
        )
        predictions["risk_level"] = pd.Series(
            [r.risk_level for r in results], index=flags.index, dtype=object
        )
        predictions["model_id"] = pd.Series(
            [r.model_id for r in results], index=flags.index, dtype=object
        )

        return ScoringResult(
            predictions=PREDICTION_OUTPUT_SCHEMA.validate(predictions),
            results=results,
        )


def generate_sample_data(n_customers: int = 100, seed: int = 42) -> pd.DataFrame:
    """
    Generate realistic sample customer data for testing.

    Distributions:
    - NPS 1-10, skewed towards promoters
    - Support tickets ~ Poisson(8)
    - Success rate 80-100%
    - Days since last transaction 0-45
    - Feature adoption 5-95%
    """
    rng = np.random.default_rng(seed)

    nps = rng.choice(
        np.arange(1, 11),
        size=n_customers,
        p=[0.04, 0.05, 0.06, 0.08, 0.09, 0.10, 0.14, 0.16, 0.15, 0.13],
    )
    tickets = rng.poisson(lam=8, size=n_customers)
    success_rate = np.clip(rng.normal(loc=94, scale=5, size=n_customers), 80, 100)
    last_transaction = rng.integers(0, 46, size=n_customers)
    feature_adoption = np.clip(rng.normal(loc=55, scale=20, size=n_customers), 5, 95)
    contract_type = rng.choice(["Annual", "Monthly"], size=n_customers, p=[0.55, 0.45])

    return pd.DataFrame(
        {
            "customer_id": [f"C{1000 + i}" for i in range(n_customers)],
            "nps_score": nps,
            "support_tickets": tickets,
            "success_rate": success_rate.round(1),
            "last_transaction": last_transaction,
            "feature_adoption": feature_adoption.round(1),
            "contract_type": contract_type,
        }
    )


def predict_one(
    raw_fields: Mapping,
    model_id: Optional[str] = None,
    scorer: Optional[ChurnScorer] = None,
) -> PredictionResult:
    """Score one customer with a fresh (or the given) scorer."""
    return (scorer or ChurnScorer()).predict_one(raw_fields, model_id)
