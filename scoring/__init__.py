"""
Churn Risk Scoring Package

A transparent, rule-based scorer that turns five customer metrics into a
churn probability, confidence and risk tier, for single records or whole
CSV batches.
"""

from .config import (
    DEFAULT_REGISTRY,
    FactorThresholds,
    ModelMetrics,
    ModelRegistry,
    ScoringModel,
    get_risk_level,
)
from .exceptions import (
    ChurnPredictionError,
    ConfigurationError,
    EmptyInputError,
    FormatError,
    ValidationError,
)
from .factors import FactorEvaluator, Factors
from .compositor import ProbabilityCompositor
from .scorer import ChurnScorer, PredictionResult, ScoringResult, generate_sample_data, predict_one
from .csv_codec import parse_csv, serialize_csv
from .batch import BatchExecutor, BatchRun, BatchSummary, predict_batch

__all__ = [
    "ChurnScorer",
    "PredictionResult",
    "ScoringResult",
    "predict_one",
    "predict_batch",
    "BatchExecutor",
    "BatchRun",
    "BatchSummary",
    "FactorEvaluator",
    "Factors",
    "ProbabilityCompositor",
    "ModelRegistry",
    "ScoringModel",
    "ModelMetrics",
    "FactorThresholds",
    "DEFAULT_REGISTRY",
    "get_risk_level",
    "parse_csv",
    "serialize_csv",
    "generate_sample_data",
    "ChurnPredictionError",
    "ValidationError",
    "FormatError",
    "EmptyInputError",
    "ConfigurationError",
]
__version__ = "1.0.0"
