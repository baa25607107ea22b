"""
Scoring configuration for churn prediction.

Factor thresholds, field defaults and default weights are defined here
together with the registry of named scoring models. Models are flat,
immutable configuration records; nothing in this module draws random
numbers or evaluates customers.

Risk tiers:
- High: probability >= 0.6
- Medium: 0.3 <= probability < 0.6
- Low: below 0.3
"""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

import pandas as pd
import yaml

from .exceptions import ConfigurationError


FACTOR_NAMES = (
    "low_nps",
    "high_tickets",
    "low_success",
    "stale_activity",
    "low_adoption",
)

# Used when a model does not configure a weight for a factor
DEFAULT_FACTOR_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "low_nps": 0.25,
    "high_tickets": 0.15,
    "low_success": 0.10,
    "stale_activity": 0.10,
    "low_adoption": 0.10,
})

BASE_PROBABILITY = 0.15
MAX_CONFIDENCE = 0.99
FALLBACK_CONFIDENCE = 0.75
FALLBACK_CONFIDENCE_JITTER = 0.18


@dataclass
class FactorThresholds:
    """
    Thresholds and field defaults for the five risk factors.

    Thresholds are fixed for every model. A field that is missing or
    not numeric is read as its default.
    """

    # === Low NPS: nps_score <= 4 ===
    nps_max: int = 4
    nps_default: int = 0

    # === High support load: support_tickets > 15 ===
    tickets_min: int = 15
    tickets_default: int = 0

    # === Low payment success: success_rate < 90 ===
    success_min: float = 90.0
    success_default: float = 100.0

    # === Stale activity: last_transaction > 20 days ago ===
    stale_days: int = 20
    last_transaction_default: int = 0

    # === Low adoption: feature_adoption < 30 ===
    adoption_min: float = 30.0
    adoption_default: float = 50.0


DEFAULT_THRESHOLDS = FactorThresholds()


# Ordered highest first; first match wins
RISK_LEVELS: List[Tuple[str, float]] = [
    ("High", 0.6),
    ("Medium", 0.3),
    ("Low", 0.0),
]
RISK_LEVEL_ORDER = ["Low", "Medium", "High"]


def get_risk_level(probability: float) -> str:
    """Map a churn probability to a risk tier."""
    for level, lower in RISK_LEVELS:
        if probability >= lower:
            return level
    return "Low"


@dataclass(frozen=True)
class ModelMetrics:
    """Reported quality figures for a model, in percent."""

    accuracy: Optional[float] = None
    roc_auc: Optional[float] = None
    cv_accuracy: Optional[float] = None
    precision: Optional[float] = None
    recall: Optional[float] = None
    f1_score: Optional[float] = None
    cv_auc_mean: Optional[float] = None
    cv_auc_std: Optional[float] = None


@dataclass(frozen=True)
class ScoringModel:
    """
    A named scoring configuration.

    Attributes:
        id: Registry key
        name: Display name
        weights: Factor name -> probability increment. Factors left out
            use DEFAULT_FACTOR_WEIGHTS.
        base_probability: Adjustment added to the 0.15 starting probability
        noise_amplitude: Half-width of the uniform noise band
        deterministic: If True, no randomness is applied at all
        metrics: Reported quality figures (drive confidence)
    """

    id: str
    name: str
    weights: Mapping[str, float] = field(default_factory=dict)
    base_probability: float = 0.0
    noise_amplitude: float = 0.05
    deterministic: bool = False
    metrics: ModelMetrics = field(default_factory=ModelMetrics)
    description: str = ""

    def __post_init__(self):
        # Freeze the weights so a registered model can never be mutated
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))

    def get_weight(self, factor: str) -> float:
        """Configured weight for a factor, with fallback to the default."""
        return self.weights.get(factor, DEFAULT_FACTOR_WEIGHTS[factor])

    @classmethod
    def from_dict(cls, data: dict) -> "ScoringModel":
        """Build a model from a plain mapping (e.g. parsed YAML)."""
        data = dict(data)
        unknown = set(data.get("weights", {})) - set(FACTOR_NAMES)
        if unknown:
            raise ConfigurationError(f"Unknown factor weights: {sorted(unknown)}")
        if data.get("noise_amplitude", 0.0) < 0:
            raise ConfigurationError(
                f"noise_amplitude must be >= 0 for model {data.get('id')!r}"
            )
        data["metrics"] = ModelMetrics(**(data.get("metrics") or {}))
        return cls(**data)


class ModelRegistry:
    """
    Read-only lookup table of scoring models.

    The first registered model is the default. Lookups for unknown or
    missing ids resolve to the default instead of failing.
    """

    def __init__(self, models: List[ScoringModel]):
        if not models:
            raise ConfigurationError("Model registry must contain at least one model")
        self._models: Dict[str, ScoringModel] = {}
        for model in models:
            if model.id in self._models:
                raise ConfigurationError(f"Duplicate model id: {model.id!r}")
            self._models[model.id] = model
        self._default = models[0]

    @property
    def default(self) -> ScoringModel:
        return self._default

    @property
    def ids(self) -> List[str]:
        return list(self._models)

    def lookup(self, model_id: Optional[str] = None) -> ScoringModel:
        """Return the model for an id, or the default model."""
        if model_id is None:
            return self._default
        return self._models.get(model_id, self._default)

    def __contains__(self, model_id: str) -> bool:
        return model_id in self._models

    def __iter__(self):
        return iter(self._models.values())

    def __len__(self) -> int:
        return len(self._models)

    def best_model(self) -> ScoringModel:
        """Model with the highest reported ROC-AUC (default if none report it)."""
        rated = [m for m in self if m.metrics.roc_auc is not None]
        if not rated:
            return self._default
        return max(rated, key=lambda m: m.metrics.roc_auc)

    def report(self) -> pd.DataFrame:
        """
        Model performance report.

        Returns:
            DataFrame indexed by model id with one column per metric
        """
        rows = []
        for model in self:
            rows.append({
                "model_id": model.id,
                "name": model.name,
                "deterministic": model.deterministic,
                **asdict(model.metrics),
            })
        return pd.DataFrame(rows).set_index("model_id")

    @classmethod
    def from_yaml(cls, path: Path | str) -> "ModelRegistry":
        """
        Load a registry from YAML.

        Expected layout:
            models:
              - id: random_forest
                name: Random Forest
                noise_amplitude: 0.05
                weights: {low_nps: 0.25}
                metrics: {accuracy: 80.57, roc_auc: 81.29}
        """
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        try:
            models = [ScoringModel.from_dict(m) for m in data.get("models", [])]
        except TypeError as e:
            raise ConfigurationError(f"Invalid model definition in {path}: {e}") from e
        return cls(models)


DEFAULT_MODELS = [
    ScoringModel(
        id="random_forest",
        name="Random Forest",
        description="Balanced ensemble model",
        noise_amplitude=0.05,
        weights={
            "low_nps": 0.25,
            "high_tickets": 0.15,
            "low_success": 0.10,
            "stale_activity": 0.10,
            "low_adoption": 0.10,
        },
        metrics=ModelMetrics(
            accuracy=80.57,
            roc_auc=81.29,
            precision=62.52,
            recall=51.23,
            f1_score=56.31,
            cv_auc_mean=81.76,
            cv_auc_std=0.48,
        ),
    ),
    ScoringModel(
        id="ann",
        name="Ensembled",
        description="ANN trained (rmsprop, relu, epochs=16, batch=256)",
        noise_amplitude=0.02,
        weights={
            "low_nps": 0.24,
            "high_tickets": 0.16,
            "low_success": 0.11,
            "stale_activity": 0.09,
            "low_adoption": 0.12,
        },
        metrics=ModelMetrics(
            accuracy=80.57,
            cv_accuracy=80.99,
            roc_auc=80.99,
            precision=60.00,
            recall=58.00,
            f1_score=59.00,
            cv_auc_std=0.25,
        ),
    ),
    ScoringModel(
        id="xgboost",
        name="XGBoost",
        description="Fast gradient boosting with competitive performance",
        noise_amplitude=0.05,
        metrics=ModelMetrics(
            accuracy=80.34,
            roc_auc=80.82,
            precision=60.87,
            recall=54.73,
            f1_score=57.64,
            cv_auc_mean=81.17,
            cv_auc_std=0.44,
        ),
    ),
    ScoringModel(
        id="lightgbm",
        name="LightGBM",
        description="Good balance of speed and performance",
        noise_amplitude=0.05,
        metrics=ModelMetrics(
            accuracy=80.65,
            roc_auc=81.0,
            precision=80.0,
            recall=81.0,
            f1_score=80.0,
            cv_auc_mean=80.9,
            cv_auc_std=0.40,
        ),
    ),
    ScoringModel(
        id="rules_baseline",
        name="Transparent Rules",
        description="Default weights, no noise, fully reproducible",
        noise_amplitude=0.0,
        deterministic=True,
    ),
]

# Default registry instance
DEFAULT_REGISTRY = ModelRegistry(DEFAULT_MODELS)
