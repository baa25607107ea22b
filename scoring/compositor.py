"""
Probability composition.

Combines a model's weights with evaluated factors into a churn
probability and a confidence value. Randomness is only ever drawn from
the injected generator, and never for deterministic models.
"""

from typing import Optional, Tuple

import numpy as np

from .config import (
    BASE_PROBABILITY,
    FACTOR_NAMES,
    FALLBACK_CONFIDENCE,
    FALLBACK_CONFIDENCE_JITTER,
    MAX_CONFIDENCE,
    ScoringModel,
)
from .factors import Factors


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return min(max(value, low), high)


class ProbabilityCompositor:
    """
    Turns factors into (probability, confidence) for a given model.

    Args:
        rng: Random source for non-deterministic models. Pass a seeded
            generator (np.random.default_rng(seed)) for reproducible runs.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def base_probability(self, factors: Factors, model: ScoringModel) -> float:
        """Starting probability plus the weight of every active factor."""
        probability = BASE_PROBABILITY + model.base_probability
        flags = factors.to_dict()
        for name in FACTOR_NAMES:
            if flags[name]:
                probability += model.get_weight(name)
        return probability

    def confidence(self, model: ScoringModel) -> float:
        """
        Confidence from reported metrics.

        ROC-AUC wins over accuracy. Models reporting neither start from
        0.75 and, if non-deterministic, get up to 0.18 of jitter.
        """
        metrics = model.metrics
        if metrics.roc_auc is not None:
            confidence = metrics.roc_auc / 100
        elif metrics.accuracy is not None:
            confidence = metrics.accuracy / 100
        else:
            confidence = FALLBACK_CONFIDENCE
            if not model.deterministic:
                confidence += self.rng.uniform(0.0, FALLBACK_CONFIDENCE_JITTER)
        return clamp(float(confidence), 0.0, MAX_CONFIDENCE)

    def compose(self, factors: Factors, model: ScoringModel) -> Tuple[float, float]:
        """
        Compose churn probability and confidence.

        Returns:
            (probability in [0, 1], confidence in [0, 0.99])
        """
        probability = self.base_probability(factors, model)
        if not model.deterministic:
            amplitude = model.noise_amplitude
            probability += self.rng.uniform(-amplitude, amplitude)
        probability = clamp(float(probability), 0.0, 1.0)
        return probability, self.confidence(model)
