# direction_ml/prediction.py

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .config import MIN_TRAINING_EXAMPLES, NEUTRAL_VALUE, WINDOW_SIZE
from .dataset import Observation
from .features import extract_latest_features, extract_training_examples
from .modeling import InsufficientDataError, TrainedModel, sigmoid, train
from .normalization import normalize


@dataclass(frozen=True)
class PredictionResult:
    probability: int  # 0-100
    direction: str    # "Up" or "Down"


def normalize_features(features, model: TrainedModel) -> np.ndarray:
    """Scale one raw feature vector with the bounds stored on the model."""
    x_raw = np.asarray(features, dtype=float)
    if x_raw.ndim != 1 or x_raw.shape[0] != len(model.weights):
        raise ValueError(
            f"features must be a 1D vector of length {len(model.weights)} "
            f"(got shape {x_raw.shape})"
        )

    x_norm = np.empty_like(x_raw)
    x_norm[0] = 1.0  # bias
    for j in range(1, len(x_raw)):
        value = x_raw[j]
        if np.isnan(value):
            x_norm[j] = NEUTRAL_VALUE
            continue
        bounds = model.bounds[j]
        clamped = min(max(value, bounds.min), bounds.max)
        x_norm[j] = min(max(normalize(clamped, bounds), 0.0), 1.0)
    return x_norm


def predict(features, model: TrainedModel) -> PredictionResult:
    """
    Predict next-day direction for one raw feature vector.

    Probability is reported on a 0-100 integer scale; direction is "Up" when
    the model probability is at least 0.5.
    """
    x_norm = normalize_features(features, model)
    z = float(np.dot(x_norm, np.asarray(model.weights)))
    probability = min(max(float(sigmoid(z)), 0.0), 1.0)

    return PredictionResult(
        # round half up, not numpy's banker's rounding
        probability=int(math.floor(probability * 100 + 0.5)),
        direction="Up" if probability >= 0.5 else "Down",
    )


def predict_next_day(
    observations: Sequence[Observation],
    **hyperparameters,
) -> Tuple[PredictionResult, TrainedModel]:
    """
    Train on every labeled window in `observations` and predict the day after
    the last one.

    Hyperparameters are passed through to train().
    """
    if len(observations) < WINDOW_SIZE + 1:
        raise InsufficientDataError(
            f"Need at least {WINDOW_SIZE + 1} observations (got {len(observations)})."
        )

    examples = extract_training_examples(observations)
    if len(examples) < MIN_TRAINING_EXAMPLES:
        raise InsufficientDataError(
            f"Need at least {MIN_TRAINING_EXAMPLES} valid training examples "
            f"(got {len(examples)} from {len(observations)} observations)."
        )

    model = train(examples, **hyperparameters)
    result = predict(extract_latest_features(observations), model)
    return result, model
