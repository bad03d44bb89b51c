# direction_ml/modeling.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
from sklearn.metrics import accuracy_score, precision_score, recall_score

from .config import (
    DEFAULT_CONVERGENCE_THRESHOLD,
    DEFAULT_L2_LAMBDA,
    DEFAULT_LEARNING_RATE,
    DEFAULT_MAX_ITERATIONS,
    MIN_TRAINING_EXAMPLES,
    STALL_PATIENCE,
)
from .features import TrainingExample
from .normalization import NormalizationBounds, compute_bounds, normalize_column


class InsufficientDataError(ValueError):
    """Raised when there are too few usable examples to train on."""


@dataclass(frozen=True)
class TrainedModel:
    weights: Tuple[float, ...]
    bounds: Tuple[NormalizationBounds, ...]
    iterations: int  # gradient updates performed
    cost: float      # regularized cost after the last update


@dataclass
class TrainingMetrics:
    accuracy: float
    precision: float
    recall: float
    n_examples: int
    positive_rate: float


def sigmoid(z):
    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(-z))


def compute_cost(X: np.ndarray, y: np.ndarray, theta: np.ndarray, l2_lambda: float) -> float:
    """Mean negative log-likelihood + L2 penalty (bias excluded)."""
    m = X.shape[0]
    h = sigmoid(X @ theta)
    with np.errstate(divide="ignore", invalid="ignore"):
        log_likelihood = y * np.log(h) + (1 - y) * np.log(1 - h)
    cost = -log_likelihood.sum() / m
    reg = l2_lambda * np.sum(theta[1:] ** 2) / (2 * m)
    return float(cost + reg)


def compute_gradient(X: np.ndarray, y: np.ndarray, theta: np.ndarray, l2_lambda: float) -> np.ndarray:
    m = X.shape[0]
    h = sigmoid(X @ theta)
    gradient = X.T @ (h - y) / m
    gradient[1:] += (l2_lambda / m) * theta[1:]
    return gradient


def _as_matrix(examples: Sequence[TrainingExample]) -> Tuple[np.ndarray, np.ndarray]:
    widths = {len(ex.features) for ex in examples}
    if len(widths) != 1:
        raise ValueError(f"All examples must have the same number of features (got {sorted(widths)}).")

    X = np.vstack([np.asarray(ex.features, dtype=float) for ex in examples])
    y = np.array([ex.label for ex in examples], dtype=float)
    return X, y


def normalize_matrix(X: np.ndarray, bounds: Sequence[NormalizationBounds]) -> np.ndarray:
    """Column 0 (bias) is forced to 1, every other column is min-max scaled."""
    X_norm = np.empty_like(X, dtype=float)
    X_norm[:, 0] = 1.0
    for j in range(1, X.shape[1]):
        X_norm[:, j] = normalize_column(X[:, j], bounds[j])
    return X_norm


def train(
    examples: Sequence[TrainingExample],
    learning_rate: float = DEFAULT_LEARNING_RATE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    convergence_threshold: float = DEFAULT_CONVERGENCE_THRESHOLD,
    l2_lambda: float = DEFAULT_L2_LAMBDA,
) -> TrainedModel:
    """
    Fit an L2-regularized logistic regression with batch gradient descent.

    Bounds are computed from the raw training features and stored on the
    model so predict() can reproduce the same scaling. Training stops after
    `max_iterations` updates, or earlier once the cost changes by less than
    `convergence_threshold` for STALL_PATIENCE consecutive iterations.
    """
    m = len(examples)
    if m < MIN_TRAINING_EXAMPLES:
        raise InsufficientDataError(
            f"Need at least {MIN_TRAINING_EXAMPLES} valid training examples (got {m})."
        )

    X, y = _as_matrix(examples)
    n = X.shape[1]

    bounds = [NormalizationBounds(min=1.0, max=1.0)]
    bounds.extend(compute_bounds(X[:, j]) for j in range(1, n))

    X_norm = normalize_matrix(X, bounds)

    theta = np.ones(n)
    prev_cost = float("inf")
    cost = prev_cost
    stalls = 0
    iterations = 0

    for _ in range(max_iterations):
        theta = theta - learning_rate * compute_gradient(X_norm, y, theta, l2_lambda)
        iterations += 1

        cost = compute_cost(X_norm, y, theta, l2_lambda)
        if abs(prev_cost - cost) < convergence_threshold:
            stalls += 1
            if stalls >= STALL_PATIENCE:
                break
        else:
            stalls = 0
        prev_cost = cost

    print(f"[train] m={m}, iterations={iterations}, cost={cost:.6f}")

    return TrainedModel(
        weights=tuple(float(t) for t in theta),
        bounds=tuple(bounds),
        iterations=iterations,
        cost=cost,
    )


def predict_proba(model: TrainedModel, X: np.ndarray) -> np.ndarray:
    """Probabilities (0-1) for a raw feature matrix, scaled with the model's bounds."""
    X_norm = normalize_matrix(np.atleast_2d(np.asarray(X, dtype=float)), model.bounds)
    return np.clip(sigmoid(X_norm @ np.asarray(model.weights)), 0.0, 1.0)


def evaluate_model(model: TrainedModel, examples: Sequence[TrainingExample]) -> TrainingMetrics:
    """In-sample metrics of a trained model on the examples it was fit on."""
    X, y = _as_matrix(examples)
    y_true = y.astype(int)
    y_pred = (predict_proba(model, X) >= 0.5).astype(int)

    return TrainingMetrics(
        accuracy=float(accuracy_score(y_true, y_pred)),
        precision=float(precision_score(y_true, y_pred, zero_division=0)),
        recall=float(recall_score(y_true, y_pred, zero_division=0)),
        n_examples=len(examples),
        positive_rate=float(np.mean(y_true)),
    )
