# direction_ml/__init__.py

"""
Core ML engine for the Stock Direction Predictor.

This package handles:
- loading daily observations from historical quote CSVs
- feature engineering over a 5-day sliding window
- min-max normalization with stored bounds
- model training (L2-regularized logistic regression, batch gradient descent)
- next-day prediction and explanation
"""

from .dataset import Observation, load_observations
from .features import TrainingExample, extract_latest_features, extract_training_examples
from .modeling import InsufficientDataError, TrainedModel, evaluate_model, train
from .normalization import NormalizationBounds, compute_bounds, normalize
from .prediction import PredictionResult, predict, predict_next_day

__all__ = [
    "Observation",
    "load_observations",
    "TrainingExample",
    "extract_training_examples",
    "extract_latest_features",
    "InsufficientDataError",
    "TrainedModel",
    "train",
    "evaluate_model",
    "NormalizationBounds",
    "compute_bounds",
    "normalize",
    "PredictionResult",
    "predict",
    "predict_next_day",
]
