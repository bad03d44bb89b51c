# app/schemas.py

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class ObservationIn(BaseModel):
    """
    One trading day as supplied by the client.
    Mirrors direction_ml.dataset.Observation.
    """
    date: str
    price: float
    volume: int = Field(ge=0)


class PredictRequest(BaseModel):
    """
    Body for POST /predict: chronologically ordered observations plus
    optional gradient descent hyperparameters.
    """
    observations: List[ObservationIn]
    learning_rate: Optional[float] = Field(default=None, gt=0)
    max_iterations: Optional[int] = Field(default=None, ge=1)
    convergence_threshold: Optional[float] = Field(default=None, ge=0)
    l2_lambda: Optional[float] = Field(default=None, ge=0)


class Reason(BaseModel):
    """
    One explanation item for the model's decision.
    Mirrors the dicts returned by direction_ml.explain.explain_prediction().
    """
    feature: str          # name of the feature (e.g. "price_trend")
    contribution: float   # weight * normalized feature (log-odds)
    direction: str        # "bull" or "bear"
    text: str             # human-readable explanation string


class Metrics(BaseModel):
    """In-sample metrics of the model trained for this request."""
    accuracy: float
    precision: float
    recall: float
    n_examples: int
    positive_rate: float


class PredictResponse(BaseModel):
    """
    Full response for POST /predict.
    """
    as_of_date: str        # date label of the last observation used
    probability: int       # 0-100
    direction: str         # "Up" or "Down"
    confidence: str        # "STRONG", "MODERATE" or "WEAK"
    iterations: int        # gradient descent updates performed
    metrics: Metrics
    reasons: List[Reason]
