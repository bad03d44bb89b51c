# app/main.py

from __future__ import annotations

from dataclasses import asdict

from fastapi import FastAPI, HTTPException

from direction_ml.dataset import Observation
from direction_ml.explain import confidence_label, explain_prediction
from direction_ml.features import extract_latest_features, extract_training_examples
from direction_ml.modeling import InsufficientDataError, evaluate_model
from direction_ml.prediction import predict_next_day
from app.schemas import Metrics, PredictRequest, PredictResponse, Reason

app = FastAPI(
    title="Stock Direction Predictor",
    description=(
        "Predicts whether the next trading day's close will be higher or lower.\n\n"
        "Model = logistic regression trained per request on 5-day window features "
        "of the submitted price/volume history."
    ),
    version="1.0.0",
)


# ---------- ROUTES ----------
@app.get("/", tags=["meta"])
def root():
    return {
        "message": "Welcome to the Stock Direction Predictor API. See /docs for interactive documentation."
    }


@app.get("/health", tags=["meta"])
def health_check():
    return {"status": "ok"}


@app.post("/predict", response_model=PredictResponse, tags=["prediction"])
def predict_direction(request: PredictRequest):
    """
    Train on the submitted history and predict the direction of the next day.

    Observations must be ordered oldest-first. At least 6 are required, and
    at least 2 of the resulting windows must have valid features.
    """
    observations = [
        Observation(date=o.date, price=o.price, volume=o.volume)
        for o in request.observations
    ]

    # Only pass the hyperparameters the client actually set
    hyperparameters = {
        name: value
        for name, value in {
            "learning_rate": request.learning_rate,
            "max_iterations": request.max_iterations,
            "convergence_threshold": request.convergence_threshold,
            "l2_lambda": request.l2_lambda,
        }.items()
        if value is not None
    }

    # 1) Train + predict
    try:
        result, model = predict_next_day(observations, **hyperparameters)
    except InsufficientDataError as e:
        raise HTTPException(status_code=422, detail=str(e))

    # 2) Explain + in-sample metrics
    latest = extract_latest_features(observations)
    reasons = [Reason(**r) for r in explain_prediction(latest, model, top_k=5)]
    metrics = evaluate_model(model, extract_training_examples(observations))

    # 3) Final response
    return PredictResponse(
        as_of_date=observations[-1].date,
        probability=result.probability,
        direction=result.direction,
        confidence=confidence_label(result.probability),
        iterations=model.iterations,
        metrics=Metrics(**asdict(metrics)),
        reasons=reasons,
    )
