# direction_ml/explain.py

from __future__ import annotations

from typing import Dict, List

import numpy as np

from .config import CONFIDENCE_THRESHOLDS, FEATURE_COLUMNS
from .modeling import TrainedModel
from .prediction import normalize_features


# Human-readable explanation templates for features
EXPLANATION_TEMPLATES: Dict[str, Dict[str, str]] = {
    "avg_price": {
        "bull": "The 5-day average price sits high in its historical range, which the model reads as upward pressure.",
        "bear": "The 5-day average price sits low in its historical range, which the model reads as downward pressure.",
    },
    "avg_volume": {
        "bull": "Recent average volume supports a move higher.",
        "bear": "Recent average volume weighs against a move higher.",
    },
    "price_change": {
        "bull": "Today's price change versus the prior day points upward.",
        "bear": "Today's price change versus the prior day points downward.",
    },
    "volume_change": {
        "bull": "The change in volume versus the prior day is consistent with buying interest.",
        "bear": "The change in volume versus the prior day is consistent with fading interest.",
    },
    "price_change_pct": {
        "bull": "The percentage price change favours continuation upward.",
        "bear": "The percentage price change favours a pullback.",
    },
    "volume_change_pct": {
        "bull": "The percentage volume change strengthens recent price action.",
        "bear": "The percentage volume change weakens recent price action.",
    },
    "price_volatility": {
        "bull": "Price volatility over the window historically preceded gains.",
        "bear": "Price volatility over the window historically preceded declines.",
    },
    "price_trend": {
        "bull": "Prices have mostly been rising day over day, indicating upward momentum.",
        "bear": "Prices have mostly been flat or falling day over day, indicating weakness.",
    },
    "volume_trend": {
        "bull": "Volume has been building day over day, supporting the current move.",
        "bear": "Volume has been drying up day over day, undermining the current move.",
    },
}


def confidence_label(probability: int) -> str:
    """
    Convert a 0-100 probability into a confidence label based on its
    distance from the 50 coin-flip line.
    """
    distance = abs(probability - 50)
    if distance >= CONFIDENCE_THRESHOLDS["strong"]:
        return "STRONG"
    elif distance >= CONFIDENCE_THRESHOLDS["moderate"]:
        return "MODERATE"
    else:
        return "WEAK"


def explain_prediction(
    features,
    model: TrainedModel,
    top_k: int = 5,
) -> List[Dict[str, object]]:
    """
    Explain a single prediction using the logistic regression weights.

    Returns a list of dicts with:
      - feature
      - contribution (weight * normalized feature, in log-odds)
      - direction ("bull" or "bear")
      - text (human-readable explanation)
    """
    x_norm = normalize_features(features, model)
    weights = np.asarray(model.weights)

    # Bias is not a feature of the market, leave it out of the ranking
    contributions = (weights * x_norm)[1:]
    idx_sorted = np.argsort(-np.abs(contributions), kind="stable")

    names = FEATURE_COLUMNS[1:]
    reasons: List[Dict[str, object]] = []
    for idx in idx_sorted[:top_k]:
        fname = names[idx] if idx < len(names) else f"feature_{idx + 1}"
        contrib = float(contributions[idx])
        direction = "bull" if contrib > 0 else "bear"
        template = EXPLANATION_TEMPLATES.get(fname)
        text = template[direction] if template else f"{fname} contributes {contrib:+.3f} to the log-odds."

        reasons.append(
            {
                "feature": fname,
                "contribution": contrib,
                "direction": direction,
                "text": text,
            }
        )

    return reasons
