# direction_ml/features.py

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .config import WINDOW_SIZE
from .dataset import Observation


@dataclass(frozen=True)
class TrainingExample:
    features: Tuple[float, ...]  # N_FEATURES values, bias first
    label: int                   # 1 = price rose on the next day


def _trend(values: np.ndarray) -> float:
    """+1 per rise, -1 per flat-or-fall step, averaged over the comparisons."""
    steps = np.where(np.diff(values) > 0, 1.0, -1.0)
    return float(steps.sum() / (len(values) - 1))


def window_features(
    prices: np.ndarray,
    volumes: np.ndarray,
    current_price: float,
    current_volume: float,
) -> np.ndarray:
    """
    Compute the raw feature vector for one window of prior days.

    The last element of `prices` / `volumes` is the day the changes are
    measured from. Division by a zero price or volume follows IEEE rules
    (inf or nan) instead of raising; callers decide what to do with it.
    """
    prices = np.asarray(prices, dtype=float)
    volumes = np.asarray(volumes, dtype=float)

    with np.errstate(divide="ignore", invalid="ignore"):
        avg_price = prices.mean()
        avg_volume = volumes.mean()

        price_change = current_price - prices[-1]
        price_change_pct = np.float64(price_change) / prices[-1] * 100

        volume_change = current_volume - volumes[-1]
        volume_change_pct = np.float64(volume_change) / volumes[-1] * 100

        # Population std (ddof=0)
        price_volatility = np.sqrt(np.mean((prices - avg_price) ** 2))

    return np.array(
        [
            1.0,  # bias
            avg_price,
            avg_volume,
            price_change,
            volume_change,
            price_change_pct,
            volume_change_pct,
            price_volatility,
            _trend(prices),
            _trend(volumes),
        ],
        dtype=float,
    )


def _columns(observations: Sequence[Observation]):
    prices = np.array([o.price for o in observations], dtype=float)
    volumes = np.array([o.volume for o in observations], dtype=float)
    return prices, volumes


def extract_training_examples(
    observations: Sequence[Observation],
) -> List[TrainingExample]:
    """
    Build one labeled example per day that has a full window before it and a
    next day after it.

    For day i: window = days i-5..i-1, current = day i, label = 1 if day i+1
    closed higher than day i. Examples with any NaN feature (e.g. 0/0 from a
    zero prior volume) are dropped. Infinite features (x/0) are dropped as
    well, which is stricter than a NaN-only rule: an inf cannot be min-max
    scaled and would turn the bounds and the training cost into NaN.
    """
    if len(observations) < WINDOW_SIZE + 1:
        return []

    prices, volumes = _columns(observations)
    examples: List[TrainingExample] = []

    for i in range(WINDOW_SIZE, len(observations) - 1):
        x = window_features(
            prices[i - WINDOW_SIZE:i],
            volumes[i - WINDOW_SIZE:i],
            prices[i],
            volumes[i],
        )
        if not np.all(np.isfinite(x)):
            continue

        label = 1 if prices[i + 1] > prices[i] else 0
        examples.append(TrainingExample(features=tuple(float(v) for v in x), label=label))

    return examples


def extract_latest_features(observations: Sequence[Observation]) -> np.ndarray:
    """
    Feature vector for the most recent day, used to predict the next one.

    The window is the last five observations and the current day is the last
    observation itself, so price/volume change are zero by construction.
    NaN values are passed through; predict() substitutes the neutral value.
    """
    if len(observations) < WINDOW_SIZE:
        raise ValueError(
            f"Need at least {WINDOW_SIZE} observations for an inference window "
            f"(got {len(observations)})."
        )

    prices, volumes = _columns(observations[-WINDOW_SIZE:])
    return window_features(prices, volumes, prices[-1], volumes[-1])

