# direction_ml/normalization.py

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .config import NEUTRAL_VALUE


@dataclass(frozen=True)
class NormalizationBounds:
    min: float
    max: float

    @property
    def is_constant(self) -> bool:
        return self.min == self.max


def compute_bounds(column) -> NormalizationBounds:
    """
    Min/max of a feature column. NaN entries are ignored; a column with no
    valid values collapses to {0, 0}, which normalizes everything to neutral.
    """
    values = np.asarray(column, dtype=float)
    valid = values[~np.isnan(values)]
    if valid.size == 0:
        return NormalizationBounds(min=0.0, max=0.0)
    return NormalizationBounds(min=float(valid.min()), max=float(valid.max()))


def normalize(value: float, bounds: NormalizationBounds) -> float:
    """
    Min-max scale a single value into [0, 1].

    NaN and constant features (min == max) map to the neutral 0.5.
    Values outside the bounds are clamped first.
    """
    if np.isnan(value) or bounds.is_constant:
        return NEUTRAL_VALUE

    clamped = min(max(value, bounds.min), bounds.max)
    scaled = (clamped - bounds.min) / (bounds.max - bounds.min)
    return float(min(max(scaled, 0.0), 1.0))


def normalize_column(values, bounds: NormalizationBounds) -> np.ndarray:
    """Vectorized normalize() over a whole feature column."""
    values = np.asarray(values, dtype=float)
    if bounds.is_constant:
        return np.full(values.shape, NEUTRAL_VALUE)

    clamped = np.clip(values, bounds.min, bounds.max)
    scaled = np.clip((clamped - bounds.min) / (bounds.max - bounds.min), 0.0, 1.0)
    return np.where(np.isnan(values), NEUTRAL_VALUE, scaled)
