# tests/test_features.py

import math

import numpy as np
import pytest

from direction_ml.config import FEATURE_COLUMNS, N_FEATURES
from direction_ml.dataset import Observation
from direction_ml.features import (
    extract_latest_features,
    extract_training_examples,
    window_features,
)


def make_observations(rows):
    return [Observation(date=f"d{i + 1}", price=p, volume=v) for i, (p, v) in enumerate(rows)]


@pytest.fixture
def seven_days():
    return make_observations(
        [
            (100, 1000), (101, 1000), (102, 1000), (103, 1000),
            (104, 1000), (110, 1000), (95, 1000),
        ]
    )


@pytest.mark.parametrize("n", [0, 1, 5])
def test_short_sequences_yield_no_examples(n):
    obs = make_observations([(100 + i, 1000) for i in range(n)])
    assert extract_training_examples(obs) == []


def test_six_observations_yield_no_examples():
    # Day 5 has a full window but no next day to label it
    obs = make_observations([(100 + i, 1000) for i in range(6)])
    assert extract_training_examples(obs) == []


def test_seven_day_scenario_features(seven_days):
    examples = extract_training_examples(seven_days)
    assert len(examples) == 1

    ex = examples[0]
    assert ex.label == 0  # 110 -> 95
    assert isinstance(ex.features, tuple)
    assert len(ex.features) == N_FEATURES

    x = dict(zip(FEATURE_COLUMNS, ex.features))
    assert x["bias"] == 1.0
    assert x["avg_price"] == pytest.approx(102.0)
    assert x["avg_volume"] == pytest.approx(1000.0)
    assert x["price_change"] == pytest.approx(6.0)
    assert x["volume_change"] == 0.0
    assert x["price_change_pct"] == pytest.approx(6.0 / 104.0 * 100)
    assert x["volume_change_pct"] == 0.0
    assert x["price_volatility"] == pytest.approx(math.sqrt(2.0))
    assert x["price_trend"] == 1.0
    # flat volume counts as -1 on every step
    assert x["volume_trend"] == -1.0


def test_label_is_one_when_next_day_rises():
    obs = make_observations([(100, 10), (99, 11), (98, 12), (97, 13), (96, 14), (95, 15), (96, 16)])
    examples = extract_training_examples(obs)
    assert [ex.label for ex in examples] == [1]
    x = dict(zip(FEATURE_COLUMNS, examples[0].features))
    assert x["price_trend"] == -1.0
    assert x["volume_trend"] == 1.0


def test_zero_volume_windows_are_skipped():
    # Day 5 measures volume change against a zero volume day: 0/0 and x/0
    obs = make_observations(
        [
            (100, 1000), (101, 1000), (102, 1000), (103, 1000), (104, 0),
            (105, 0), (106, 1000), (107, 1000), (108, 1000),
        ]
    )
    examples = extract_training_examples(obs)

    # i=5 (0/0) and i=6 (1000/0) are dropped, i=7 is kept
    assert len(examples) == 1
    assert np.all(np.isfinite(examples[0].features))


def test_window_features_trend_uses_four_comparisons():
    x = window_features(
        np.array([1.0, 2.0, 1.0, 2.0, 3.0]),
        np.array([5.0, 4.0, 3.0, 2.0, 1.0]),
        3.0,
        1.0,
    )
    # +1 -1 +1 +1 = 2 -> 0.5
    assert x[8] == 0.5
    assert x[9] == -1.0


def test_latest_features_use_last_observation_as_current(seven_days):
    x = dict(zip(FEATURE_COLUMNS, extract_latest_features(seven_days)))

    # window = d3..d7, current = d7
    assert x["avg_price"] == pytest.approx((102 + 103 + 104 + 110 + 95) / 5)
    assert x["price_change"] == 0.0
    assert x["volume_change"] == 0.0
    assert x["price_change_pct"] == 0.0


def test_latest_features_require_five_observations():
    with pytest.raises(ValueError):
        extract_latest_features(make_observations([(100, 1)] * 4))


def test_latest_features_pass_nan_through():
    obs = make_observations([(100, 0)] * 5)
    x = extract_latest_features(obs)
    # 0 change over 0 volume
    assert math.isnan(x[6])


def test_extraction_is_repeatable_and_hashable(seven_days):
    obs = seven_days + [Observation(date="d8", price=97, volume=1200)]
    first = extract_training_examples(obs)
    second = extract_training_examples(obs)

    assert len(first) == 2
    assert first == second
    assert len({hash(ex) for ex in first + second}) == 2
