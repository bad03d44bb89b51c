# tests/test_dataset.py

import io

import pandas as pd
import pytest

from direction_ml.dataset import (
    Observation,
    load_observations,
    observations_from_frame,
    observations_to_frame,
)

NASDAQ_CSV = """Date,Close/Last,Volume,Open,High,Low
10/17/2025,$183.22,"51,234,100",$181.00,$184.10,$180.50
10/16/2025,$181.90,"48,000,000",$180.00,$182.40,$179.90
10/15/2025,N/A,"47,100,000",$179.00,$181.00,$178.80
10/14/2025,$179.40,"45,500,200",$178.00,$180.00,$177.60
"""


def test_load_nasdaq_export_is_cleaned_and_sorted():
    obs = load_observations(io.StringIO(NASDAQ_CSV))

    # N/A price row skipped, newest-first file reversed
    assert [o.date for o in obs] == ["10/14/2025", "10/16/2025", "10/17/2025"]
    assert obs[-1] == Observation(date="10/17/2025", price=183.22, volume=51234100)
    assert isinstance(obs[0].volume, int)


def test_negative_and_missing_volume_rows_skipped():
    csv = "Date,Close,Volume\n2024-01-01,10,100\n2024-01-02,11,-5\n2024-01-03,12,\n2024-01-04,13,400\n"
    obs = load_observations(io.StringIO(csv))
    assert [o.price for o in obs] == [10.0, 13.0]


def test_unparseable_dates_keep_file_order():
    csv = "Date,Close,Volume\nday b,2,20\nday a,1,10\n"
    obs = load_observations(io.StringIO(csv))
    assert [o.date for o in obs] == ["day b", "day a"]


def test_columns_fall_back_to_position():
    csv = "when,px,qty\n2024-01-02,5.5,7\n2024-01-01,5.0,6\n"
    obs = load_observations(io.StringIO(csv))
    assert obs == [
        Observation(date="2024-01-01", price=5.0, volume=6),
        Observation(date="2024-01-02", price=5.5, volume=7),
    ]


def test_frame_round_trip():
    obs = [Observation("a", 1.5, 10), Observation("b", 2.5, 20)]
    df = observations_to_frame(obs)
    assert list(df.columns) == ["date", "price", "volume"]
    assert observations_from_frame(df) == obs


def test_observations_from_frame_missing_columns():
    with pytest.raises(ValueError):
        observations_from_frame(pd.DataFrame({"date": ["a"], "price": [1.0]}))
