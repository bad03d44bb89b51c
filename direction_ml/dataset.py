# direction_ml/dataset.py

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
import pandas as pd

from .config import CSV_DATE_COLUMNS, CSV_PRICE_COLUMNS, CSV_VOLUME_COLUMNS


@dataclass(frozen=True)
class Observation:
    """One trading day: display-only date label, closing price and volume."""

    date: str
    price: float
    volume: int


def _pick_column(df: pd.DataFrame, candidates: List[str], position: int) -> pd.Series:
    for name in candidates:
        if name in df.columns:
            return df[name]
    if position < df.shape[1]:
        return df.iloc[:, position]
    raise ValueError(
        f"Could not find any of the columns {candidates} in CSV. "
        f"Got columns: {list(df.columns)}"
    )


def _clean_numeric(series: pd.Series, strip: str) -> pd.Series:
    cleaned = series.astype(str).str.replace(strip, "", regex=True).str.strip()
    return pd.to_numeric(cleaned, errors="coerce")


def load_observations(path_or_buffer) -> List[Observation]:
    """
    Load daily observations from a historical quotes CSV (Nasdaq export format).

    Expected columns: Date, Close/Last, Volume (Open/High/Low are ignored).
    Prices like "$182.52" and volumes like "1,234,567" are cleaned.

    Rows with an invalid price/volume or a blank date are skipped. When every
    date parses as a calendar date, rows are returned oldest-first.
    """
    raw = pd.read_csv(path_or_buffer, dtype=str, skipinitialspace=True)
    raw.columns = [str(c).strip() for c in raw.columns]

    df = pd.DataFrame(
        {
            "date": _pick_column(raw, CSV_DATE_COLUMNS, 0).astype(str).str.strip(),
            "price": _clean_numeric(_pick_column(raw, CSV_PRICE_COLUMNS, 1), r"\$"),
            "volume": _clean_numeric(_pick_column(raw, CSV_VOLUME_COLUMNS, 2), ","),
        }
    )

    n_raw = len(df)
    valid = (
        df["price"].notna()
        & np.isfinite(df["price"])
        & df["volume"].notna()
        & np.isfinite(df["volume"])
        & (df["volume"] >= 0)
        & (df["date"] != "")
        & (df["date"].str.lower() != "nan")
    )
    df = df[valid].copy()
    df["volume"] = df["volume"].astype(np.int64)

    # Nasdaq exports are newest-first; order chronologically when dates allow it
    parsed = pd.to_datetime(df["date"], errors="coerce")
    if len(df) > 0 and parsed.notna().all():
        df = df.assign(_parsed=parsed).sort_values("_parsed", kind="stable")
        df = df.drop(columns="_parsed")

    print(
        f"[load_observations] Loaded {len(df)} rows "
        f"(skipped {n_raw - len(df)} invalid)"
    )

    return observations_from_frame(df)


def observations_from_frame(df: pd.DataFrame) -> List[Observation]:
    """Convert a DataFrame with 'date', 'price', 'volume' columns to observations."""
    missing = {"date", "price", "volume"} - set(df.columns)
    if missing:
        raise ValueError(f"Missing expected columns {sorted(missing)} in DataFrame.")

    return [
        Observation(date=str(row.date), price=float(row.price), volume=int(row.volume))
        for row in df.itertuples(index=False)
    ]


def observations_to_frame(observations: Sequence[Observation]) -> pd.DataFrame:
    """DataFrame view (date, price, volume) of an observation sequence."""
    return pd.DataFrame(
        {
            "date": [o.date for o in observations],
            "price": np.array([o.price for o in observations], dtype=float),
            "volume": np.array([o.volume for o in observations], dtype=np.int64),
        }
    )
