"""Forecast ingestion for the road scenario engine.

The backend simulation API returns a yearly forecast as a list of
records::

    {"year": 1, "avg_condition_index": 58.2, "total_maintenance_cost": 1.2e6}

This module cleans such records into a :class:`pandas.DataFrame` and
converts them into the engine's inputs: a paired projection series for
the condition curves and normalised bar heights for the maintenance-cost
chart.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Union

import pandas as pd

from road_engine.config import EngineConfig
from road_engine.core.curves import normalize_heights
from road_engine.core.scenario import YearlyProjectionPoint, build_projection_series

logger = logging.getLogger(__name__)

FORECAST_COLUMNS: tuple[str, ...] = (
    "year",
    "avg_condition_index",
    "total_maintenance_cost",
)

ForecastInput = Union[pd.DataFrame, Iterable[Mapping[str, Any]], None]


def forecast_frame(records: ForecastInput) -> pd.DataFrame:
    """Clean forecast records into a year-ordered DataFrame.

    - Numeric columns are coerced; unparsable values become ``NaN``.
    - Rows without a year or condition index are dropped.
    - A missing maintenance cost counts as ``0``.
    - Duplicate years keep the last record.

    Args:
        records: A DataFrame, an iterable of mappings, or ``None``.

    Returns:
        DataFrame with exactly the columns in :data:`FORECAST_COLUMNS`.
    """
    if records is None:
        df = pd.DataFrame(columns=list(FORECAST_COLUMNS))
    elif isinstance(records, pd.DataFrame):
        df = records.copy()
    else:
        df = pd.DataFrame(list(records))

    for col in FORECAST_COLUMNS:
        if col not in df.columns:
            df[col] = float("nan")
        df[col] = pd.to_numeric(df[col], errors="coerce")

    df = df[list(FORECAST_COLUMNS)].copy()
    df["total_maintenance_cost"] = df["total_maintenance_cost"].fillna(0.0)

    before = len(df)
    df = df.dropna(subset=["year", "avg_condition_index"])
    dropped = before - len(df)
    if dropped:
        logger.warning("Dropped %d forecast row(s) without year or condition", dropped)

    df = (
        df.drop_duplicates(subset="year", keep="last")
        .sort_values("year")
        .reset_index(drop=True)
    )
    df["year"] = df["year"].astype(int)
    return df


def forecast_to_points(
    records: ForecastInput,
    current_vci: float,
    duration: int | None = None,
    config: EngineConfig | None = None,
) -> list[YearlyProjectionPoint]:
    """Convert forecast records into a paired funded/do-nothing series.

    Forecast rows become the funded scenario in year order, re-indexed from
    0.  The do-nothing decay runs over ``0..duration``; *duration* defaults
    to the number of forecast years, so a forecast of ``n`` years yields
    ``n + 1`` points with no funded value in the last one.  An empty
    forecast falls back to the funded ramp of
    :func:`road_engine.core.scenario.build_projection_series` over
    *duration* years (default 10).
    """
    df = forecast_frame(records)
    funded = df["avg_condition_index"].astype(float).tolist()
    horizon = duration if duration is not None else (len(funded) or 10)
    return build_projection_series(funded, current_vci, horizon, config)


def maintenance_bar_heights(records: ForecastInput, max_height: float) -> list[float]:
    """Scale yearly maintenance cost to bar heights.

    The tallest bar is *max_height*; an all-zero series yields all-zero
    heights rather than dividing by zero.
    """
    df = forecast_frame(records)
    return normalize_heights(df["total_maintenance_cost"].astype(float).tolist(), max_height)
