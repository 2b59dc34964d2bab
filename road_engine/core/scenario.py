"""Yearly scenario projections for the funded and do-nothing curves.

A projection series pairs, for each 0-based year index, the condition
index expected when the programme is funded with the condition index
expected when nothing is done.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from road_engine.config import EngineConfig, default_config


@dataclass(frozen=True)
class YearlyProjectionPoint:
    """Condition of both scenarios in one forecast year.

    Attributes:
        year_index: 0-based year offset from the start year.
        funded_value: Condition index with the programme funded, or ``None``
            for a year the funded forecast does not cover.
        do_nothing_value: Condition index without intervention.
    """

    year_index: int
    funded_value: float | None
    do_nothing_value: float


def validate_series(points: Sequence[YearlyProjectionPoint]) -> None:
    """Check that year indices are non-negative and strictly increasing.

    Raises:
        ValueError: On a negative, duplicate or out-of-order year index.
    """
    previous: int | None = None
    for point in points:
        if point.year_index < 0:
            raise ValueError(f"year_index must be >= 0, got {point.year_index}.")
        if previous is not None and point.year_index <= previous:
            raise ValueError(
                f"year_index values must be strictly increasing; "
                f"{point.year_index} follows {previous}."
            )
        previous = point.year_index


def do_nothing_value(
    current_vci: float, year_index: int, config: EngineConfig | None = None
) -> float:
    """Condition index after *year_index* years without intervention."""
    cfg = config or default_config()
    return max(0.0, current_vci - year_index * cfg.do_nothing_decay)


def do_nothing_series(
    current_vci: float, duration: int, config: EngineConfig | None = None
) -> list[float]:
    """Decay the condition index linearly for years ``0..duration`` inclusive."""
    return [do_nothing_value(current_vci, i, config) for i in range(max(0, duration) + 1)]


def build_projection_series(
    funded_values: Sequence[float] | None,
    current_vci: float,
    duration: int,
    config: EngineConfig | None = None,
) -> list[YearlyProjectionPoint]:
    """Pair a funded forecast with the do-nothing decay, year by year.

    The series covers ``0..duration`` (extended if the forecast runs
    longer).  Years past the end of the funded forecast carry
    ``funded_value=None``; the do-nothing decay is defined for every year.
    When no funded forecast is available the funded scenario falls back to
    a straight ramp from ``current_vci`` to ``min(100, current_vci + 5)``
    over ``0..duration``.

    Args:
        funded_values: Funded condition index per year (index 0 first), or
            ``None``/empty when the forecast has not been run.
        current_vci: Condition index of the network today.
        duration: Analysis horizon in years.
        config: Engine constants.  Defaults to :func:`default_config`.

    Returns:
        The paired series, one point per year.
    """
    cfg = config or default_config()
    duration = max(0, duration)

    if funded_values:
        funded: list[float] = [float(v) for v in funded_values]
    else:
        target = min(100.0, current_vci + cfg.funded_fallback_uplift)
        step = (target - current_vci) / duration if duration else 0.0
        funded = [current_vci + i * step for i in range(duration + 1)]

    horizon = max(duration, len(funded) - 1)
    return [
        YearlyProjectionPoint(
            year_index=i,
            funded_value=funded[i] if i < len(funded) else None,
            do_nothing_value=do_nothing_value(current_vci, i, cfg),
        )
        for i in range(horizon + 1)
    ]


def final_funded_value(points: Sequence[YearlyProjectionPoint]) -> float | None:
    """Return the last funded value in *points*, or ``None`` if there is none."""
    for point in reversed(points):
        if point.funded_value is not None:
            return point.funded_value
    return None
