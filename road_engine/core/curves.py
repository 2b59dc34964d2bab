"""Curve interpolation for scenario condition charts.

Converts an ordered series of ``(x, y)`` points into a renderer-agnostic
path description made of move-to (``M``), line-to (``L``) and cubic
curve-to (``C``) commands, in the SVG path syntax::

    M x0 y0 L x1 y1 L x2 y2
    M x0 y0 C c1x c1y, c2x c2y, x1 y1 C ...

Two modes share one interpolator:

- ``"linear"`` -- straight segments between consecutive points.
- ``"smooth"`` -- a Catmull-Rom spline converted to cubic Bezier
  segments.  The curve passes exactly through every input point.  Phantom
  end points are clamped to the first and last point, so the curve starts
  and ends exactly on the mapped endpoints.  A two-point series
  degenerates to the linear path.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from road_engine.core.scenario import YearlyProjectionPoint, validate_series

logger = logging.getLogger(__name__)

LINEAR: str = "linear"
SMOOTH: str = "smooth"
CURVE_MODES: tuple[str, ...] = (LINEAR, SMOOTH)

Point = tuple[float, float]


@dataclass(frozen=True)
class CurveGeometry:
    """Path commands plus the coordinate frame they were generated for.

    Attributes:
        path_commands: SVG-style path string (empty for an empty series).
        canvas_width: Width of the target canvas.
        canvas_height: Height of the target canvas.
    """

    path_commands: str
    canvas_width: float
    canvas_height: float


# ---------------------------------------------------------------------------
# Ratios
# ---------------------------------------------------------------------------


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide, returning ``0.0`` instead of ``inf``/``NaN`` on a zero denominator."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def normalize_heights(values: Sequence[float], max_height: float) -> list[float]:
    """Scale non-negative values to bar heights relative to the series maximum.

    A series whose maximum is zero (or an empty series) yields zero heights.
    Negative values are drawn as zero.
    """
    peak = max(values, default=0.0)
    scale = safe_ratio(max_height, peak) if peak > 0 else 0.0
    return [max(0.0, v) * scale for v in values]


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


def map_points(
    points: Sequence[Point],
    canvas_width: float,
    canvas_height: float,
    max_x: float,
    max_y: float,
) -> list[Point]:
    """Map data coordinates to canvas coordinates.

    ``cx = x * (width / max_x)`` and ``cy = height - y * (height / max_y)``;
    the Y axis is inverted so higher values render higher on the canvas.
    A zero ``max_x`` or ``max_y`` collapses that axis to a zero scale.
    """
    scale_x = safe_ratio(canvas_width, max_x)
    scale_y = safe_ratio(canvas_height, max_y)
    return [(x * scale_x, canvas_height - y * scale_y) for x, y in points]


def _fmt(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _linear_path(mapped: Sequence[Point]) -> str:
    head = f"M {_fmt(mapped[0][0])} {_fmt(mapped[0][1])}"
    tail = [f"L {_fmt(x)} {_fmt(y)}" for x, y in mapped[1:]]
    return " ".join([head, *tail])


def _smooth_path(mapped: Sequence[Point]) -> str:
    parts: list[str] = [f"M {_fmt(mapped[0][0])} {_fmt(mapped[0][1])}"]
    last = len(mapped) - 1

    for i in range(last):
        p0 = mapped[i - 1] if i > 0 else mapped[0]
        p1 = mapped[i]
        p2 = mapped[i + 1]
        p3 = mapped[i + 2] if i + 1 < last else p2

        cp1x = p1[0] + (p2[0] - p0[0]) / 6.0
        cp1y = p1[1] + (p2[1] - p0[1]) / 6.0
        cp2x = p2[0] - (p3[0] - p1[0]) / 6.0
        cp2y = p2[1] - (p3[1] - p1[1]) / 6.0

        parts.append(
            f"C {_fmt(cp1x)} {_fmt(cp1y)}, {_fmt(cp2x)} {_fmt(cp2y)}, "
            f"{_fmt(p2[0])} {_fmt(p2[1])}"
        )

    return " ".join(parts)


def interpolate_curve(
    points: Sequence[Point],
    mode: str,
    canvas_width: float,
    canvas_height: float,
    max_x: float,
    max_y: float,
) -> CurveGeometry:
    """Build the path geometry for one scenario series.

    Args:
        points: Ordered ``(x, y)`` data points.
        mode: ``"linear"`` or ``"smooth"``.
        canvas_width: Target canvas width.
        canvas_height: Target canvas height.
        max_x: Data value mapped to the right edge of the canvas.
        max_y: Data value mapped to the top edge of the canvas.

    Returns:
        A :class:`CurveGeometry`.  An empty series yields an empty path.

    Raises:
        ValueError: If mode is not ``"linear"`` or ``"smooth"``.
    """
    if mode not in CURVE_MODES:
        raise ValueError(f"mode must be one of {CURVE_MODES}, got {mode!r}.")

    if not points:
        return CurveGeometry("", canvas_width, canvas_height)

    mapped = map_points(points, canvas_width, canvas_height, max_x, max_y)

    if mode == SMOOTH and len(mapped) >= 3:
        path = _smooth_path(mapped)
    else:
        if mode == SMOOTH:
            logger.debug("Smooth mode with %d point(s); using linear path", len(mapped))
        path = _linear_path(mapped)

    return CurveGeometry(path, canvas_width, canvas_height)


def interpolate_scenarios(
    series: Sequence[YearlyProjectionPoint],
    mode: str,
    canvas_width: float,
    canvas_height: float,
    max_x: float | None = None,
    max_y: float = 100.0,
) -> dict[str, CurveGeometry]:
    """Build the funded and do-nothing curves for a projection series.

    Args:
        series: Ordered yearly projections (validated).  Years without a
            funded value are left out of the funded curve.
        mode: ``"linear"`` or ``"smooth"``.
        canvas_width: Target canvas width.
        canvas_height: Target canvas height.
        max_x: Year index at the right edge.  Defaults to the last index.
        max_y: Condition value at the top edge (default 100).

    Returns:
        ``{"funded": CurveGeometry, "do_nothing": CurveGeometry}``.
    """
    validate_series(series)
    if max_x is None:
        max_x = series[-1].year_index if series else 0

    funded = [
        (p.year_index, p.funded_value) for p in series if p.funded_value is not None
    ]
    do_nothing = [(p.year_index, p.do_nothing_value) for p in series]

    return {
        "funded": interpolate_curve(
            funded, mode, canvas_width, canvas_height, max_x, max_y
        ),
        "do_nothing": interpolate_curve(
            do_nothing, mode, canvas_width, canvas_height, max_x, max_y
        ),
    }
