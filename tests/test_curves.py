"""Tests for the curve interpolator."""

import math
import re

import pytest

from road_engine.core.curves import (
    CurveGeometry,
    interpolate_curve,
    interpolate_scenarios,
    map_points,
    normalize_heights,
    safe_ratio,
)
from road_engine.core.scenario import YearlyProjectionPoint

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?")

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _numbers(path: str) -> list[float]:
    """Extract every coordinate from a path string, in order."""
    return [float(tok) for tok in _NUMBER.findall(path)]


def _sample_points() -> list[tuple[float, float]]:
    return [(0, 50), (5, 100), (10, 0)]


def _forecast_points() -> list[tuple[float, float]]:
    return [(0, 62.0), (1, 60.5), (2, 63.1), (3, 66.8), (4, 65.2), (5, 70.0)]


# ---------------------------------------------------------------------------
# Coordinate mapping
# ---------------------------------------------------------------------------


def test_map_points_inverts_y() -> None:
    """Higher values render higher (smaller canvas Y)."""
    mapped = map_points([(0, 0), (10, 100)], 800, 300, 10, 100)
    assert mapped == [(0.0, 300.0), (800.0, 0.0)]


def test_zero_maximum_does_not_produce_nan() -> None:
    """A zero max_x or max_y collapses the axis instead of dividing by zero."""
    mapped = map_points([(3, 40), (7, 80)], 800, 300, 0, 0)
    for x, y in mapped:
        assert math.isfinite(x) and math.isfinite(y)
    assert mapped == [(0.0, 300.0), (0.0, 300.0)]


# ---------------------------------------------------------------------------
# Linear mode
# ---------------------------------------------------------------------------


def test_linear_path() -> None:
    """Linear mode emits a move-to followed by line-to commands."""
    geometry = interpolate_curve(_sample_points(), "linear", 800, 300, 10, 100)
    assert geometry == CurveGeometry("M 0 150 L 400 0 L 800 300", 800, 300)


def test_empty_series_yields_empty_path() -> None:
    """No points means no path."""
    for mode in ("linear", "smooth"):
        assert interpolate_curve([], mode, 800, 300, 10, 100).path_commands == ""


def test_single_point_is_move_only() -> None:
    """A single point produces just the move-to."""
    for mode in ("linear", "smooth"):
        geometry = interpolate_curve([(0, 100)], mode, 800, 300, 10, 100)
        assert geometry.path_commands == "M 0 0"


def test_unknown_mode_rejected() -> None:
    """Only linear and smooth modes exist."""
    with pytest.raises(ValueError):
        interpolate_curve(_sample_points(), "bezier", 800, 300, 10, 100)


# ---------------------------------------------------------------------------
# Smooth mode
# ---------------------------------------------------------------------------


def test_smooth_control_points() -> None:
    """Catmull-Rom control points use clamped phantom end points."""
    path = interpolate_curve(_sample_points(), "smooth", 800, 300, 10, 100).path_commands
    assert path.startswith("M 0 150 C ")
    assert path.count("C ") == 2

    expected = [
        0, 150,
        400 / 6, 125, 400 - 800 / 6, -25, 400, 0,
        400 + 800 / 6, 25, 800 - 400 / 6, 250, 800, 300,
    ]
    assert _numbers(path) == pytest.approx(expected)


def test_smooth_endpoints_exact() -> None:
    """First and last rendered coordinates equal the mapped endpoints exactly."""
    points = _forecast_points()
    mapped = map_points(points, 800, 300, 5, 100)
    nums = _numbers(interpolate_curve(points, "smooth", 800, 300, 5, 100).path_commands)

    assert (nums[0], nums[1]) == mapped[0]
    assert (nums[-2], nums[-1]) == mapped[-1]


def test_smooth_passes_through_every_point() -> None:
    """Each cubic segment ends exactly on the next mapped input point."""
    points = _forecast_points()
    mapped = map_points(points, 640, 240, 5, 100)
    path = interpolate_curve(points, "smooth", 640, 240, 5, 100).path_commands

    segments = path.split(" C ")[1:]
    assert len(segments) == len(points) - 1
    for segment, target in zip(segments, mapped[1:]):
        nums = _numbers(segment)
        assert (nums[-2], nums[-1]) == target


def test_two_points_degenerate_to_line() -> None:
    """A two-point series is identical in linear and smooth modes."""
    points = [(0, 60), (10, 65)]
    linear = interpolate_curve(points, "linear", 800, 300, 10, 100)
    smooth = interpolate_curve(points, "smooth", 800, 300, 10, 100)
    assert linear == smooth
    assert "C" not in smooth.path_commands


# ---------------------------------------------------------------------------
# Scenario curves
# ---------------------------------------------------------------------------


def test_interpolate_scenarios_builds_both_curves() -> None:
    """Funded and do-nothing series are rendered separately."""
    series = [
        YearlyProjectionPoint(0, 60.0, 60.0),
        YearlyProjectionPoint(1, 62.0, 56.5),
        YearlyProjectionPoint(2, 65.0, 53.0),
    ]
    curves = interpolate_scenarios(series, "linear", 800, 300)

    assert set(curves) == {"funded", "do_nothing"}
    assert curves["funded"].path_commands == "M 0 120 L 400 114 L 800 105"
    assert curves["do_nothing"].path_commands == "M 0 120 L 400 130.5 L 800 141"


def test_interpolate_scenarios_skips_uncovered_funded_years() -> None:
    """Funded stops at the forecast end while do-nothing spans the axis."""
    series = [
        YearlyProjectionPoint(0, 60.0, 60.0),
        YearlyProjectionPoint(1, 62.0, 56.5),
        YearlyProjectionPoint(2, None, 53.0),
    ]
    curves = interpolate_scenarios(series, "linear", 800, 300)

    assert curves["funded"].path_commands == "M 0 120 L 400 114"
    assert curves["do_nothing"].path_commands == "M 0 120 L 400 130.5 L 800 141"


def test_interpolate_scenarios_rejects_unordered_series() -> None:
    """Duplicate year indices are refused."""
    series = [
        YearlyProjectionPoint(0, 60.0, 60.0),
        YearlyProjectionPoint(0, 61.0, 59.0),
    ]
    with pytest.raises(ValueError):
        interpolate_scenarios(series, "smooth", 800, 300)


# ---------------------------------------------------------------------------
# Ratios and bar heights
# ---------------------------------------------------------------------------


def test_safe_ratio() -> None:
    """Zero denominators short-circuit to zero."""
    assert safe_ratio(5.0, 0.0) == 0.0
    assert safe_ratio(5.0, 2.0) == 2.5


def test_normalize_heights() -> None:
    """Bars are scaled to the series maximum; all-zero series stay flat."""
    assert normalize_heights([50.0, 100.0, 25.0], 200.0) == [100.0, 200.0, 50.0]
    assert normalize_heights([0.0, 0.0, 0.0], 200.0) == [0.0, 0.0, 0.0]
    assert normalize_heights([], 200.0) == []
