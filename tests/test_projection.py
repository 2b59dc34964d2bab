"""Tests for the condition projector."""

from dataclasses import replace

import pytest

from road_engine.config import default_config
from road_engine.core.projection import (
    clamp_elapsed_years,
    clamp_roughness,
    project_roughness,
    risk_band,
    visual_condition_index,
)

# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------


def test_zero_years_returns_baseline() -> None:
    """With no elapsed time the projection equals the baseline."""
    assert project_roughness(2.5, "paved", 0) == 2.5


def test_gravel_projection() -> None:
    """Gravel gains 1.2 roughness units per year."""
    assert project_roughness(2.5, "gravel", 5) == pytest.approx(8.5)


def test_gravel_degrades_three_times_faster() -> None:
    """Gravel degradation over any horizon is three times the paved rate."""
    paved_gain = project_roughness(2.0, "paved", 10) - 2.0
    gravel_gain = project_roughness(2.0, "gravel", 10) - 2.0
    assert gravel_gain == pytest.approx(3.0 * paved_gain)


def test_projection_is_not_clamped() -> None:
    """The projector leaves out-of-band values for the caller to clamp."""
    assert project_roughness(9.0, "gravel", 10) == pytest.approx(21.0)


def test_unknown_surface_rejected() -> None:
    """An unconfigured surface must raise ValueError."""
    with pytest.raises(ValueError):
        project_roughness(3.0, "cobblestone", 1)


def test_config_overrides_rate() -> None:
    """A custom degradation table changes the projection."""
    cfg = replace(default_config(), degradation_rates={"paved": 1.0, "gravel": 2.0})
    assert project_roughness(1.0, "paved", 3, cfg) == pytest.approx(4.0)


# ---------------------------------------------------------------------------
# Clamping
# ---------------------------------------------------------------------------


def test_clamp_roughness_policy_band() -> None:
    """Roughness is clamped into [1, 10]."""
    assert clamp_roughness(0.2) == 1.0
    assert clamp_roughness(-4.0) == 1.0
    assert clamp_roughness(15.0) == 10.0
    assert clamp_roughness(5.5) == 5.5


def test_clamp_elapsed_years() -> None:
    """Negative elapsed time becomes zero; whole years pass through."""
    assert clamp_elapsed_years(-3) == 0
    assert clamp_elapsed_years(4) == 4


def test_clamp_elapsed_years_non_finite() -> None:
    """NaN and infinite elapsed time fall back to zero instead of raising."""
    assert clamp_elapsed_years(float("nan")) == 0
    assert clamp_elapsed_years(float("inf")) == 0
    assert clamp_elapsed_years(float("-inf")) == 0
    assert clamp_elapsed_years(2.7) == 2


# ---------------------------------------------------------------------------
# Visual condition index and risk bands
# ---------------------------------------------------------------------------


def test_visual_condition_index_mapping() -> None:
    """VCI is 100 - 10 * roughness, clamped to [0, 100]."""
    assert visual_condition_index(3.5) == pytest.approx(65.0)
    assert visual_condition_index(12.0) == 0.0
    assert visual_condition_index(-1.0) == 100.0


def test_risk_bands() -> None:
    """Band edges are inclusive upper bounds."""
    assert risk_band(1.0) == "Low"
    assert risk_band(2.5) == "Low"
    assert risk_band(2.6) == "Moderate"
    assert risk_band(4.5) == "Moderate"
    assert risk_band(6.5) == "High"
    assert risk_band(6.6) == "Critical"
