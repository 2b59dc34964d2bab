"""Tests for the test-drive composition and its input models."""

from pathlib import Path

import pytest

from road_engine.config import load_config
from road_engine.core.conditions import DriveConditions
from road_engine.core.drive import evaluate_test_drive
from road_engine.core.narrative import SUCCESS_MESSAGE
from road_engine.core.scoring import score_trip
from road_engine.core.segment import RoadSegmentState

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _sample_segment(roughness: float = 3.2, surface: str = "gravel") -> RoadSegmentState:
    return RoadSegmentState(
        baseline_roughness=roughness,
        surface=surface,
        width_meters=7.4,
        name="Test Segment",
    )


def _sample_conditions(**overrides: object) -> DriveConditions:
    params: dict = {
        "cargo_type": "electronics",
        "cargo_weight_tons": 20.0,
        "weather": "sunny",
        "speed_limit_kmh": 70.0,
    }
    params.update(overrides)
    return DriveConditions(**params)


# ---------------------------------------------------------------------------
# Input models
# ---------------------------------------------------------------------------


def test_segment_validation() -> None:
    """Empty names, empty surfaces and negative widths are rejected."""
    with pytest.raises(ValueError):
        _sample_segment(surface="")
    with pytest.raises(ValueError):
        RoadSegmentState(baseline_roughness=3.0, surface="paved", width_meters=7.0, name="")
    with pytest.raises(ValueError):
        RoadSegmentState(baseline_roughness=3.0, surface="paved", width_meters=-1.0, name="X")


def test_conditions_validation() -> None:
    """Empty cargo and unknown weather values are rejected."""
    with pytest.raises(ValueError):
        _sample_conditions(cargo_type="")
    with pytest.raises(ValueError):
        _sample_conditions(weather="fog")


def test_conditions_clamped() -> None:
    """Negative weight and speed are clamped to zero."""
    clamped = _sample_conditions(cargo_weight_tons=-5.0, speed_limit_kmh=-20.0).clamped()
    assert clamped.cargo_weight_tons == 0.0
    assert clamped.speed_limit_kmh == 0.0
    assert clamped.cargo_type == "electronics"


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def test_projection_feeds_scorer() -> None:
    """The trip is scored at the projected roughness."""
    report = evaluate_test_drive(_sample_segment(), _sample_conditions(), 5)
    assert report.projected_roughness == pytest.approx(9.2)
    assert report.effective_roughness == pytest.approx(9.2)
    assert report.result == score_trip(report.effective_roughness, "electronics", 20.0, "sunny", 70.0)


def test_projected_roughness_clamped_to_band() -> None:
    """Out-of-band projections are clamped before scoring."""
    high = evaluate_test_drive(_sample_segment(8.0), _sample_conditions(), 5)
    assert high.projected_roughness == pytest.approx(14.0)
    assert high.effective_roughness == 10.0
    assert high.visual_condition_index == 0.0
    assert high.risk_band == "Critical"

    low = evaluate_test_drive(_sample_segment(0.3, "paved"), _sample_conditions(), 0)
    assert low.effective_roughness == 1.0
    assert low.risk_band == "Low"


def test_negative_elapsed_years_treated_as_zero() -> None:
    """Negative elapsed time does not improve the road."""
    report = evaluate_test_drive(_sample_segment(), _sample_conditions(), -4)
    assert report.elapsed_years == 0
    assert report.projected_roughness == pytest.approx(3.2)


def test_negative_inputs_do_not_cancel_risk() -> None:
    """Negative weight and speed contribute zero damage, never negative."""
    report = evaluate_test_drive(
        _sample_segment(),
        _sample_conditions(cargo_weight_tons=-30.0, speed_limit_kmh=-80.0),
        0,
    )
    assert report.result.weight_damage == 0.0
    assert report.result.speed_damage == 0.0
    assert report.result.integrity_lost >= 0.0


def test_report_includes_narrative() -> None:
    """A calm trip on a good road reports success."""
    report = evaluate_test_drive(
        _sample_segment(1.0, "paved"),
        _sample_conditions(cargo_type="bricks", cargo_weight_tons=2.0, speed_limit_kmh=40.0),
        0,
    )
    assert report.narrative == SUCCESS_MESSAGE
    assert report.headline
    assert report.segment_name == "Test Segment"


def test_unconfigured_surface_rejected_at_projection() -> None:
    """A surface without a degradation rate fails when the drive is evaluated."""
    segment = _sample_segment(surface="tarmac")
    with pytest.raises(ValueError):
        evaluate_test_drive(segment, _sample_conditions(), 1)


def test_surface_and_cargo_added_by_loaded_config(tmp_path: Path) -> None:
    """A loaded config can introduce a new surface and a new cargo type."""
    path = tmp_path / "engine.yaml"
    path.write_text(
        "degradation_rates:\n"
        "  paved: 0.4\n"
        "  gravel: 1.2\n"
        "  concrete: 0.2\n"
        "value_per_ton:\n"
        "  machinery: 80000\n"
        "fragile_cargo: [machinery]\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    segment = RoadSegmentState(
        baseline_roughness=3.0, surface="concrete", width_meters=7.0, name="X"
    )
    conditions = _sample_conditions(
        cargo_type="machinery", cargo_weight_tons=10.0, speed_limit_kmh=60.0
    )

    report = evaluate_test_drive(segment, conditions, 5, cfg)

    assert report.projected_roughness == pytest.approx(4.0)
    assert report.result.flags.is_fragile is True
    assert report.result.total_cargo_value == pytest.approx(800_000.0)
    assert report.result == score_trip(4.0, "machinery", 10.0, "sunny", 60.0, cfg)
