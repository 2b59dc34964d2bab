"""Core simulation modules for the road scenario engine."""

from road_engine.core.conditions import CARGO_TYPES, WEATHER_TYPES, DriveConditions
from road_engine.core.curves import (
    CURVE_MODES,
    LINEAR,
    SMOOTH,
    CurveGeometry,
    interpolate_curve,
    interpolate_scenarios,
    map_points,
    normalize_heights,
    safe_ratio,
)
from road_engine.core.drive import DriveReport, evaluate_test_drive
from road_engine.core.impact import (
    ImpactResult,
    StressRunResult,
    rescale_loss,
    run_stress_test,
    simulate_impacts,
    simulate_impacts_monte_carlo,
)
from road_engine.core.narrative import describe_roughness, explain_result
from road_engine.core.projection import (
    clamp_elapsed_years,
    clamp_roughness,
    project_roughness,
    risk_band,
    visual_condition_index,
)
from road_engine.core.scenario import (
    YearlyProjectionPoint,
    build_projection_series,
    do_nothing_series,
    final_funded_value,
    validate_series,
)
from road_engine.core.scoring import RiskFlags, SimulationResult, score_trip
from road_engine.core.segment import RoadSegmentState

__all__ = [
    "CARGO_TYPES",
    "CURVE_MODES",
    "CurveGeometry",
    "DriveConditions",
    "DriveReport",
    "ImpactResult",
    "LINEAR",
    "RiskFlags",
    "RoadSegmentState",
    "SMOOTH",
    "SimulationResult",
    "StressRunResult",
    "WEATHER_TYPES",
    "YearlyProjectionPoint",
    "build_projection_series",
    "clamp_elapsed_years",
    "clamp_roughness",
    "describe_roughness",
    "do_nothing_series",
    "evaluate_test_drive",
    "final_funded_value",
    "explain_result",
    "interpolate_curve",
    "interpolate_scenarios",
    "map_points",
    "normalize_heights",
    "project_roughness",
    "rescale_loss",
    "risk_band",
    "run_stress_test",
    "safe_ratio",
    "score_trip",
    "simulate_impacts",
    "simulate_impacts_monte_carlo",
    "validate_series",
    "visual_condition_index",
]
