"""Test-drive composition: projector -> scorer -> narrative.

``evaluate_test_drive`` is the single entry point a presentation layer
calls whenever any input changes.  It takes the complete current input
set and returns a fresh report; nothing is cached between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from road_engine.config import EngineConfig, default_config
from road_engine.core.conditions import DriveConditions
from road_engine.core.narrative import describe_roughness, explain_result
from road_engine.core.projection import (
    clamp_elapsed_years,
    clamp_roughness,
    project_roughness,
    risk_band,
    visual_condition_index,
)
from road_engine.core.scoring import SimulationResult, score_trip
from road_engine.core.segment import RoadSegmentState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DriveReport:
    """Everything a results surface needs to display one test drive.

    Attributes:
        segment_name: Name of the segment driven.
        elapsed_years: Clamped years since the reference year.
        projected_roughness: Raw projector output (unclamped).
        effective_roughness: Roughness after policy-band clamping; this is
            the value the trip was scored at.
        visual_condition_index: 0-100 display index of the effective
            roughness.
        risk_band: ``Low``, ``Moderate``, ``High`` or ``Critical``.
        headline: One-line ride-quality summary.
        result: The scored trip.
        narrative: Explanation of the scored trip.
    """

    segment_name: str
    elapsed_years: int
    projected_roughness: float
    effective_roughness: float
    visual_condition_index: float
    risk_band: str
    headline: str
    result: SimulationResult
    narrative: str


def evaluate_test_drive(
    segment: RoadSegmentState,
    conditions: DriveConditions,
    elapsed_years: float = 0,
    config: EngineConfig | None = None,
) -> DriveReport:
    """Project a segment forward, score a trip over it and explain the result.

    Args:
        segment: The road segment being driven.
        conditions: Cargo, weather and speed selections.
        elapsed_years: Years since the reference year (negatives clamp to 0).
        config: Engine constants.  Defaults to :func:`default_config`.

    Returns:
        A :class:`DriveReport`.
    """
    cfg = config or default_config()

    years = clamp_elapsed_years(elapsed_years)
    projected = project_roughness(
        segment.baseline_roughness, segment.surface, years, cfg
    )
    effective = clamp_roughness(projected, cfg)
    trip = conditions.clamped()

    result = score_trip(
        effective,
        trip.cargo_type,
        trip.cargo_weight_tons,
        trip.weather,
        trip.speed_limit_kmh,
        cfg,
    )

    logger.debug(
        "Test drive on %s after %d year(s): roughness %.2f, health %.1f",
        segment.name,
        years,
        effective,
        result.cargo_health,
    )

    return DriveReport(
        segment_name=segment.name,
        elapsed_years=years,
        projected_roughness=projected,
        effective_roughness=effective,
        visual_condition_index=visual_condition_index(effective),
        risk_band=risk_band(effective),
        headline=describe_roughness(effective),
        result=result,
        narrative=explain_result(result, effective, cfg),
    )
