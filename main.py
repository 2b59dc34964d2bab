"""CLI entrypoint for the Road Scenario Engine."""

from __future__ import annotations

import logging
import sys

from road_engine import __version__
from road_engine.config import load_config
from road_engine.core.conditions import DriveConditions
from road_engine.core.curves import SMOOTH, interpolate_scenarios
from road_engine.core.drive import evaluate_test_drive
from road_engine.core.impact import simulate_impacts_monte_carlo
from road_engine.core.scenario import build_projection_series
from road_engine.core.segment import RoadSegmentState


def main() -> None:
    """Run a demonstration of the scenario engine."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print(f"Road Scenario Engine v{__version__}")
    print("=" * 56)

    config = load_config()

    segment = RoadSegmentState(
        baseline_roughness=3.2,
        surface="gravel",
        width_meters=7.4,
        name="R34 Bethlehem - Kestell",
    )
    conditions = DriveConditions(
        cargo_type="electronics",
        cargo_weight_tons=28.0,
        weather="rain",
        speed_limit_kmh=100.0,
    )

    print(f"\nSegment : {segment.name} ({segment.surface})")
    print(
        f"Cargo   : {conditions.cargo_weight_tons:.0f} t {conditions.cargo_type}, "
        f"{conditions.weather}, {conditions.speed_limit_kmh:.0f} km/h"
    )
    print("-" * 56)

    # -- Test drive over a five-year horizon ----------------------------------
    print(f"\n  {'Year':>4}  {'IRI':>5}  {'VCI':>5}  {'Band':>8}  {'Health':>6}  {'Loss':>12}")
    print(f"  {'----':>4}  {'-----':>5}  {'-----':>5}  {'--------':>8}  {'------':>6}  {'------------':>12}")

    for year in range(0, 6):
        report = evaluate_test_drive(segment, conditions, year, config)
        print(
            f"  {year:4d}  {report.effective_roughness:5.1f}  "
            f"{report.visual_condition_index:5.0f}  {report.risk_band:>8}  "
            f"{report.result.cargo_health:6.1f}  {report.result.financial_loss:12,.0f}"
        )

    print(f"\n{report.headline}")
    print(report.narrative)

    # -- Stress run ensemble --------------------------------------------------
    stats = simulate_impacts_monte_carlo(
        report.effective_roughness,
        conditions.speed_limit_kmh,
        pothole_density=4.0,
        cargo_value=3_000_000.0,
        runs=200,
        config=config,
    )
    print(
        f"\nStress run: {stats['expected_impacts']:.1f} impacts on average, "
        f"expected loss R {stats['expected_loss']:,.0f}"
    )

    # -- Scenario curves ------------------------------------------------------
    series = build_projection_series(None, current_vci=60.0, duration=10, config=config)
    curves = interpolate_scenarios(series, SMOOTH, 800, 300)
    print(f"\nFunded path     : {curves['funded'].path_commands[:60]}...")
    print(f"Do-nothing path : {curves['do_nothing'].path_commands[:60]}...")


if __name__ == "__main__":
    sys.exit(main() or 0)
