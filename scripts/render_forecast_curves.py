#!/usr/bin/env python
"""Render funded and do-nothing condition curves from a forecast file.

This script converts a yearly forecast exported by the simulation API
into renderer-ready geometry:

1. Load ``results/latest_forecast.json`` (a list of
   ``{year, avg_condition_index, total_maintenance_cost}`` records, or an
   object holding them under ``yearly_data``).
2. Pair the funded forecast with the do-nothing decay.
3. Build linear and smoothed path geometry for both scenarios, plus
   normalised maintenance-cost bar heights.
4. Save everything to ``results/forecast_curves.json``.

Usage
-----
::

    python scripts/render_forecast_curves.py
"""

from __future__ import annotations

import json
import os
import sys
from dataclasses import asdict

# Ensure the project root is on the import path.
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from road_engine.config import load_config  # noqa: E402
from road_engine.core.curves import CURVE_MODES, interpolate_scenarios  # noqa: E402
from road_engine.core.scenario import final_funded_value  # noqa: E402
from road_engine.data_ingestion.forecast_loader import (  # noqa: E402
    forecast_to_points,
    maintenance_bar_heights,
)

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

CANVAS_WIDTH: float = 800.0
CANVAS_HEIGHT: float = 300.0
BAR_HEIGHT: float = 120.0
CURRENT_VCI: float = 60.0
RESULTS_DIR: str = os.path.join(_project_root, "results")
INPUT_PATH: str = os.path.join(RESULTS_DIR, "latest_forecast.json")
OUTPUT_PATH: str = os.path.join(RESULTS_DIR, "forecast_curves.json")


# ---------------------------------------------------------------------------
# Main pipeline
# ---------------------------------------------------------------------------


def main() -> None:
    """Load a forecast, build both scenario curves and save them."""
    print("=" * 60)
    print("FORECAST CURVE RENDERING")
    print("=" * 60)
    print()

    # -- Step 1: Load forecast ------------------------------------------------
    print(f"[1/3] Loading forecast from {INPUT_PATH}")
    if not os.path.exists(INPUT_PATH):
        print("      No forecast file found; using the funded fallback ramp.")
        records: list[dict] = []
    else:
        with open(INPUT_PATH, encoding="utf-8") as fh:
            payload = json.load(fh)
        records = payload.get("yearly_data", []) if isinstance(payload, dict) else payload
        print(f"      Loaded {len(records)} forecast records.")
    print()

    # -- Step 2: Build scenario series ----------------------------------------
    print("[2/3] Building scenario curves")
    config = load_config()
    series = forecast_to_points(records, CURRENT_VCI, config=config)
    curves = {
        mode: {
            name: asdict(geometry)
            for name, geometry in interpolate_scenarios(
                series, mode, CANVAS_WIDTH, CANVAS_HEIGHT
            ).items()
        }
        for mode in CURVE_MODES
    }
    bars = maintenance_bar_heights(records, BAR_HEIGHT)
    print(f"      {len(series)} years, {len(CURVE_MODES)} modes.")
    print()

    # -- Step 3: Save ---------------------------------------------------------
    print("[3/3] Saving geometry")
    output: dict[str, object] = {
        "metadata": {
            "current_vci": CURRENT_VCI,
            "years": len(series),
            "canvas": [CANVAS_WIDTH, CANVAS_HEIGHT],
        },
        "final_funded": final_funded_value(series),
        "final_do_nothing": series[-1].do_nothing_value if series else None,
        "curves": curves,
        "maintenance_bars": bars,
    }

    os.makedirs(RESULTS_DIR, exist_ok=True)
    with open(OUTPUT_PATH, "w", encoding="utf-8") as fh:
        json.dump(output, fh, indent=2, sort_keys=True)
    print(f"      Geometry saved to {OUTPUT_PATH}")
    print()
    print("Rendering complete.")


if __name__ == "__main__":
    main()
