"""Physical impact stage and monetary rescaling for the road scenario engine.

The stress run separates two concerns:

1. A *physical* stage that drives a truck over a pothole field and
   prices the resulting loss against a fixed reference cargo value
   (1 250 000 under the default configuration).  Impact events are drawn
   from a per-call ``numpy.random.Generator`` so results are reproducible
   when a seed is supplied.
2. A *monetary* stage that linearly rescales the reference loss to the
   caller's actual cargo value.

``simulate_impacts_monte_carlo`` runs seeded replications of the composed
stages and aggregates the outcomes.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.random import Generator

from road_engine.config import EngineConfig, default_config

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Result containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ImpactResult:
    """Outcome of the physical stage, priced at the reference cargo value.

    Attributes:
        impact_count: Number of pothole strikes during the run.
        integrity: Remaining cargo integrity in percent.
        reference_loss: Loss against the reference cargo value.
        intensity: Ride intensity, ``(roughness / 10) * (speed / 100)``.
    """

    impact_count: int
    integrity: float
    reference_loss: float
    intensity: float


@dataclass(frozen=True)
class StressRunResult:
    """Physical outcome rescaled to the caller's cargo value.

    Attributes:
        impact: The physical-stage result.
        cargo_value: Actual value of the cargo carried.
        loss: Loss rescaled to ``cargo_value``.
    """

    impact: ImpactResult
    cargo_value: float
    loss: float


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------


def ride_intensity(
    roughness: float,
    speed_limit_kmh: float,
    config: EngineConfig | None = None,
) -> float:
    """Return the ride intensity ``(roughness / 10) * (speed / reference)``."""
    cfg = config or default_config()
    roughness = max(0.0, roughness)
    speed_limit_kmh = max(0.0, speed_limit_kmh)
    return (roughness / 10.0) * (speed_limit_kmh / cfg.impact_speed_reference_kmh)


def simulate_impacts(
    roughness: float,
    speed_limit_kmh: float,
    pothole_density: float,
    seed: int | None = None,
    config: EngineConfig | None = None,
) -> ImpactResult:
    """Run the physical stage of a stress run.

    The pothole field holds ``12`` potholes per density unit on roads
    rougher than ``4.0`` and ``4`` otherwise.  The number of strikes is
    Poisson distributed with mean::

        potholes * density * intensity * hit_rate

    Integrity and reference loss depend on roughness only::

        integrity      = max(10, 100 - roughness * 11)
        reference_loss = roughness * 1650

    Args:
        roughness: Roughness of the road driven (already policy-clamped).
        speed_limit_kmh: Travel speed in km/h.
        pothole_density: Pothole density multiplier (>= 0).
        seed: Seed for the per-call random generator.
        config: Engine constants.  Defaults to :func:`default_config`.

    Returns:
        An :class:`ImpactResult`.

    Raises:
        ValueError: If pothole_density is negative.
    """
    if pothole_density < 0.0:
        raise ValueError("pothole_density must be >= 0.")

    cfg = config or default_config()
    roughness = max(0.0, roughness)
    rng: Generator = np.random.default_rng(seed)

    intensity = ride_intensity(roughness, speed_limit_kmh, cfg)
    potholes: int = (
        cfg.impact_potholes_rough
        if roughness > cfg.impact_rough_threshold
        else cfg.impact_potholes_smooth
    )
    expected_hits: float = potholes * pothole_density * intensity * cfg.impact_hit_rate
    impact_count = int(rng.poisson(expected_hits))

    integrity: float = max(
        cfg.integrity_floor, 100.0 - roughness * cfg.integrity_loss_per_roughness
    )
    reference_loss: float = roughness * cfg.loss_per_roughness

    return ImpactResult(
        impact_count=impact_count,
        integrity=integrity,
        reference_loss=reference_loss,
        intensity=intensity,
    )


def rescale_loss(
    reference_loss: float,
    actual_cargo_value: float,
    reference_value: float | None = None,
    config: EngineConfig | None = None,
) -> float:
    """Rescale a reference loss to the caller's actual cargo value.

    ``scaled = reference_loss * (actual_cargo_value / reference_value)``

    A zero reference value short-circuits to ``0.0``.
    """
    cfg = config or default_config()
    reference = cfg.reference_cargo_value if reference_value is None else reference_value
    if reference == 0.0:
        return 0.0
    return reference_loss * (max(0.0, actual_cargo_value) / reference)


def run_stress_test(
    roughness: float,
    speed_limit_kmh: float,
    pothole_density: float,
    cargo_value: float,
    seed: int | None = None,
    config: EngineConfig | None = None,
) -> StressRunResult:
    """Compose the physical and monetary stages for one stress run."""
    cfg = config or default_config()
    impact = simulate_impacts(
        roughness, speed_limit_kmh, pothole_density, seed=seed, config=cfg
    )
    loss = rescale_loss(impact.reference_loss, cargo_value, config=cfg)
    return StressRunResult(impact=impact, cargo_value=cargo_value, loss=loss)


# ---------------------------------------------------------------------------
# Monte Carlo ensemble
# ---------------------------------------------------------------------------


def simulate_impacts_monte_carlo(
    roughness: float,
    speed_limit_kmh: float,
    pothole_density: float,
    cargo_value: float,
    runs: int,
    base_seed: int = 42,
    config: EngineConfig | None = None,
) -> dict[str, Any]:
    """Run a Monte Carlo ensemble of stress runs.

    Each replication uses ``seed = base_seed + i`` so that results are
    fully reproducible given the same ``base_seed`` and no global random
    state is modified.

    Args:
        roughness: Roughness of the road driven.
        speed_limit_kmh: Travel speed in km/h.
        pothole_density: Pothole density multiplier (>= 0).
        cargo_value: Actual value of the cargo carried.
        runs: Number of replications (>= 1).
        base_seed: Starting seed value.
        config: Engine constants.  Defaults to :func:`default_config`.

    Returns:
        Dictionary with keys:
            expected_impacts       -- mean strike count
            max_impacts            -- largest strike count observed
            expected_loss          -- mean rescaled loss
            impact_distribution    -- ``{count: probability}``
            no_impact_probability  -- fraction of runs without a strike

    Raises:
        ValueError: If runs < 1.
    """
    if runs < 1:
        raise ValueError("runs must be >= 1.")

    cfg = config or default_config()

    impact_sum: int = 0
    loss_sum: float = 0.0
    max_impacts: int = 0
    count_hist: dict[int, int] = defaultdict(int)

    for i in range(runs):
        result = run_stress_test(
            roughness,
            speed_limit_kmh,
            pothole_density,
            cargo_value,
            seed=base_seed + i,
            config=cfg,
        )
        hits = result.impact.impact_count
        impact_sum += hits
        loss_sum += result.loss
        max_impacts = max(max_impacts, hits)
        count_hist[hits] += 1

    inv: float = 1.0 / runs

    logger.debug(
        "Monte Carlo stress test: %d runs, mean impacts %.3f",
        runs,
        impact_sum * inv,
    )

    return {
        "expected_impacts": impact_sum * inv,
        "max_impacts": max_impacts,
        "expected_loss": loss_sum * inv,
        "impact_distribution": {
            count: n * inv for count, n in sorted(count_hist.items())
        },
        "no_impact_probability": count_hist.get(0, 0) * inv,
    }
