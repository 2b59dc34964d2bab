"""Rule-based narrative composer for scored trips."""

from __future__ import annotations

from road_engine.config import EngineConfig, default_config
from road_engine.core.projection import risk_band
from road_engine.core.scoring import SimulationResult

SUCCESS_MESSAGE: str = (
    "Successful transport. Cargo arrived within tolerance; "
    "no significant logistics risk detected."
)

FAILURE_TEMPLATE: str = (
    "Logistics failure detected. Primary failure vectors: {factors}. "
    "Recommendation: improve pavement quality or reduce transport speed."
)

# Used when cargo health is below the success threshold but no single
# factor crosses its trigger.
FALLBACK_FACTOR: str = "cumulative minor stress (no single dominant factor)"

_HEADLINES: dict[str, str] = {
    "Low": "Ride quality is stable; low probability of cargo shock events.",
    "Moderate": "Moderate roughness; shock events increase at higher speed.",
    "High": "High roughness; frequent impacts likely, speed discipline required.",
    "Critical": (
        "Critical roughness; impacts are highly likely, "
        "accelerated asset and logistics risk."
    ),
}


def failure_factors(
    result: SimulationResult,
    roughness: float,
    config: EngineConfig | None = None,
) -> list[str]:
    """List the triggered failure factors in reporting order.

    Each check is independent; any combination may fire.
    """
    cfg = config or default_config()
    flags = result.flags
    factors: list[str] = []

    if result.road_damage > cfg.rough_surface_trigger:
        factors.append(f"rough surface (roughness {roughness:.1f})")
    if flags.is_wet and flags.is_speeding:
        factors.append("traction loss (rain + speed)")
    if flags.is_heavy and flags.is_bad_road:
        factors.append("excessive load on poor pavement")
    if flags.is_fragile and result.integrity_lost > cfg.fragility_trigger:
        factors.append("cargo fragility")

    return factors


def explain_result(
    result: SimulationResult,
    roughness: float,
    config: EngineConfig | None = None,
) -> str:
    """Turn a scored trip into a human-readable explanation.

    Trips with cargo health above the success threshold (90 by default)
    get a fixed success message.  Otherwise the triggered factors are
    joined with ``" + "`` into the failure template; when none trigger,
    :data:`FALLBACK_FACTOR` is reported so the sentence is never empty.

    Args:
        result: Output of :func:`road_engine.core.scoring.score_trip`.
        roughness: Roughness the trip was scored at.
        config: Engine constants.  Defaults to :func:`default_config`.

    Returns:
        The narrative string.
    """
    cfg = config or default_config()
    if result.cargo_health > cfg.healthy_threshold:
        return SUCCESS_MESSAGE

    factors = failure_factors(result, roughness, cfg) or [FALLBACK_FACTOR]
    return FAILURE_TEMPLATE.format(factors=" + ".join(factors))


def describe_roughness(roughness: float) -> str:
    """Return the one-line ride-quality headline for a roughness value."""
    return _HEADLINES[risk_band(roughness)]
