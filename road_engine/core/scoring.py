"""Deterministic logistics risk and loss scorer for the road scenario engine.

The scorer combines road roughness with weather, speed and cargo inputs
into a bounded 0-100 damage score and a monetary loss estimate.  The
order of operations is fixed:

1. Derive the risk flags.
2. Compute the four base damage terms.
3. Amplify interaction terms (bad road + speeding, rain + speeding).
4. Multiply the *sum* of terms by the cargo fragility factor.
5. Clamp to ``[0, 100]`` and price the loss against the cargo value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from road_engine.config import EngineConfig, default_config
from road_engine.core.conditions import WEATHER_TYPES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RiskFlags:
    """Boolean risk conditions derived from the trip inputs.

    Attributes:
        is_bad_road: Roughness above the bad-road threshold.
        is_wet: It is raining.
        is_speeding: Speed above the speeding threshold.
        is_heavy: Cargo weight above the heavy-load threshold.
        is_fragile: Cargo type is damage-sensitive.
    """

    is_bad_road: bool
    is_wet: bool
    is_speeding: bool
    is_heavy: bool
    is_fragile: bool


@dataclass(frozen=True)
class SimulationResult:
    """Outcome of a scored trip.

    ``cargo_health`` is always ``100 - integrity_lost``; it is computed once
    from ``integrity_lost`` and never measured separately.

    Attributes:
        road_damage: Roughness damage term.
        weather_damage: Weather damage term (after amplification).
        speed_damage: Speed damage term (after amplification).
        weight_damage: Load damage term.
        fragility_factor: Multiplier applied to the summed terms.
        integrity_lost: Clamped damage score in ``[0, 100]``.
        cargo_health: ``100 - integrity_lost``.
        total_cargo_value: Value of the load carried.
        financial_loss: Portion of the cargo value lost.
        flags: The risk flags that drove the score.
    """

    road_damage: float
    weather_damage: float
    speed_damage: float
    weight_damage: float
    fragility_factor: float
    integrity_lost: float
    cargo_health: float
    total_cargo_value: float
    financial_loss: float
    flags: RiskFlags


def derive_flags(
    roughness: float,
    cargo_type: str,
    cargo_weight_tons: float,
    weather: str,
    speed_limit_kmh: float,
    config: EngineConfig | None = None,
) -> RiskFlags:
    """Evaluate the five risk conditions for a trip."""
    cfg = config or default_config()
    return RiskFlags(
        is_bad_road=roughness > cfg.bad_road_threshold,
        is_wet=weather == "rain",
        is_speeding=speed_limit_kmh > cfg.speeding_threshold_kmh,
        is_heavy=cargo_weight_tons > cfg.heavy_threshold_tons,
        is_fragile=cargo_type in cfg.fragile_cargo,
    )


def score_trip(
    roughness: float,
    cargo_type: str,
    cargo_weight_tons: float,
    weather: str,
    speed_limit_kmh: float,
    config: EngineConfig | None = None,
) -> SimulationResult:
    """Score the cargo damage and financial loss of a single trip.

    Under the default configuration::

        road_damage    = roughness / 10 * 40
        weather_damage = 15 if rain else 0       (x1.5 if rain and speeding)
        speed_damage   = speed / 120 * 20        (x1.5 if bad road and speeding)
        weight_damage  = weight / 50 * 25
        raw_risk       = sum(terms) * (1.5 if fragile else 0.8)
        integrity_lost = clamp(raw_risk, 0, 100)
        financial_loss = value_per_ton * weight * integrity_lost / 100

    Negative weight, speed and roughness are floored at zero so that no
    negative term can cancel real risk.  Policy-band clamping of roughness
    (``[1, 10]``) is the caller's responsibility.

    Args:
        roughness: Roughness of the road driven.
        cargo_type: Cargo carried.  Types missing from the configured value
            table are priced at ``default_value_per_ton``; fragility comes
            from ``fragile_cargo``.
        cargo_weight_tons: Load in tons.
        weather: ``"sunny"`` or ``"rain"``.
        speed_limit_kmh: Travel speed in km/h.
        config: Engine constants.  Defaults to :func:`default_config`.

    Returns:
        A :class:`SimulationResult`.

    Raises:
        ValueError: If weather is not a known value.
    """
    if weather not in WEATHER_TYPES:
        raise ValueError(f"weather must be one of {WEATHER_TYPES}, got {weather!r}.")

    cfg = config or default_config()

    roughness = max(0.0, float(roughness))
    cargo_weight_tons = max(0.0, float(cargo_weight_tons))
    speed_limit_kmh = max(0.0, float(speed_limit_kmh))

    # 1. Flags
    flags = derive_flags(
        roughness, cargo_type, cargo_weight_tons, weather, speed_limit_kmh, cfg
    )

    # 2. Base terms
    road_damage: float = (roughness / 10.0) * cfg.road_damage_weight
    weather_damage: float = cfg.weather_damage if flags.is_wet else 0.0
    speed_damage: float = (
        speed_limit_kmh / cfg.speed_reference_kmh
    ) * cfg.speed_damage_weight
    weight_damage: float = (
        cargo_weight_tons / cfg.weight_reference_tons
    ) * cfg.weight_damage_weight

    # 3. Interaction amplification
    if flags.is_bad_road and flags.is_speeding:
        speed_damage *= cfg.speed_amplifier
    if flags.is_wet and flags.is_speeding:
        weather_damage *= cfg.weather_amplifier

    # 4-6. Fragility multiplier on the sum, then clamp
    fragility_factor: float = (
        cfg.fragile_factor if flags.is_fragile else cfg.robust_factor
    )
    raw_risk: float = (
        road_damage + weather_damage + speed_damage + weight_damage
    ) * fragility_factor
    integrity_lost: float = max(0.0, min(100.0, raw_risk))
    cargo_health: float = 100.0 - integrity_lost

    # 7-8. Monetary value
    total_cargo_value: float = cfg.cargo_value_per_ton(cargo_type) * cargo_weight_tons
    financial_loss: float = total_cargo_value * (integrity_lost / 100.0)

    logger.debug(
        "Scored trip: raw_risk=%.2f integrity_lost=%.2f loss=%.2f",
        raw_risk,
        integrity_lost,
        financial_loss,
    )

    return SimulationResult(
        road_damage=road_damage,
        weather_damage=weather_damage,
        speed_damage=speed_damage,
        weight_damage=weight_damage,
        fragility_factor=fragility_factor,
        integrity_lost=integrity_lost,
        cargo_health=cargo_health,
        total_cargo_value=total_cargo_value,
        financial_loss=financial_loss,
        flags=flags,
    )
