"""Configuration loader for the road scenario engine.

Every constant the engine uses (degradation rates, risk thresholds, damage
weights, cargo value table, impact-stage coefficients) lives in a single
:class:`EngineConfig` table.  The built-in values are returned by
:func:`default_config`; :func:`load_config` overlays a YAML file on top of
them so a deployment can re-tune the engine without code changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DATA_DIR: Path = Path(__file__).resolve().parent.parent / "data"
CONFIG_PATH: Path = DATA_DIR / "engine_defaults.yaml"


@dataclass(frozen=True)
class EngineConfig:
    """Named, overridable constants for the road scenario engine.

    Attributes:
        degradation_rates: Roughness units gained per year, keyed by surface.
        roughness_floor: Lower bound of the roughness policy band.
        roughness_ceiling: Upper bound of the roughness policy band.
        bad_road_threshold: Roughness above which a road counts as "bad".
        speeding_threshold_kmh: Speed limit above which a trip is "speeding".
        heavy_threshold_tons: Cargo weight above which a load is "heavy".
        road_damage_weight: Damage points at roughness 10.
        weather_damage: Damage points added in rain.
        speed_damage_weight: Damage points at ``speed_reference_kmh``.
        speed_reference_kmh: Speed that yields the full speed weight.
        weight_damage_weight: Damage points at ``weight_reference_tons``.
        weight_reference_tons: Cargo weight that yields the full weight term.
        speed_amplifier: Speed-term multiplier on a bad road while speeding.
        weather_amplifier: Weather-term multiplier in rain while speeding.
        fragile_factor: Risk multiplier for damage-sensitive cargo.
        robust_factor: Risk multiplier for all other cargo.
        fragile_cargo: Cargo types treated as damage-sensitive.
        value_per_ton: Monetary value per ton, keyed by cargo type.
        default_value_per_ton: Value per ton for cargo missing from the table.
        reference_cargo_value: Cargo value the physical stage prices loss at.
        healthy_threshold: Cargo health above which a trip is a success.
        rough_surface_trigger: Road damage above which roughness is reported.
        fragility_trigger: Integrity loss above which fragility is reported.
        impact_potholes_rough: Potholes per density unit on rough roads.
        impact_potholes_smooth: Potholes per density unit otherwise.
        impact_rough_threshold: Roughness above which the rough field applies.
        impact_hit_rate: Probability scale of hitting a pothole.
        impact_speed_reference_kmh: Speed normaliser for ride intensity.
        integrity_floor: Lowest integrity the physical stage reports.
        integrity_loss_per_roughness: Integrity points lost per roughness unit.
        loss_per_roughness: Reference loss per roughness unit.
        do_nothing_decay: Condition-index points lost per year without funding.
        funded_fallback_uplift: Condition gain assumed when no forecast exists.
    """

    degradation_rates: dict[str, float] = field(
        default_factory=lambda: {"paved": 0.4, "gravel": 1.2}
    )
    roughness_floor: float = 1.0
    roughness_ceiling: float = 10.0

    bad_road_threshold: float = 4.5
    speeding_threshold_kmh: float = 80.0
    heavy_threshold_tons: float = 30.0

    road_damage_weight: float = 40.0
    weather_damage: float = 15.0
    speed_damage_weight: float = 20.0
    speed_reference_kmh: float = 120.0
    weight_damage_weight: float = 25.0
    weight_reference_tons: float = 50.0

    speed_amplifier: float = 1.5
    weather_amplifier: float = 1.5
    fragile_factor: float = 1.5
    robust_factor: float = 0.8
    fragile_cargo: frozenset[str] = frozenset({"electronics", "produce"})

    value_per_ton: dict[str, float] = field(
        default_factory=lambda: {"electronics": 50_000.0, "produce": 15_000.0}
    )
    default_value_per_ton: float = 5_000.0
    reference_cargo_value: float = 1_250_000.0

    healthy_threshold: float = 90.0
    rough_surface_trigger: float = 20.0
    fragility_trigger: float = 20.0

    impact_potholes_rough: int = 12
    impact_potholes_smooth: int = 4
    impact_rough_threshold: float = 4.0
    impact_hit_rate: float = 0.5
    impact_speed_reference_kmh: float = 100.0
    integrity_floor: float = 10.0
    integrity_loss_per_roughness: float = 11.0
    loss_per_roughness: float = 1650.0

    do_nothing_decay: float = 3.5
    funded_fallback_uplift: float = 5.0

    def degradation_rate(self, surface: str) -> float:
        """Return the yearly roughness gain for *surface*.

        Raises:
            ValueError: If the surface has no configured rate.
        """
        try:
            return self.degradation_rates[surface]
        except KeyError:
            raise ValueError(
                f"Unknown surface '{surface}'; expected one of "
                f"{sorted(self.degradation_rates)}"
            ) from None

    def cargo_value_per_ton(self, cargo_type: str) -> float:
        """Return the per-ton value of *cargo_type* (default for unknown)."""
        return self.value_per_ton.get(cargo_type, self.default_value_per_ton)

    @property
    def surfaces(self) -> tuple[str, ...]:
        """Surfaces with a configured degradation rate."""
        return tuple(self.degradation_rates)

    @property
    def listed_cargo_types(self) -> tuple[str, ...]:
        """Cargo types named in the value table or the fragile set."""
        return tuple(sorted(set(self.value_per_ton) | self.fragile_cargo))


_DEFAULT_CONFIG = EngineConfig()

_NON_NEGATIVE_FIELDS: tuple[str, ...] = tuple(
    f.name
    for f in fields(EngineConfig)
    if f.name not in ("degradation_rates", "value_per_ton", "fragile_cargo")
)


def default_config() -> EngineConfig:
    """Return the built-in engine configuration."""
    return _DEFAULT_CONFIG


def _validate_table(name: str, table: Any) -> dict[str, float]:
    if not isinstance(table, dict) or not table:
        raise ValueError(f"'{name}' must be a non-empty mapping")
    out: dict[str, float] = {}
    for key, val in table.items():
        if not isinstance(val, (int, float)) or isinstance(val, bool):
            raise ValueError(
                f"'{name}.{key}' must be numeric, got {type(val).__name__}"
            )
        if val < 0.0:
            raise ValueError(f"'{name}.{key}' must be >= 0, got {val}")
        out[str(key)] = float(val)
    return out


def load_config(path: Path | None = None) -> EngineConfig:
    """Load engine constants from a YAML file.

    Keys present in the file override the built-in defaults; absent keys
    keep their default value.  Unknown keys are rejected so that typos do
    not silently fall back to defaults.

    Args:
        path: Optional override for the configuration file path.

    Returns:
        The resulting :class:`EngineConfig`.

    Raises:
        FileNotFoundError: If the configuration file does not exist.
        ValueError: If a key is unknown or a value has the wrong type or
            is out of range.
    """
    config_path = path or CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Engine config file not found: {config_path}")

    with open(config_path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Engine config {config_path} must be a mapping")

    known = {f.name for f in fields(EngineConfig)}
    overrides: dict[str, Any] = {}

    for key, val in data.items():
        if key not in known:
            raise ValueError(f"Unknown engine config key '{key}'")

        if key in ("degradation_rates", "value_per_ton"):
            overrides[key] = _validate_table(key, val)
        elif key == "fragile_cargo":
            if not isinstance(val, list) or not all(isinstance(v, str) for v in val):
                raise ValueError("'fragile_cargo' must be a list of strings")
            overrides[key] = frozenset(val)
        else:
            if not isinstance(val, (int, float)) or isinstance(val, bool):
                raise ValueError(
                    f"'{key}' must be numeric, got {type(val).__name__}"
                )
            if key in _NON_NEGATIVE_FIELDS and val < 0:
                raise ValueError(f"'{key}' must be >= 0, got {val}")
            default = getattr(_DEFAULT_CONFIG, key)
            overrides[key] = int(val) if isinstance(default, int) else float(val)

    config = replace(_DEFAULT_CONFIG, **overrides)

    if config.roughness_floor > config.roughness_ceiling:
        raise ValueError("roughness_floor must be <= roughness_ceiling")
    if config.reference_cargo_value <= 0.0:
        raise ValueError("reference_cargo_value must be > 0")

    logger.info(
        "Loaded engine config from %s (%d overrides)", config_path, len(overrides)
    )
    return config
