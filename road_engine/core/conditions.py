"""Drive-condition model for the road scenario engine.

Drive conditions come straight from UI controls (sliders and selects).
Weather is validated on construction.  Cargo is free-form: any cargo type
missing from the configured value table is priced at the default per-ton
value and treated as robust unless it is listed as fragile.  The numeric
fields are accepted as given and re-clamped by
:meth:`DriveConditions.clamped` before they reach the scorer.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

# Cargo types offered by the front ends out of the box.
CARGO_TYPES: tuple[str, ...] = ("electronics", "produce", "bricks")
WEATHER_TYPES: tuple[str, ...] = ("sunny", "rain")


@dataclass(frozen=True)
class DriveConditions:
    """Immutable description of a simulated trip.

    Attributes:
        cargo_type: Cargo carried, e.g. ``"electronics"``, ``"produce"`` or
            ``"bricks"``.
        cargo_weight_tons: Load carried in tons.
        weather: ``"sunny"`` or ``"rain"``.
        speed_limit_kmh: Travel speed in km/h.
    """

    cargo_type: str
    cargo_weight_tons: float
    weather: str
    speed_limit_kmh: float

    def __post_init__(self) -> None:
        """Validate cargo and weather."""
        if not self.cargo_type:
            raise ValueError("cargo_type must not be empty.")
        if self.weather not in WEATHER_TYPES:
            raise ValueError(
                f"weather must be one of {WEATHER_TYPES}, got {self.weather!r}."
            )

    def clamped(self) -> DriveConditions:
        """Return a copy with negative weight and speed set to zero."""
        return replace(
            self,
            cargo_weight_tons=max(0.0, float(self.cargo_weight_tons)),
            speed_limit_kmh=max(0.0, float(self.speed_limit_kmh)),
        )
