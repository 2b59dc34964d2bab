"""Road segment model for the road scenario engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RoadSegmentState:
    """Immutable snapshot of the road segment being evaluated.

    Attributes:
        baseline_roughness: Current roughness index (IRI-like, higher is
            rougher).  Not clamped here; the test-drive composition clamps
            the projected value into the policy band.
        surface: Surface type, e.g. ``"paved"`` or ``"gravel"``.  Any
            surface with a configured degradation rate can be projected;
            an unconfigured one is rejected by the projector.
        width_meters: Carriageway width in metres (>= 0.0).
        name: Segment label shown to the user.
    """

    baseline_roughness: float
    surface: str
    width_meters: float
    name: str

    def __post_init__(self) -> None:
        """Validate segment parameters."""
        if not self.name:
            raise ValueError("Segment name must not be empty.")
        if not self.surface:
            raise ValueError("surface must not be empty.")
        if self.width_meters < 0.0:
            raise ValueError("width_meters must be >= 0.0.")
