"""Deterministic condition projection for the road scenario engine.

Roughness (an IRI-like index, higher is rougher) is the unit of record.
The visual condition index (VCI) is a 0-100 display convenience derived
from it.
"""

from __future__ import annotations

import logging
import math

from road_engine.config import EngineConfig, default_config

logger = logging.getLogger(__name__)

# Upper roughness bound of each risk band, checked in order.
_RISK_BANDS: tuple[tuple[float, str], ...] = (
    (2.5, "Low"),
    (4.5, "Moderate"),
    (6.5, "High"),
)
_TOP_BAND: str = "Critical"


def project_roughness(
    baseline_roughness: float,
    surface: str,
    elapsed_years: float,
    config: EngineConfig | None = None,
) -> float:
    """Project a roughness index forward in time.

    The formula is linear in elapsed time::

        projected = baseline_roughness + elapsed_years * rate(surface)

    with paved roads gaining 0.4 units/year and gravel roads 1.2 units/year
    under the default configuration.

    The result is NOT clamped.  Callers feeding it to the scorer must pass
    it through :func:`clamp_roughness` first.

    Args:
        baseline_roughness: Roughness at the reference year.
        surface: Surface type (``"paved"`` or ``"gravel"``).
        elapsed_years: Years since the reference year.  Precondition:
            ``>= 0``; use :func:`clamp_elapsed_years` at the boundary.
        config: Engine constants.  Defaults to :func:`default_config`.

    Returns:
        Projected roughness.

    Raises:
        ValueError: If the surface has no configured degradation rate.
    """
    cfg = config or default_config()
    rate: float = cfg.degradation_rate(surface)
    return baseline_roughness + elapsed_years * rate


def clamp_elapsed_years(elapsed_years: float) -> int:
    """Clamp elapsed time to a non-negative whole number of years.

    NaN and infinite inputs count as zero elapsed years.
    """
    if not math.isfinite(elapsed_years):
        logger.debug("Non-finite elapsed years %r treated as 0", elapsed_years)
        return 0
    years = max(0, int(elapsed_years))
    if years != elapsed_years:
        logger.debug("Elapsed years %r clamped to %d", elapsed_years, years)
    return years


def clamp_roughness(roughness: float, config: EngineConfig | None = None) -> float:
    """Clamp a roughness value into the policy band (``[1, 10]`` by default)."""
    cfg = config or default_config()
    clamped = max(cfg.roughness_floor, min(cfg.roughness_ceiling, roughness))
    if clamped != roughness:
        logger.debug("Roughness %.3f clamped to %.3f", roughness, clamped)
    return clamped


def visual_condition_index(roughness: float) -> float:
    """Map roughness to the 0-100 visual condition index.

    ``vci = clamp(100 - roughness * 10, 0, 100)``
    """
    return max(0.0, min(100.0, 100.0 - roughness * 10.0))


def risk_band(roughness: float) -> str:
    """Classify roughness into ``Low``, ``Moderate``, ``High`` or ``Critical``."""
    for upper, label in _RISK_BANDS:
        if roughness <= upper:
            return label
    return _TOP_BAND
