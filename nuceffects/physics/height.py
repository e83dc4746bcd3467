"""
Height of Burst Effects

Height-dependent attenuation of blast and radiation radii, yield-scaled
optimal burst heights, and the burst-type catalogue that turns those optima
into suggested heights.

The engine never selects a height on its own; optimal heights are advisory
values for whoever chooses the burst type.

Reference: Glasstone & Dolan, "The Effects of Nuclear Weapons", 3rd Ed., §3.73
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Final, List, Optional, Tuple

from nuceffects.errors import CatalogueError

from .levels import EffectLevels, check_yield

logger = logging.getLogger(__name__)

ATTENUATION_HEIGHT_M: Final[float] = 10_000.0
"""Height at which the linear attenuation would reach zero [m]"""

MIN_HEIGHT_FACTOR: Final[float] = 0.3
"""Floor on the height attenuation factor"""


# =============================================================================
# HEIGHT ATTENUATION
# =============================================================================


def height_attenuation_factor(height_m: float) -> float:
    """
    Multiplicative correction for blast and radiation radii.

    f = max(0.3, 1 - h / 10000), bounded to [0.3, 1.0] for h >= 0
    """
    height_m = max(0.0, float(height_m))
    return max(MIN_HEIGHT_FACTOR, 1.0 - height_m / ATTENUATION_HEIGHT_M)


def apply_height_attenuation(
    blast: EffectLevels, radiation: EffectLevels, height_m: float
) -> Tuple[EffectLevels, EffectLevels]:
    """
    Apply the height factor to blast and radiation tiers.

    Thermal radii are not passed in: the thermal model carries its own
    height terms.

    Returns:
        (attenuated_blast, attenuated_radiation)
    """
    factor = height_attenuation_factor(height_m)
    return blast.scaled(factor), radiation.scaled(factor)


# =============================================================================
# OPTIMAL HEIGHTS
# =============================================================================


@dataclass(frozen=True)
class OptimalHeights:
    """
    Yield-scaled optimal heights of burst [m].

    Attributes:
        thermal_m: Height maximizing thermal effects
        blast_m: Height maximizing blast effects
        combined_m: Compromise height
    """

    thermal_m: float
    blast_m: float
    combined_m: float

    def to_dict(self) -> Dict[str, float]:
        return {"thermal_m": self.thermal_m, "blast_m": self.blast_m, "combined_m": self.combined_m}


def calculate_optimal_heights(yield_mt: float) -> OptimalHeights:
    """
    Optimal heights from cube-root scaling.

    f = W^(1/3); thermal = 220·f, blast = 180·f, combined = 200·f
    """
    yield_factor = check_yield(yield_mt) ** (1.0 / 3.0)
    return OptimalHeights(
        thermal_m=220.0 * yield_factor,
        blast_m=180.0 * yield_factor,
        combined_m=200.0 * yield_factor,
    )


# =============================================================================
# BURST TYPES
# =============================================================================


class BurstType(Enum):
    """Burst type options offered to the operator."""

    SURFACE = "surface"
    OPTIMUM = "optimum"
    LOW = "low"
    HIGH = "high"
    THERMAL_OPTIMIZED = "thermal"
    BLAST_OPTIMIZED = "blast"
    CUSTOM = "custom"


@dataclass(frozen=True)
class BurstTypeInfo:
    """
    Display metadata for a burst type.

    The fallout and radiation factors are advisory labels only; no model
    multiplies by them.
    """

    name: str
    description: str
    fallout_factor: Optional[float] = None
    radiation_factor: Optional[float] = None


BURST_TYPE_INFO: Dict[BurstType, BurstTypeInfo] = {
    BurstType.SURFACE: BurstTypeInfo(
        "Surface Burst", "Maximum fallout, reduced blast radius", 1.0, 1.0
    ),
    BurstType.OPTIMUM: BurstTypeInfo(
        "Optimal Air Burst", "Best combined blast/thermal effects", 0.5, 0.7
    ),
    BurstType.LOW: BurstTypeInfo("Low Air Burst", "Balanced effects, moderate fallout", 0.7, 0.8),
    BurstType.HIGH: BurstTypeInfo("High Air Burst", "Minimum fallout, reduced effects", 0.3, 0.5),
    BurstType.THERMAL_OPTIMIZED: BurstTypeInfo(
        "Thermal Optimized", "Maximum thermal radiation effects"
    ),
    BurstType.BLAST_OPTIMIZED: BurstTypeInfo("Blast Optimized", "Maximum blast wave effects"),
    BurstType.CUSTOM: BurstTypeInfo("Custom Height", "User defined height"),
}


def get_burst_type(name: str) -> BurstType:
    """
    Look up a burst type by value ("optimum") or member name ("OPTIMUM").

    Raises:
        CatalogueError: unknown name
    """
    key = str(name).strip()
    for burst_type in BurstType:
        if key.lower() == burst_type.value or key.upper() == burst_type.name:
            return burst_type

    raise CatalogueError(
        f"Unknown burst type '{name}'. Available: {[b.value for b in BurstType]}"
    )


def get_burst_type_names() -> List[str]:
    """Get list of burst type identifiers."""
    return [b.value for b in BurstType]


def suggested_height(
    burst_type: BurstType, yield_mt: float, custom_height_m: Optional[float] = None
) -> float:
    """
    Height of burst [m] for a burst type.

    Args:
        burst_type: Selected burst type
        yield_mt: Weapon yield [MT]
        custom_height_m: Height for BurstType.CUSTOM (negative clamps to 0)

    Returns:
        Height of burst [m]

    Raises:
        ValueError: CUSTOM without custom_height_m
    """
    optimal = calculate_optimal_heights(yield_mt)

    if burst_type == BurstType.SURFACE:
        return 0.0
    elif burst_type == BurstType.OPTIMUM:
        return optimal.combined_m
    elif burst_type == BurstType.LOW:
        return optimal.combined_m * 0.7
    elif burst_type == BurstType.HIGH:
        return optimal.combined_m * 1.5
    elif burst_type == BurstType.THERMAL_OPTIMIZED:
        return optimal.thermal_m
    elif burst_type == BurstType.BLAST_OPTIMIZED:
        return optimal.blast_m

    if custom_height_m is None:
        raise ValueError("BurstType.CUSTOM requires custom_height_m")

    height_m = max(0.0, float(custom_height_m))
    if height_m > optimal.combined_m * 3:
        logger.warning(
            "Height %.0f m is more than 3x the optimum (%.0f m); effects will be reduced",
            height_m,
            optimal.combined_m,
        )
    return height_m
