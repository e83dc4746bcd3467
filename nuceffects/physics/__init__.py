"""
NucEffects Physics Package

Closed-form nuclear weapons effects models.

Modules:
    - constants: Physical constants (SI units)
    - levels: Severity tier container and input checks
    - blast: Brode/Sachs overpressure and blast damage radii
    - thermal: Thermal fluence and burn radii
    - radiation: Initial radiation radii
    - height: Height attenuation, optimal heights, burst types
    - fallout: DELFIC-style fallout footprint
"""

from .blast import calculate_blast_radii, calculate_overpressure
from .constants import (
    ATMOSPHERIC_PRESSURE,
    GRAVITY,
    JOULES_PER_MEGATON,
    STEFAN_BOLTZMANN,
)
from .fallout import FalloutPattern, calculate_fallout
from .height import (
    BurstType,
    OptimalHeights,
    apply_height_attenuation,
    calculate_optimal_heights,
    height_attenuation_factor,
    suggested_height,
)
from .levels import EffectLevels, calculate_area
from .radiation import calculate_radiation_radii
from .thermal import calculate_thermal_fluence, calculate_thermal_radii

__all__ = [
    # Constants
    "ATMOSPHERIC_PRESSURE",
    "GRAVITY",
    "JOULES_PER_MEGATON",
    "STEFAN_BOLTZMANN",
    # Tiers
    "EffectLevels",
    "calculate_area",
    # Blast
    "calculate_overpressure",
    "calculate_blast_radii",
    # Thermal
    "calculate_thermal_fluence",
    "calculate_thermal_radii",
    # Radiation
    "calculate_radiation_radii",
    # Height
    "BurstType",
    "OptimalHeights",
    "apply_height_attenuation",
    "calculate_optimal_heights",
    "height_attenuation_factor",
    "suggested_height",
    # Fallout
    "FalloutPattern",
    "calculate_fallout",
]
