"""
Thermal Radiation Model

Thermal fluence from the inverse-square law with Beer-Lambert atmospheric
attenuation, plus obliquity and altitude-transmission terms for air bursts.
Damage tiers use an empirical W^0.4 scaling law, independent of the fluence
function.

References:
    - Glasstone & Dolan, "The Effects of Nuclear Weapons", 3rd Ed., Chapter 7
    - Beer-Lambert law for atmospheric transmission
"""

import math
from typing import Final

import numba
import numpy as np

from .constants import (
    ATMOSPHERIC_SCALE_HEIGHT,
    JOULES_PER_MEGATON,
    STEFAN_BOLTZMANN,
    THERMAL_CALIBRATION,
    THERMAL_EXTINCTION_PER_KM,
    THERMAL_PARTITION,
)
from .levels import EffectLevels, check_distance, check_yield

# 1 MT reference radii [m]: third-degree, second-degree, first-degree burns
THERMAL_REFERENCE_RADII: Final[tuple] = (1200.0, 1800.0, 2400.0)


@numba.jit(nopython=True, cache=True)
def _calculate_thermal_fluence_jit(distance_m: float, yield_mt: float, height_m: float) -> float:
    """
    JIT-compiled thermal fluence.

    Q = C · E_th / (4π R²) · τ · f_obl · f_alt

    Args:
        distance_m: Ground distance [m] (> 0)
        yield_mt: Weapon yield [MT] (> 0)
        height_m: Height of burst [m] (>= 0)

    Returns:
        Thermal fluence [J/m²]
    """
    energy = yield_mt * JOULES_PER_MEGATON * THERMAL_PARTITION
    fluence = THERMAL_CALIBRATION * (energy / (4.0 * np.pi * distance_m**2))

    # Beer-Lambert attenuation
    transmission = np.exp(-THERMAL_EXTINCTION_PER_KM * distance_m / 1000.0)

    if height_m > 0.0:
        obliquity = np.sqrt(1.0 - (height_m / (distance_m + height_m)) ** 2)
        fluence *= obliquity * np.exp(-height_m / ATMOSPHERIC_SCALE_HEIGHT)

    return fluence * transmission


def calculate_thermal_fluence(distance_m: float, yield_mt: float, height_m: float = 0.0) -> float:
    """
    Calculate thermal fluence at a ground distance.

    Args:
        distance_m: Ground distance from ground zero [m]
        yield_mt: Weapon yield [MT]
        height_m: Height of burst [m] (negative values clamp to 0)

    Returns:
        Thermal fluence [J/m²]

    Raises:
        InvalidDistanceError: distance_m <= 0
        InvalidYieldError: yield_mt <= 0
    """
    return _calculate_thermal_fluence_jit(
        check_distance(distance_m), check_yield(yield_mt), max(0.0, float(height_m))
    )


def fireball_temperature(yield_mt: float) -> float:
    """Fireball temperature estimate [K]: T = 6000 + 1000·log10(W)."""
    return 6000.0 + 1000.0 * math.log10(check_yield(yield_mt))


def fireball_radiant_exitance(yield_mt: float) -> float:
    """Stefan-Boltzmann radiant exitance σT⁴ of the fireball surface [W/m²]."""
    return STEFAN_BOLTZMANN * fireball_temperature(yield_mt) ** 4


def calculate_thermal_radii(yield_mt: float) -> EffectLevels:
    """
    Thermal damage radii by W^0.4 scaling.

    R = R_ref · W^0.4, with R_ref = 1200 / 1800 / 2400 m
    """
    scaling = check_yield(yield_mt) ** 0.4
    return EffectLevels.from_reference(*THERMAL_REFERENCE_RADII, scaling=scaling)
