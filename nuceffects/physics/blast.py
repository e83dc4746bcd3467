"""
Blast Wave Calculations with Numba JIT Optimization

Peak overpressure from a modified Brode equation with Sachs scaling, Mach
stem enhancement for air bursts, and cube-root scaled damage radii.

Damage tiers are defined directly by cube-root scaling of 1 MT reference
radii. The overpressure curve is the physical model and is exposed for
diagnostics and validation; the tiers are not obtained by inverting it.

References:
    - Brode, H.L., "Review of Nuclear Weapons Effects", Ann. Rev. Nucl. Sci., 1968
    - Sachs, R.G., "The Dependence of Blast on Ambient Pressure and Temperature", BRL 466, 1944
    - Glasstone & Dolan, "The Effects of Nuclear Weapons", 3rd Ed., Chapter 3
"""

from typing import Final

import numba
import numpy as np

from .constants import ATMOSPHERIC_PRESSURE, JOULES_PER_MEGATON, PASCALS_PER_PSI
from .levels import EffectLevels, check_distance, check_yield

# 1 MT reference radii [m] for the severe (20 psi), moderate (10 psi) and
# light (5 psi) tiers
BLAST_REFERENCE_RADII: Final[tuple] = (2000.0, 3000.0, 4500.0)

TRIPLE_POINT_COEFFICIENT: Final[float] = 83.0
"""Triple-point height coefficient [m/MT^0.4]"""

MACH_REGION_ENHANCEMENT: Final[float] = 1.25
"""Overpressure multiplier below the triple-point height"""


# =============================================================================
# JIT KERNELS
# =============================================================================


@numba.jit(nopython=True, cache=True)
def _mach_stem_factor_jit(yield_mt: float, height_m: float) -> float:
    """
    JIT-compiled Mach stem enhancement factor.

    Args:
        yield_mt: Weapon yield [MT]
        height_m: Height of burst [m]

    Returns:
        Dimensionless multiplier (1.0 for surface bursts)
    """
    factor = 1.0
    if height_m > 0.0:
        mach_height = height_m / yield_mt ** (1.0 / 3.0)
        factor = 1.0 + 0.1 * np.exp(-mach_height / 100.0)

        if height_m < TRIPLE_POINT_COEFFICIENT * yield_mt**0.4:
            factor *= MACH_REGION_ENHANCEMENT

    return factor


@numba.jit(nopython=True, cache=True)
def _calculate_overpressure_jit(
    distance_m: float, yield_mt: float, height_m: float, ambient_pressure: float
) -> float:
    """
    JIT-compiled modified Brode equation.

    P = P₀ · (1 + 0.076/s + 0.255/s² + 0.536/s³) · f_mach
    s = R / (E / P₀)^(1/3)

    Args:
        distance_m: Ground distance [m] (> 0)
        yield_mt: Weapon yield [MT] (> 0)
        height_m: Height of burst [m] (>= 0)
        ambient_pressure: Ambient pressure P₀ [Pa]

    Returns:
        Peak pressure [Pa]
    """
    energy = yield_mt * JOULES_PER_MEGATON
    scaled_distance = distance_m / (energy / ambient_pressure) ** (1.0 / 3.0)

    brode = (
        1.0
        + 0.076 / scaled_distance
        + 0.255 / scaled_distance**2
        + 0.536 / scaled_distance**3
    )

    return ambient_pressure * brode * _mach_stem_factor_jit(yield_mt, height_m)


@numba.jit(nopython=True, cache=True)
def _overpressure_profile_jit(
    distances_m: np.ndarray, yield_mt: float, height_m: float, ambient_pressure: float
) -> np.ndarray:
    """Evaluate the Brode equation over an array of distances."""
    result = np.empty(distances_m.shape[0])
    for i in range(distances_m.shape[0]):
        result[i] = _calculate_overpressure_jit(distances_m[i], yield_mt, height_m, ambient_pressure)
    return result


# =============================================================================
# HIGH-LEVEL API FUNCTIONS
# =============================================================================


def triple_point_height(yield_mt: float) -> float:
    """
    Height below which a burst produces a Mach region [m].

    h_tp = 83 · W^0.4
    """
    return TRIPLE_POINT_COEFFICIENT * check_yield(yield_mt) ** 0.4


def mach_stem_factor(yield_mt: float, height_m: float) -> float:
    """
    Mach stem enhancement of overpressure for a burst at height_m.

    Base 1.0; air bursts add 0.1·exp(-(h/W^(1/3))/100), and bursts below
    the triple-point height are further multiplied by 1.25.
    """
    return _mach_stem_factor_jit(check_yield(yield_mt), max(0.0, float(height_m)))


def calculate_overpressure(
    distance_m: float,
    yield_mt: float,
    height_m: float = 0.0,
    ambient_pressure: float = ATMOSPHERIC_PRESSURE,
) -> float:
    """
    Calculate peak blast pressure at a ground distance.

    Args:
        distance_m: Ground distance from ground zero [m]
        yield_mt: Weapon yield [MT]
        height_m: Height of burst [m] (negative values clamp to 0)
        ambient_pressure: Ambient pressure [Pa]

    Returns:
        Peak pressure [Pa]

    Raises:
        InvalidDistanceError: distance_m <= 0
        InvalidYieldError: yield_mt <= 0

    Reference: Brode (1968), Sachs scaling
    """
    return _calculate_overpressure_jit(
        check_distance(distance_m),
        check_yield(yield_mt),
        max(0.0, float(height_m)),
        ambient_pressure,
    )


def calculate_overpressure_profile(
    distances_m: np.ndarray,
    yield_mt: float,
    height_m: float = 0.0,
    ambient_pressure: float = ATMOSPHERIC_PRESSURE,
) -> np.ndarray:
    """
    Vectorized calculate_overpressure over an array of distances.

    Raises:
        InvalidDistanceError: any distance <= 0
    """
    distances_m = np.asarray(distances_m, dtype=np.float64).ravel()
    if distances_m.size and not np.all(distances_m > 0.0):
        check_distance(float(distances_m[~(distances_m > 0.0)][0]))

    return _overpressure_profile_jit(
        distances_m, check_yield(yield_mt), max(0.0, float(height_m)), ambient_pressure
    )


def overpressure_psi(pressure_pa: float) -> float:
    """Convert a pressure in Pa to psi."""
    return pressure_pa / PASCALS_PER_PSI


def calculate_blast_radii(yield_mt: float) -> EffectLevels:
    """
    Blast damage radii by cube-root scaling.

    R = R_ref · W^(1/3), with R_ref = 2000 / 3000 / 4500 m

    Height effects are not included here; see height.apply_height_attenuation.
    """
    scaling = check_yield(yield_mt) ** (1.0 / 3.0)
    return EffectLevels.from_reference(*BLAST_REFERENCE_RADII, scaling=scaling)
