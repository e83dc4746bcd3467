"""
Physical Constants for Nuclear Effects Calculation

All constants are in SI units unless stated otherwise.

References:
    - CODATA 2018: Fundamental Physical Constants
    - U.S. Standard Atmosphere, 1976 (NASA-TM-X-74335)
    - Glasstone & Dolan, "The Effects of Nuclear Weapons", 3rd Ed., 1977
"""

from typing import Final

# =============================================================================
# FUNDAMENTAL CONSTANTS (CODATA 2018)
# =============================================================================

STEFAN_BOLTZMANN: Final[float] = 5.670374419e-8
"""Stefan-Boltzmann constant [W/(m²·K⁴)]"""

# =============================================================================
# ATMOSPHERIC/ENVIRONMENTAL CONSTANTS (US Standard Atmosphere 1976)
# =============================================================================

GRAVITY: Final[float] = 9.80665
"""Standard gravitational acceleration [m/s²]"""

ATMOSPHERIC_PRESSURE: Final[float] = 101_325.0
"""Standard sea-level atmospheric pressure [Pa]"""

ATMOSPHERIC_SCALE_HEIGHT: Final[float] = 7400.0
"""Scale height used for altitude transmission of thermal radiation [m]"""

PASCALS_PER_PSI: Final[float] = 6894.757
"""Pressure conversion factor [Pa/psi]"""

# =============================================================================
# WEAPON ENERGY CONSTANTS
# =============================================================================

JOULES_PER_MEGATON: Final[float] = 4.184e15
"""TNT-equivalent energy of one megaton [J]"""

THERMAL_PARTITION: Final[float] = 0.35
"""Fraction of yield released as thermal radiation"""

THERMAL_CALIBRATION: Final[float] = 10_000.0
"""Calibration constant applied to the inverse-square thermal fluence"""

THERMAL_EXTINCTION_PER_KM: Final[float] = 0.17
"""Beer-Lambert extinction coefficient for thermal transmission [1/km]"""
