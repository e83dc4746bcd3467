"""
Initial Nuclear Radiation Model

Initial radiation falls off steeply with distance and is dominated by yield
over the modeled range, so only a W^0.19 scaling law is defined.
"""

from typing import Final

from .levels import EffectLevels, check_yield

# 1 MT reference radii [m]: lethal dose, severe effects, light effects
RADIATION_REFERENCE_RADII: Final[tuple] = (800.0, 1200.0, 1600.0)


def calculate_radiation_radii(yield_mt: float) -> EffectLevels:
    """R = R_ref · W^0.19, with R_ref = 800 / 1200 / 1600 m."""
    scaling = check_yield(yield_mt) ** 0.19
    return EffectLevels.from_reference(*RADIATION_REFERENCE_RADII, scaling=scaling)
