"""
Fallout Pattern Model

Empirical DELFIC-style estimate of the local fallout footprint: stabilized
cloud height, particulate and activity fractions, and a downwind lobe
(or a circular pattern in calm air).

References:
    - Norment, H.G., "DELFIC: Department of Defense Fallout Prediction System", DNA 5159F, 1979
    - Glasstone & Dolan, "The Effects of Nuclear Weapons", 3rd Ed., Chapter 9
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Final

from .constants import GRAVITY
from .levels import check_yield

CALM_WIND_THRESHOLD_KMH: Final[float] = 0.1
"""Below this wind speed the pattern is treated as circular [km/h]"""

GROUND_BURST_SCALE: Final[float] = 1.0
AIR_BURST_SCALE: Final[float] = 0.3


@dataclass(frozen=True)
class FalloutPattern:
    """
    Fallout footprint.

    Attributes:
        max_downwind_distance_km: Maximum downwind extent [km]
        max_width_km: Maximum crosswind width [km]
        dangerous_zone_area_km2: Area of dangerous fallout [km²]
        fallout_angle_deg: Angular spread of the pattern [degrees]
        stabilized_cloud_height_m: Cloud stabilization altitude [m]
        particle_fraction: Fraction of particulate activity reaching ground
        activity_fraction: Activity fractionation factor
        effective_yield_mt: Yield contributing to local fallout [MT]
    """

    max_downwind_distance_km: float
    max_width_km: float
    dangerous_zone_area_km2: float
    fallout_angle_deg: float
    stabilized_cloud_height_m: float = 0.0
    particle_fraction: float = 0.0
    activity_fraction: float = 0.0
    effective_yield_mt: float = 0.0

    @property
    def is_circular(self) -> bool:
        return self.fallout_angle_deg == 360.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/display."""
        return {
            "max_downwind_distance_km": self.max_downwind_distance_km,
            "max_width_km": self.max_width_km,
            "dangerous_zone_area_km2": self.dangerous_zone_area_km2,
            "fallout_angle_deg": self.fallout_angle_deg,
            "stabilized_cloud_height_m": self.stabilized_cloud_height_m,
            "particle_fraction": self.particle_fraction,
            "activity_fraction": self.activity_fraction,
            "effective_yield_mt": self.effective_yield_mt,
            "is_circular": self.is_circular,
        }


def stabilized_cloud_height(yield_mt: float, height_m: float) -> float:
    """
    Cloud stabilization altitude [m].

    H = 212·W^0.375 for a surface burst (height == 0), 188·W^0.375 otherwise
    """
    coefficient = 212.0 if height_m == 0 else 188.0
    return coefficient * check_yield(yield_mt) ** 0.375


def calculate_fallout(yield_mt: float, height_m: float, wind_speed_kmh: float) -> FalloutPattern:
    """
    Calculate the fallout pattern for a single burst.

    Args:
        yield_mt: Weapon yield [MT]
        height_m: Height of burst [m] (negative clamps to 0)
        wind_speed_kmh: Mean wind speed [km/h] (negative clamps to 0)

    Returns:
        FalloutPattern

    Raises:
        InvalidYieldError: yield_mt <= 0
    """
    yield_mt = check_yield(yield_mt)
    height_m = max(0.0, float(height_m))
    wind_speed_kmh = max(0.0, float(wind_speed_kmh))
    is_airburst = height_m > 0

    cloud_height = stabilized_cloud_height(yield_mt, height_m)

    # Less particulate activity reaches the ground as burst height increases
    if is_airburst:
        particle_fraction = 0.3 * math.exp(-height_m / (cloud_height * 0.7))
    else:
        particle_fraction = 1.0

    # Sub-kiloton yields would drive the fraction negative
    activity_fraction = max(0.0, 0.6 + 0.2 * math.log10(yield_mt))
    effective_yield = yield_mt * particle_fraction * activity_fraction

    # Base radius of the settling cloud [m]
    base_radius = 1000.0 * effective_yield**0.4

    if wind_speed_kmh < CALM_WIND_THRESHOLD_KMH:
        max_distance = base_radius / 1000.0
        max_width = max_distance
        angle = 360.0
        area = math.pi * max_distance**2
    else:
        wind_transport = (
            wind_speed_kmh
            * 3600.0
            * (effective_yield**0.4 / GRAVITY)
            * (1.0 + 0.15 * math.log10(yield_mt))
        )
        max_distance = max(base_radius / 1000.0, wind_transport)

        # Turbulent lateral diffusion scaled by cloud height
        max_width = max(
            0.0,
            max_distance * (0.14 + 0.02 * math.log10(yield_mt)) * math.sqrt(cloud_height / 1000.0),
        )
        angle = (
            40.0
            * math.exp(-height_m / (cloud_height * 2.0))
            * (1.0 - 0.1 * math.log10(max(1.0, wind_speed_kmh)))
        )
        # Triangular lobe, reduced for air bursts
        area = max(
            0.0, 0.5 * max_distance * max_width * particle_fraction * (1.0 - 0.2 * is_airburst)
        )

    area *= GROUND_BURST_SCALE if height_m == 0 else AIR_BURST_SCALE

    return FalloutPattern(
        max_downwind_distance_km=max_distance,
        max_width_km=max_width,
        dangerous_zone_area_km2=area,
        fallout_angle_deg=angle,
        stabilized_cloud_height_m=cloud_height,
        particle_fraction=particle_fraction,
        activity_fraction=activity_fraction,
        effective_yield_mt=effective_yield,
    )
