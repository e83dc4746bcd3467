"""
Simulation Objects

Immutable value objects passed through the effects pipeline: detonation
parameters, target population model, casualty estimate and the aggregated
result.

Negative height and wind speed are clamped to zero on construction; a
non-positive yield is rejected.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from nuceffects.errors import InvalidPopulationModelError
from nuceffects.physics.fallout import FalloutPattern
from nuceffects.physics.height import BurstType, OptimalHeights
from nuceffects.physics.levels import EffectLevels, check_yield

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetonationParameters:
    """
    Detonation parameters for a single calculation.

    Attributes:
        yield_mt: Weapon yield [MT] (> 0)
        height_m: Height of burst [m] (>= 0, negative clamps to 0)
        wind_speed_kmh: Mean wind speed [km/h] (>= 0, negative clamps to 0)
        burst_type: Burst type label, echoed for display only
    """

    yield_mt: float
    height_m: float = 0.0
    wind_speed_kmh: float = 0.0
    burst_type: Optional[BurstType] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "yield_mt", check_yield(self.yield_mt))

        height_m = float(self.height_m)
        if not math.isfinite(height_m):
            raise ValueError(f"Height of burst must be finite, got {height_m}")
        if height_m < 0.0:
            logger.debug("Clamping negative height of burst %.1f m to 0", height_m)
            height_m = 0.0
        object.__setattr__(self, "height_m", height_m)

        wind = float(self.wind_speed_kmh)
        if not math.isfinite(wind):
            raise ValueError(f"Wind speed must be finite, got {wind}")
        if wind < 0.0:
            logger.debug("Clamping negative wind speed %.1f km/h to 0", wind)
            wind = 0.0
        object.__setattr__(self, "wind_speed_kmh", wind)

    @property
    def is_airburst(self) -> bool:
        return self.height_m > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/display."""
        return {
            "yield_mt": self.yield_mt,
            "height_m": self.height_m,
            "is_airburst": self.is_airburst,
            "wind_speed_kmh": self.wind_speed_kmh,
            "burst_type": self.burst_type.value if self.burst_type else None,
        }


@dataclass(frozen=True)
class PopulationModel:
    """
    Two-zone population density model of a target.

    Attributes:
        core_density: Urban core density [people/km²]
        suburban_density: Suburban reference density [people/km²]
        core_radius_km: Radius of the urban core [km]
        name: Target name (display only)
        country: Target country (display only)
    """

    core_density: float
    suburban_density: float
    core_radius_km: float
    name: str = ""
    country: str = ""

    def __post_init__(self) -> None:
        for label in ("core_density", "suburban_density", "core_radius_km"):
            value = float(getattr(self, label))
            if not math.isfinite(value) or value <= 0.0:
                raise InvalidPopulationModelError(f"{label} must be positive, got {value}")
            object.__setattr__(self, label, value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "country": self.country,
            "core_density": self.core_density,
            "suburban_density": self.suburban_density,
            "core_radius_km": self.core_radius_km,
        }


@dataclass(frozen=True)
class CasualtyEstimate:
    """
    Casualty totals from the ring integration.

    Attributes:
        deaths: Prompt fatalities
        severe_injuries: Severe injuries
        light_injuries: Light injuries
        long_term_deaths_1yr: Projected deaths among the injured after 1 year
        long_term_deaths_5yr: ... after 5 years
        long_term_deaths_10yr: ... after 10 years
        long_term_deaths_20yr: ... after 20 years
    """

    deaths: float = 0.0
    severe_injuries: float = 0.0
    light_injuries: float = 0.0
    long_term_deaths_1yr: float = 0.0
    long_term_deaths_5yr: float = 0.0
    long_term_deaths_10yr: float = 0.0
    long_term_deaths_20yr: float = 0.0

    @property
    def total_casualties(self) -> float:
        return self.deaths + self.severe_injuries + self.light_injuries

    def to_dict(self) -> Dict[str, float]:
        return {
            "deaths": self.deaths,
            "severe_injuries": self.severe_injuries,
            "light_injuries": self.light_injuries,
            "total_casualties": self.total_casualties,
            "long_term_deaths_1yr": self.long_term_deaths_1yr,
            "long_term_deaths_5yr": self.long_term_deaths_5yr,
            "long_term_deaths_10yr": self.long_term_deaths_10yr,
            "long_term_deaths_20yr": self.long_term_deaths_20yr,
        }


@dataclass(frozen=True)
class EffectsResult:
    """
    Complete result of one effects calculation.

    Attributes:
        parameters: Echoed detonation parameters
        thermal: Thermal damage tiers
        blast: Blast damage tiers (height attenuated)
        radiation: Initial radiation tiers (height attenuated)
        fallout: Fallout pattern
        casualties: Casualty estimate (all zero without a target)
        optimal_heights: Advisory optimal burst heights for the yield
        population: Target population model, if one was supplied
    """

    parameters: DetonationParameters
    thermal: EffectLevels
    blast: EffectLevels
    radiation: EffectLevels
    fallout: FalloutPattern
    casualties: CasualtyEstimate
    optimal_heights: OptimalHeights
    population: Optional[PopulationModel] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/display."""
        return {
            "parameters": self.parameters.to_dict(),
            "thermal": self.thermal.to_dict(),
            "blast": self.blast.to_dict(),
            "radiation": self.radiation.to_dict(),
            "fallout": self.fallout.to_dict(),
            "casualties": self.casualties.to_dict(),
            "optimal_heights": self.optimal_heights.to_dict(),
            "population": self.population.to_dict() if self.population else None,
        }
