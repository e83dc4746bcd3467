"""
Effect Severity Tiers

Container for the three damage tiers (severe, moderate, light) of one
effect category, plus the shared input checks used by every model.
"""

import math
from dataclasses import dataclass
from typing import Dict

from nuceffects.errors import InvalidDistanceError, InvalidYieldError


def calculate_area(radius_m: float) -> float:
    """
    Area of a circle of the given radius.

    Args:
        radius_m: Radius [m]

    Returns:
        Area [km²] = π·(radius/1000)²
    """
    return math.pi * (radius_m / 1000.0) ** 2


def check_yield(yield_mt: float) -> float:
    """Return yield as float, raising InvalidYieldError unless finite and > 0."""
    yield_mt = float(yield_mt)
    if not math.isfinite(yield_mt) or yield_mt <= 0.0:
        raise InvalidYieldError(f"Yield must be a positive finite number of megatons, got {yield_mt}")
    return yield_mt


def check_distance(distance_m: float) -> float:
    """Return distance as float, raising InvalidDistanceError unless finite and > 0."""
    distance_m = float(distance_m)
    if not math.isfinite(distance_m) or distance_m <= 0.0:
        raise InvalidDistanceError(
            f"Point evaluation requires a positive distance in meters, got {distance_m}"
        )
    return distance_m


@dataclass(frozen=True)
class EffectLevels:
    """
    Damage radii for one effect category.

    Attributes:
        severe_m: Severe damage radius [m]
        moderate_m: Moderate damage radius [m]
        light_m: Light damage radius [m]

    Invariant: severe_m <= moderate_m <= light_m
    """

    severe_m: float
    moderate_m: float
    light_m: float

    def __post_init__(self) -> None:
        if not (0.0 <= self.severe_m <= self.moderate_m <= self.light_m):
            raise ValueError(
                "Tier radii must satisfy 0 <= severe <= moderate <= light, got "
                f"{self.severe_m}, {self.moderate_m}, {self.light_m}"
            )

    @classmethod
    def from_reference(
        cls, severe_m: float, moderate_m: float, light_m: float, scaling: float
    ) -> "EffectLevels":
        """Scale a set of 1 MT reference radii by a yield scaling factor."""
        return cls(severe_m * scaling, moderate_m * scaling, light_m * scaling)

    @property
    def severe_area_km2(self) -> float:
        return calculate_area(self.severe_m)

    @property
    def moderate_area_km2(self) -> float:
        return calculate_area(self.moderate_m)

    @property
    def light_area_km2(self) -> float:
        return calculate_area(self.light_m)

    def scaled(self, factor: float) -> "EffectLevels":
        """Return a copy with every radius multiplied by factor (areas follow)."""
        return EffectLevels(self.severe_m * factor, self.moderate_m * factor, self.light_m * factor)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for logging/display."""
        return {
            "severe_m": self.severe_m,
            "moderate_m": self.moderate_m,
            "light_m": self.light_m,
            "severe_area_km2": self.severe_area_km2,
            "moderate_area_km2": self.moderate_area_km2,
            "light_area_km2": self.light_area_km2,
        }
