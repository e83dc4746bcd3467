"""
Population Density Model

Radial density profile of a target: exponential decay inside the urban
core, and a faster suburban decay referenced from the core boundary.

The profile is continuous at the core radius only when the core and
suburban densities are equal.
"""

import math

import numpy as np

from .objects import PopulationModel


def density_at_distance(distance_km: float, population: PopulationModel) -> float:
    """
    Population density at a radial distance.

    d <= R: ρ_core · exp(-d / R)
    d >  R: ρ_sub · exp(-(d - R) / (0.5 R))

    Args:
        distance_km: Distance from ground zero [km] (>= 0)
        population: Target population model

    Returns:
        Density [people/km²]
    """
    radius = population.core_radius_km
    if distance_km <= radius:
        return population.core_density * math.exp(-distance_km / radius)

    return population.suburban_density * math.exp(-(distance_km - radius) / (radius * 0.5))


def density_profile(distances_km: np.ndarray, population: PopulationModel) -> np.ndarray:
    """Vectorized density_at_distance."""
    d = np.asarray(distances_km, dtype=np.float64)
    radius = population.core_radius_km

    core = population.core_density * np.exp(-d / radius)
    suburban = population.suburban_density * np.exp(-(d - radius) / (radius * 0.5))

    return np.where(d <= radius, core, suburban)
