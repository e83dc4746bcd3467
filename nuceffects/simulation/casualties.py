"""
Casualty Estimation by Concentric Ring Integration

The damage area is split into N concentric rings out to the largest
light-tier radius. Each ring's population (ring area × density at the ring
midpoint) receives the casualty fractions of the tier its midpoint falls
in, independently for blast, thermal and radiation. Categories add up:
a ring inside several severe zones is counted once per category.

Tier assignment within a category cascades severe → moderate → light. Only
the tiers listed in CASUALTY_FRACTIONS contribute; thermal moderate/light
and radiation moderate/light have no entry and add nothing.

Delayed mortality is a fixed-fraction projection of the injured
population, isolated in project_long_term_deaths.
"""

import math
from typing import Dict, Final, Tuple

import numpy as np
from scipy import integrate

from nuceffects.physics.levels import EffectLevels

from .objects import CasualtyEstimate, PopulationModel
from .population import density_at_distance, density_profile

DEFAULT_RING_COUNT: Final[int] = 20

TIERS: Final[Tuple[str, ...]] = ("severe", "moderate", "light")

# category -> tier -> (casualty field, fraction of ring population)
CASUALTY_FRACTIONS: Final[Dict[str, Dict[str, Tuple[str, float]]]] = {
    "blast": {
        "severe": ("deaths", 0.9),
        "moderate": ("severe_injuries", 0.5),
        "light": ("light_injuries", 0.3),
    },
    "thermal": {
        "severe": ("deaths", 0.7),
    },
    "radiation": {
        "severe": ("severe_injuries", 0.8),
    },
}

# Fraction of the injured dying within 1, 5, 10 and 20 years
LONG_TERM_MORTALITY_FRACTIONS: Final[Tuple[float, float, float, float]] = (0.1, 0.2, 0.3, 0.4)


def project_long_term_deaths(exposed: float) -> Tuple[float, float, float, float]:
    """
    Delayed deaths among the exposed (injured) population.

    Low-confidence placeholder: fixed fractions of 10/20/30/40 % at
    1/5/10/20 years. Replace this function alone to plug in an
    epidemiological model.

    Args:
        exposed: Severe plus light injuries

    Returns:
        (1 year, 5 years, 10 years, 20 years) cumulative deaths
    """
    exposed = max(0.0, exposed)
    one, five, ten, twenty = LONG_TERM_MORTALITY_FRACTIONS
    return exposed * one, exposed * five, exposed * ten, exposed * twenty


def _tier_radii_km(levels: EffectLevels) -> Dict[str, float]:
    """Tier radii [km] recovered from the tier areas as sqrt(area / π)."""
    return {
        "severe": math.sqrt(levels.severe_area_km2 / math.pi),
        "moderate": math.sqrt(levels.moderate_area_km2 / math.pi),
        "light": math.sqrt(levels.light_area_km2 / math.pi),
    }


def estimate_casualties(
    blast: EffectLevels,
    thermal: EffectLevels,
    radiation: EffectLevels,
    population: PopulationModel,
    n_rings: int = DEFAULT_RING_COUNT,
) -> CasualtyEstimate:
    """
    Integrate damage tiers against the population model.

    Args:
        blast: Blast tiers (after height attenuation)
        thermal: Thermal tiers
        radiation: Radiation tiers (after height attenuation)
        population: Target population model
        n_rings: Number of concentric rings (>= 1)

    Returns:
        CasualtyEstimate

    Raises:
        ValueError: n_rings < 1
    """
    if int(n_rings) != n_rings or n_rings < 1:
        raise ValueError(f"n_rings must be a positive integer, got {n_rings}")
    n_rings = int(n_rings)

    categories = {
        "blast": _tier_radii_km(blast),
        "thermal": _tier_radii_km(thermal),
        "radiation": _tier_radii_km(radiation),
    }
    max_radius = max(radii["light"] for radii in categories.values())

    totals = {"deaths": 0.0, "severe_injuries": 0.0, "light_injuries": 0.0}

    if max_radius > 0.0:
        index = np.arange(n_rings, dtype=np.float64)
        inner = index * max_radius / n_rings
        outer = (index + 1.0) * max_radius / n_rings
        ring_area = np.pi * (outer * outer - inner * inner)
        midpoint = (inner + outer) / 2.0
        ring_population = ring_area * density_profile(midpoint, population)

        for category, radii in categories.items():
            fractions = CASUALTY_FRACTIONS[category]
            assigned = np.zeros(n_rings, dtype=bool)

            for tier in TIERS:
                in_tier = (midpoint <= radii[tier]) & ~assigned
                assigned |= in_tier

                if tier in fractions:
                    field_name, fraction = fractions[tier]
                    totals[field_name] += float(np.sum(ring_population[in_tier])) * fraction

    one, five, ten, twenty = project_long_term_deaths(
        totals["severe_injuries"] + totals["light_injuries"]
    )

    return CasualtyEstimate(
        deaths=totals["deaths"],
        severe_injuries=totals["severe_injuries"],
        light_injuries=totals["light_injuries"],
        long_term_deaths_1yr=one,
        long_term_deaths_5yr=five,
        long_term_deaths_10yr=ten,
        long_term_deaths_20yr=twenty,
    )


def _casualty_weight(distance_km: float, categories: Dict[str, Dict[str, float]]) -> float:
    """Summed casualty fraction at a distance, for the continuous integral."""
    weight = 0.0
    for category, radii in categories.items():
        fractions = CASUALTY_FRACTIONS[category]
        for tier in TIERS:
            if distance_km <= radii[tier]:
                if tier in fractions:
                    weight += fractions[tier][1]
                break
    return weight


def continuous_casualty_total(
    blast: EffectLevels,
    thermal: EffectLevels,
    radiation: EffectLevels,
    population: PopulationModel,
) -> float:
    """
    Limit of the ring sum as the ring count goes to infinity.

    ∫₀^R 2πr · ρ(r) · w(r) dr, evaluated with scipy.integrate.quad and
    breakpoints at every tier boundary and at the core radius.
    """
    categories = {
        "blast": _tier_radii_km(blast),
        "thermal": _tier_radii_km(thermal),
        "radiation": _tier_radii_km(radiation),
    }
    max_radius = max(radii["light"] for radii in categories.values())
    if max_radius <= 0.0:
        return 0.0

    breakpoints = sorted(
        {r for radii in categories.values() for r in radii.values() if 0.0 < r < max_radius}
        | ({population.core_radius_km} if population.core_radius_km < max_radius else set())
    )

    value, _ = integrate.quad(
        lambda r: 2.0 * np.pi * r * density_at_distance(r, population) * _casualty_weight(r, categories),
        0.0,
        max_radius,
        points=breakpoints or None,
        limit=200,
    )
    return value


def validate_ring_convergence(
    blast: EffectLevels,
    thermal: EffectLevels,
    radiation: EffectLevels,
    population: PopulationModel,
    n_rings: int = 400,
    tolerance: float = 0.02,
) -> dict:
    """
    Check the numerical stability of the ring integration.

    Compares total casualties at n_rings and 2·n_rings, and against the
    continuous integral.

    Args:
        blast, thermal, radiation: Effect tiers
        population: Target population model
        n_rings: Base ring count
        tolerance: Maximum accepted relative difference

    Returns:
        Validation result
    """
    coarse = estimate_casualties(blast, thermal, radiation, population, n_rings)
    fine = estimate_casualties(blast, thermal, radiation, population, 2 * n_rings)
    reference = continuous_casualty_total(blast, thermal, radiation, population)

    scale = max(abs(fine.total_casualties), 1e-12)
    doubling_change = abs(fine.total_casualties - coarse.total_casualties) / scale
    reference_error = abs(fine.total_casualties - reference) / max(abs(reference), 1e-12)

    return {
        "parameters": {
            "n_rings": n_rings,
            "tolerance": tolerance,
        },
        "computed_values": {
            "total_coarse": coarse.total_casualties,
            "total_fine": fine.total_casualties,
            "total_continuous": reference,
            "doubling_change": doubling_change,
            "reference_error": reference_error,
        },
        "validation": {
            "is_valid": doubling_change <= tolerance and reference_error <= tolerance,
            "tolerance": tolerance,
            "reference": "Midpoint ring sum vs scipy.integrate.quad",
        },
    }
