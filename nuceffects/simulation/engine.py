"""
Effects Engine

Orchestrates the physics models into one EffectsResult:

    parameters → blast / thermal / radiation radii → height attenuation
    parameters → fallout
    radii + population model → casualty ring integration

Each calculation is a pure function of its inputs; the engine holds only
its configuration (ring count).

Reference: Glasstone & Dolan, "The Effects of Nuclear Weapons", 3rd Ed.
"""

import logging
from typing import Optional

from nuceffects.physics.blast import calculate_blast_radii
from nuceffects.physics.fallout import calculate_fallout
from nuceffects.physics.height import apply_height_attenuation, calculate_optimal_heights
from nuceffects.physics.radiation import calculate_radiation_radii
from nuceffects.physics.thermal import calculate_thermal_radii

from .casualties import DEFAULT_RING_COUNT, estimate_casualties
from .objects import CasualtyEstimate, DetonationParameters, EffectsResult, PopulationModel

logger = logging.getLogger(__name__)


class EffectsEngine:
    """
    Effects aggregator for single detonations.

    Usage:
        engine = EffectsEngine()
        result = engine.calculate(DetonationParameters(0.15, 159.4, 3.0), population)
    """

    def __init__(self, n_rings: int = DEFAULT_RING_COUNT):
        """
        Initialize the engine.

        Args:
            n_rings: Ring count for casualty integration
        """
        if int(n_rings) != n_rings or n_rings < 1:
            raise ValueError(f"n_rings must be a positive integer, got {n_rings}")
        self.n_rings = int(n_rings)

    def calculate(
        self, params: DetonationParameters, population: Optional[PopulationModel] = None
    ) -> EffectsResult:
        """
        Run one effects calculation.

        Args:
            params: Detonation parameters
            population: Target population model (casualties are zero if None)

        Returns:
            EffectsResult
        """
        logger.debug("Calculating effects for %s", params.to_dict())

        thermal = calculate_thermal_radii(params.yield_mt)
        blast = calculate_blast_radii(params.yield_mt)
        radiation = calculate_radiation_radii(params.yield_mt)

        if params.height_m > 0:
            blast, radiation = apply_height_attenuation(blast, radiation, params.height_m)

        fallout = calculate_fallout(params.yield_mt, params.height_m, params.wind_speed_kmh)

        if population is not None:
            casualties = estimate_casualties(blast, thermal, radiation, population, self.n_rings)
        else:
            casualties = CasualtyEstimate()

        result = EffectsResult(
            parameters=params,
            thermal=thermal,
            blast=blast,
            radiation=radiation,
            fallout=fallout,
            casualties=casualties,
            optimal_heights=calculate_optimal_heights(params.yield_mt),
            population=population,
        )

        logger.debug(
            "Blast severe %.0f m, thermal severe %.0f m, fallout %.1f km, deaths %.0f",
            blast.severe_m,
            thermal.severe_m,
            fallout.max_downwind_distance_km,
            casualties.deaths,
        )
        return result


def calculate_effects(
    yield_mt: float,
    height_m: float = 0.0,
    wind_speed_kmh: float = 0.0,
    population: Optional[PopulationModel] = None,
    n_rings: int = DEFAULT_RING_COUNT,
) -> EffectsResult:
    """
    Convenience function for a single calculation.

    Args:
        yield_mt: Weapon yield [MT]
        height_m: Height of burst [m]
        wind_speed_kmh: Wind speed [km/h]
        population: Target population model (optional)
        n_rings: Ring count for casualty integration

    Returns:
        EffectsResult
    """
    params = DetonationParameters(yield_mt=yield_mt, height_m=height_m, wind_speed_kmh=wind_speed_kmh)
    return EffectsEngine(n_rings).calculate(params, population)


# =============================================================================
# VALIDATION FUNCTIONS
# =============================================================================


def validate_reference_scenario() -> dict:
    """
    Validate the engine against a hand-computed 150 kt air burst.

    Problem Parameters:
        W = 0.15 MT
        h = 159.4 m (air burst)
        wind = 3 km/h

    Expected:
        thermal severe ≈ 561 m (1200 · 0.15^0.4)
        blast severe ≈ 1.05 km (2000 · 0.15^(1/3) · (1 - 159.4/10000))
        fallout downwind ≈ 74.6 km, width ≈ 2.8 km

    Returns:
        Dict containing computed values, expected values, and validation status
    """
    result = calculate_effects(yield_mt=0.15, height_m=159.4, wind_speed_kmh=3.0)

    computed = {
        "thermal_severe_m": result.thermal.severe_m,
        "blast_severe_m": result.blast.severe_m,
        "fallout_distance_km": result.fallout.max_downwind_distance_km,
        "fallout_width_km": result.fallout.max_width_km,
    }
    expected = {
        "thermal_severe_m": 561.0,
        "blast_severe_m": 1045.0,
        "fallout_distance_km": 74.6,
        "fallout_width_km": 2.8,
    }
    relative_tolerance = 0.01

    errors = {
        key: abs(computed[key] - expected[key]) / expected[key] for key in expected
    }
    is_valid = all(error <= relative_tolerance for error in errors.values())

    return {
        "parameters": result.parameters.to_dict(),
        "computed_values": computed,
        "expected_values": expected,
        "validation": {
            "is_valid": is_valid,
            "relative_errors": errors,
            "tolerance": relative_tolerance,
            "reference": "Hand calculation from the closed-form models",
        },
    }
