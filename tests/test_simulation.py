"""
NucEffects Simulation Test Suite

Tests for detonation parameters, the population model, casualty ring
integration, the effects engine and scenario sweeps.

Test ID | Description                    | Reference           | Tolerance
--------|--------------------------------|---------------------|------------
1       | Parameter clamping             | Negative → 0        | Exact
2       | Population density profile     | Two-zone exponential| 1e-9 rel
3       | Casualties non-negative        | -                   | ≥ 0
4       | Long-term mortality ordering   | 1 ≤ 5 ≤ 10 ≤ 20 yr  | Exact
5       | Ring integration accuracy      | Uniform disc        | 1e-4 rel
6       | Ring convergence               | scipy.integrate.quad| <2%
7       | Engine aggregation             | Surface / air burst | 1e-9 rel
8       | Scenario sweeps                | Cartesian product   | Exact

References:
    - Glasstone & Dolan (1977). "The Effects of Nuclear Weapons", 3rd Ed.
"""

import math
import os
import sys

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from nuceffects.errors import InvalidPopulationModelError, InvalidYieldError
from nuceffects.physics.blast import calculate_blast_radii
from nuceffects.physics.height import BurstType
from nuceffects.physics.levels import EffectLevels
from nuceffects.physics.radiation import calculate_radiation_radii
from nuceffects.physics.thermal import calculate_thermal_radii
from nuceffects.simulation.casualties import (
    continuous_casualty_total,
    estimate_casualties,
    project_long_term_deaths,
    validate_ring_convergence,
)
from nuceffects.simulation.engine import EffectsEngine, calculate_effects
from nuceffects.simulation.objects import DetonationParameters, PopulationModel
from nuceffects.simulation.population import density_at_distance, density_profile
from nuceffects.simulation.scenario_generator import (
    ParameterSpace,
    ScenarioGenerator,
    run_scenario,
)

NO_EFFECT = EffectLevels(0.0, 0.0, 0.0)


@pytest.fixture
def vienna():
    """Two-zone model with Vienna's catalogue values."""
    return PopulationModel(
        core_density=4579.0, suburban_density=1600.0, core_radius_km=11.5, name="Vienna"
    )


@pytest.fixture
def uniform():
    """Effectively uniform density over a few km."""
    return PopulationModel(core_density=1000.0, suburban_density=1000.0, core_radius_km=1e6)


# =============================================================================
# TEST 1: Detonation parameters
# =============================================================================


class TestDetonationParameters:
    def test_negative_height_clamped(self):
        params = DetonationParameters(yield_mt=1.0, height_m=-100.0)

        assert params.height_m == 0.0
        assert not params.is_airburst

    def test_negative_wind_clamped(self):
        assert DetonationParameters(yield_mt=1.0, wind_speed_kmh=-5.0).wind_speed_kmh == 0.0

    def test_airburst_derived_from_height(self):
        assert DetonationParameters(yield_mt=1.0, height_m=159.4).is_airburst

    @pytest.mark.parametrize("yield_mt", [0.0, -0.5, float("nan")])
    def test_invalid_yield(self, yield_mt):
        with pytest.raises(InvalidYieldError):
            DetonationParameters(yield_mt=yield_mt)

    def test_non_finite_height(self):
        with pytest.raises(ValueError):
            DetonationParameters(yield_mt=1.0, height_m=float("inf"))

    def test_immutable(self):
        params = DetonationParameters(yield_mt=1.0)

        with pytest.raises(AttributeError):
            params.yield_mt = 2.0


# =============================================================================
# TEST 2: Population density
# =============================================================================


class TestPopulationDensity:
    def test_centre_density(self, vienna):
        assert density_at_distance(0.0, vienna) == pytest.approx(4579.0)

    def test_core_boundary(self, vienna):
        assert density_at_distance(11.5, vienna) == pytest.approx(4579.0 * math.exp(-1.0))

    def test_suburban_branch(self, vienna):
        assert density_at_distance(23.0, vienna) == pytest.approx(1600.0 * math.exp(-2.0))

    def test_profile_matches_scalar(self, vienna):
        distances = np.array([0.0, 5.0, 11.5, 12.0, 30.0])
        profile = density_profile(distances, vienna)

        for d, rho in zip(distances, profile):
            assert rho == pytest.approx(density_at_distance(float(d), vienna), rel=1e-12)

    @pytest.mark.parametrize("field", ["core_density", "suburban_density", "core_radius_km"])
    def test_non_positive_rejected(self, field):
        values = {"core_density": 1000.0, "suburban_density": 500.0, "core_radius_km": 5.0}
        values[field] = 0.0

        with pytest.raises(InvalidPopulationModelError):
            PopulationModel(**values)


# =============================================================================
# TEST 3-5: Casualty estimation
# =============================================================================


class TestCasualtyEstimation:
    @pytest.mark.parametrize("yield_mt", [0.001, 0.015, 0.15, 1.0, 50.0])
    def test_non_negative(self, yield_mt, vienna):
        result = calculate_effects(yield_mt, population=vienna)
        casualties = result.casualties

        for value in casualties.to_dict().values():
            assert value >= 0.0

    @pytest.mark.parametrize("yield_mt", [0.015, 0.15, 1.0, 50.0])
    def test_long_term_ordering(self, yield_mt, vienna):
        c = calculate_effects(yield_mt, population=vienna).casualties

        assert c.long_term_deaths_1yr <= c.long_term_deaths_5yr
        assert c.long_term_deaths_5yr <= c.long_term_deaths_10yr
        assert c.long_term_deaths_10yr <= c.long_term_deaths_20yr

    def test_long_term_fractions(self):
        assert project_long_term_deaths(1000.0) == pytest.approx((100.0, 200.0, 300.0, 400.0))
        assert project_long_term_deaths(-10.0) == (0.0, 0.0, 0.0, 0.0)

    def test_uniform_disc_deaths(self, uniform):
        """Every ring inside a 1 km severe blast zone: deaths = 0.9·π·1²·ρ."""
        blast = EffectLevels(1000.0, 1000.0, 1000.0)
        c = estimate_casualties(blast, NO_EFFECT, NO_EFFECT, uniform, n_rings=20)

        assert c.deaths == pytest.approx(0.9 * math.pi * 1000.0, rel=1e-4)
        assert c.severe_injuries == 0.0
        assert c.light_injuries == 0.0

    def test_thermal_counts_severe_tier_only(self, uniform):
        """Thermal moderate and light tiers contribute nothing."""
        thermal = EffectLevels(1000.0, 2000.0, 3000.0)
        c = estimate_casualties(NO_EFFECT, thermal, NO_EFFECT, uniform, n_rings=30)

        assert c.deaths > 0.0
        assert c.severe_injuries == 0.0
        assert c.light_injuries == 0.0

    def test_radiation_counts_severe_tier_only(self, uniform):
        radiation = EffectLevels(1000.0, 2000.0, 3000.0)
        c = estimate_casualties(NO_EFFECT, NO_EFFECT, radiation, uniform, n_rings=30)

        assert c.deaths == 0.0
        assert c.severe_injuries == pytest.approx(0.8 * math.pi * 1000.0, rel=1e-4)
        assert c.light_injuries == 0.0

    def test_blast_tier_fractions(self, uniform):
        """Deaths 90 % inside 1 km, severe injuries 50 % to 2 km, light injuries 30 % to 3 km."""
        blast = EffectLevels(1000.0, 2000.0, 3000.0)
        c = estimate_casualties(blast, NO_EFFECT, NO_EFFECT, uniform, n_rings=30)

        assert c.deaths == pytest.approx(0.9 * math.pi * 1.0**2 * 1000.0, rel=1e-4)
        assert c.severe_injuries == pytest.approx(
            0.5 * math.pi * (2.0**2 - 1.0**2) * 1000.0, rel=1e-4
        )
        assert c.light_injuries == pytest.approx(
            0.3 * math.pi * (3.0**2 - 2.0**2) * 1000.0, rel=1e-4
        )

    def test_thermal_severe_fraction(self, uniform):
        thermal = EffectLevels(1000.0, 2000.0, 3000.0)
        c = estimate_casualties(NO_EFFECT, thermal, NO_EFFECT, uniform, n_rings=30)

        assert c.deaths == pytest.approx(0.7 * math.pi * 1.0**2 * 1000.0, rel=1e-4)

    def test_categories_add_up(self, uniform):
        """Overlapping blast and thermal severe zones are counted once per category."""
        disc = EffectLevels(1000.0, 1000.0, 1000.0)
        c = estimate_casualties(disc, disc, NO_EFFECT, uniform, n_rings=20)

        assert c.deaths == pytest.approx((0.9 + 0.7) * math.pi * 1000.0, rel=1e-4)

    def test_no_effect_no_casualties(self, vienna):
        c = estimate_casualties(NO_EFFECT, NO_EFFECT, NO_EFFECT, vienna)

        assert c.total_casualties == 0.0

    @pytest.mark.parametrize("n_rings", [0, -3, 2.5])
    def test_invalid_ring_count(self, n_rings, vienna):
        with pytest.raises(ValueError):
            estimate_casualties(NO_EFFECT, NO_EFFECT, NO_EFFECT, vienna, n_rings=n_rings)

    def test_continuous_total_grows_with_yield(self, vienna):
        totals = [
            continuous_casualty_total(
                calculate_blast_radii(y), calculate_thermal_radii(y), calculate_radiation_radii(y), vienna
            )
            for y in (0.015, 0.15, 1.0, 5.0)
        ]

        assert all(b > a for a, b in zip(totals, totals[1:]))


# =============================================================================
# TEST 6: Ring convergence
# =============================================================================


class TestRingConvergence:
    """
    Doubling the ring count must barely change the total.

    Reference: continuous integral via scipy.integrate.quad
    """

    @pytest.mark.parametrize("yield_mt", [0.15, 1.0])
    def test_doubling_stable(self, yield_mt, vienna):
        result = validate_ring_convergence(
            calculate_blast_radii(yield_mt),
            calculate_thermal_radii(yield_mt),
            calculate_radiation_radii(yield_mt),
            vienna,
            n_rings=1000,
        )

        assert result["validation"]["is_valid"], (
            f"Ring sum not converged: {result['computed_values']}"
        )

    def test_default_ring_count_reasonable(self, vienna):
        """20 rings stay within 15% of the continuous integral."""
        blast, thermal, radiation = (
            calculate_blast_radii(1.0),
            calculate_thermal_radii(1.0),
            calculate_radiation_radii(1.0),
        )
        coarse = estimate_casualties(blast, thermal, radiation, vienna).total_casualties
        reference = continuous_casualty_total(blast, thermal, radiation, vienna)

        assert coarse == pytest.approx(reference, rel=0.15)


# =============================================================================
# TEST 7: Engine
# =============================================================================


class TestEffectsEngine:
    def test_surface_burst_unattenuated(self):
        result = calculate_effects(1.0, 0.0, 0.0)

        assert result.blast == calculate_blast_radii(1.0)
        assert result.radiation == calculate_radiation_radii(1.0)

    def test_air_burst_attenuates_blast_and_radiation(self):
        result = calculate_effects(1.0, 5000.0, 0.0)

        assert result.blast.severe_m == pytest.approx(1000.0)
        assert result.radiation.severe_m == pytest.approx(400.0)
        assert result.thermal == calculate_thermal_radii(1.0)

    def test_without_population(self):
        result = calculate_effects(1.0)

        assert result.population is None
        assert result.casualties.total_casualties == 0.0

    def test_with_population(self, vienna):
        result = EffectsEngine().calculate(DetonationParameters(0.15, 159.4, 3.0), vienna)

        assert result.population is vienna
        assert result.casualties.deaths > 0.0
        assert result.parameters.height_m == pytest.approx(159.4)

    def test_optimal_heights_included(self):
        result = calculate_effects(1.0)

        assert result.optimal_heights.combined_m == pytest.approx(200.0)

    def test_to_dict(self, vienna):
        data = calculate_effects(0.15, 159.4, 3.0, population=vienna).to_dict()

        assert data["population"]["name"] == "Vienna"
        assert data["parameters"]["is_airburst"] is True
        assert data["fallout"]["is_circular"] is False

    def test_invalid_ring_count(self):
        with pytest.raises(ValueError):
            EffectsEngine(n_rings=0)


# =============================================================================
# TEST 8: Scenario generator
# =============================================================================


class TestScenarioGenerator:
    def test_cartesian_product(self, vienna):
        space = ParameterSpace(
            yields_mt=[0.1, 1.0],
            burst_types=[BurstType.SURFACE, BurstType.OPTIMUM, BurstType.HIGH],
            wind_speeds_kmh=[0.0, 15.0],
            population=vienna,
        )
        jobs = ScenarioGenerator.generate(space)

        assert space.total_scenarios == 12
        assert len(jobs) == 12
        assert all(job.population is vienna for job in jobs)

    def test_heights_from_burst_type(self):
        space = ParameterSpace(
            yields_mt=[1.0], burst_types=[BurstType.SURFACE, BurstType.OPTIMUM]
        )
        surface, optimum = ScenarioGenerator.generate(space)

        assert surface.params.height_m == 0.0
        assert optimum.params.height_m == pytest.approx(200.0)
        assert optimum.params.burst_type is BurstType.OPTIMUM

    def test_custom_rejected(self):
        space = ParameterSpace(burst_types=[BurstType.CUSTOM])

        with pytest.raises(ValueError):
            ScenarioGenerator.generate(space)

    def test_yield_sweep(self):
        jobs = ScenarioGenerator.yield_sweep(0.01, 10.0, n_yields=4)

        yields = [job.params.yield_mt for job in jobs]
        assert yields[0] == pytest.approx(0.01)
        assert yields[-1] == pytest.approx(10.0)
        assert len(yields) == 4

    def test_yield_sweep_ring_count(self):
        jobs = ScenarioGenerator.yield_sweep(0.01, 10.0, n_yields=3, n_rings=55)

        assert all(job.n_rings == 55 for job in jobs)

    def test_run_scenario(self, vienna):
        space = ParameterSpace(yields_mt=[0.15], burst_types=[BurstType.OPTIMUM], population=vienna)
        result = run_scenario(ScenarioGenerator.generate(space)[0])

        assert result.casualties.deaths > 0.0
        assert result.parameters.burst_type is BurstType.OPTIMUM


# =============================================================================
# MAIN EXECUTION
# =============================================================================

if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
