"""
Scenario Generator

Generates detonation scenarios from parameter ranges for sweeps.

Features:
    - Cartesian product of yields, burst types and wind speeds
    - Burst types resolved to heights via the height optimizer
    - Picklable job runner for multiprocessing

Usage:
    space = ParameterSpace(
        yields_mt=[0.1, 0.5, 1.0],
        burst_types=[BurstType.SURFACE, BurstType.OPTIMUM],
    )
    scenarios = ScenarioGenerator.generate(space)
"""

from dataclasses import dataclass, field
from itertools import product
from typing import Iterator, List, Optional

import numpy as np

from nuceffects.physics.height import BurstType, suggested_height

from .casualties import DEFAULT_RING_COUNT
from .engine import EffectsEngine
from .objects import DetonationParameters, EffectsResult, PopulationModel


@dataclass
class ParameterSpace:
    """
    Parameter space definition for a sweep.

    Attributes:
        yields_mt: List of weapon yields [MT]
        burst_types: List of burst types (CUSTOM is not allowed)
        wind_speeds_kmh: List of wind speeds [km/h]
        population: Target population model shared by every scenario
        n_rings: Ring count for casualty integration
    """

    yields_mt: List[float] = field(default_factory=lambda: [0.015, 0.1, 0.3, 1.0, 5.0])
    burst_types: List[BurstType] = field(
        default_factory=lambda: [BurstType.SURFACE, BurstType.LOW, BurstType.OPTIMUM, BurstType.HIGH]
    )
    wind_speeds_kmh: List[float] = field(default_factory=lambda: [15.0])
    population: Optional[PopulationModel] = None
    n_rings: int = DEFAULT_RING_COUNT

    @property
    def total_scenarios(self) -> int:
        """Total number of scenarios."""
        return len(self.yields_mt) * len(self.burst_types) * len(self.wind_speeds_kmh)


@dataclass
class ScenarioJob:
    """One unit of work for run_scenario."""

    params: DetonationParameters
    population: Optional[PopulationModel] = None
    n_rings: int = DEFAULT_RING_COUNT


class ScenarioGenerator:
    """
    Generates scenario jobs from a parameter space.
    """

    @staticmethod
    def generate(space: ParameterSpace) -> List[ScenarioJob]:
        """
        Generate all scenarios from the parameter space.

        Args:
            space: Parameter space definition

        Returns:
            List of ScenarioJob objects
        """
        return list(ScenarioGenerator.generate_iterator(space))

    @staticmethod
    def generate_iterator(space: ParameterSpace) -> Iterator[ScenarioJob]:
        """
        Generate scenarios as iterator (memory efficient).

        Raises:
            ValueError: space contains BurstType.CUSTOM
        """
        if BurstType.CUSTOM in space.burst_types:
            raise ValueError("Sweeps need a concrete height; BurstType.CUSTOM is not supported")

        for yield_mt, burst_type, wind in product(
            space.yields_mt, space.burst_types, space.wind_speeds_kmh
        ):
            yield ScenarioJob(
                params=DetonationParameters(
                    yield_mt=yield_mt,
                    height_m=suggested_height(burst_type, yield_mt),
                    wind_speed_kmh=wind,
                    burst_type=burst_type,
                ),
                population=space.population,
                n_rings=space.n_rings,
            )

    @staticmethod
    def yield_sweep(
        yield_min_mt: float = 0.01,
        yield_max_mt: float = 10.0,
        n_yields: int = 10,
        burst_type: BurstType = BurstType.OPTIMUM,
        wind_speed_kmh: float = 15.0,
        population: Optional[PopulationModel] = None,
        n_rings: int = DEFAULT_RING_COUNT,
    ) -> List[ScenarioJob]:
        """
        Log-spaced yield sweep for a single burst type.

        Args:
            yield_min_mt: Minimum yield [MT]
            yield_max_mt: Maximum yield [MT]
            n_yields: Number of yield points
            burst_type: Fixed burst type
            wind_speed_kmh: Fixed wind speed [km/h]
            population: Target population model
            n_rings: Casualty integration rings

        Returns:
            List of jobs
        """
        space = ParameterSpace(
            yields_mt=[float(y) for y in np.geomspace(yield_min_mt, yield_max_mt, n_yields)],
            burst_types=[burst_type],
            wind_speeds_kmh=[wind_speed_kmh],
            population=population,
            n_rings=n_rings,
        )
        return ScenarioGenerator.generate(space)


def run_scenario(job: ScenarioJob) -> EffectsResult:
    """
    Convenience function for multiprocessing.

    Args:
        job: Scenario job

    Returns:
        Effects result
    """
    return EffectsEngine(job.n_rings).calculate(job.params, job.population)
