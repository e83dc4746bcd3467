"""
NucEffects Simulation Package

Effects aggregation, population model, casualty integration and sweeps.
"""

from .casualties import estimate_casualties, project_long_term_deaths
from .engine import EffectsEngine, calculate_effects
from .objects import CasualtyEstimate, DetonationParameters, EffectsResult, PopulationModel
from .population import density_at_distance
from .scenario_generator import ParameterSpace, ScenarioGenerator, ScenarioJob, run_scenario

__all__ = [
    "EffectsEngine",
    "calculate_effects",
    "DetonationParameters",
    "PopulationModel",
    "CasualtyEstimate",
    "EffectsResult",
    "density_at_distance",
    "estimate_casualties",
    "project_long_term_deaths",
    "ParameterSpace",
    "ScenarioGenerator",
    "ScenarioJob",
    "run_scenario",
]
