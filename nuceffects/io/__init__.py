"""
NucEffects I/O Package

Catalogue data, scenario files and text reports.
"""

from .catalogue import (
    CityData,
    WeaponPreset,
    get_city,
    get_city_names,
    get_preset,
    get_preset_names,
    load_cities,
    load_weapon_presets,
)
from .report import format_distance, render_report
from .scenario_loader import ScenarioConfig, ScenarioLoader, load_scenario

__all__ = [
    "CityData",
    "WeaponPreset",
    "get_city",
    "get_city_names",
    "get_preset",
    "get_preset_names",
    "load_cities",
    "load_weapon_presets",
    "format_distance",
    "render_report",
    "ScenarioConfig",
    "ScenarioLoader",
    "load_scenario",
]
