"""
Weapon and City Catalogue

Loads the weapon preset and target city tables shipped in
nuceffects/data/ and resolves names to catalogue entries.

Catalogue entries are resolved to plain numbers (DetonationParameters,
PopulationModel) before anything reaches the physics core.

Usage:
    preset = get_preset("W80")
    city = get_city("Vienna")
    params = preset.to_parameters(wind_speed_kmh=3.0)
    population = city.to_population_model()
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

import yaml

from nuceffects.errors import CatalogueError
from nuceffects.simulation.objects import DetonationParameters, PopulationModel

logger = logging.getLogger(__name__)

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data")
WEAPONS_FILE = os.path.join(DATA_DIR, "weapons.yaml")
CITIES_FILE = os.path.join(DATA_DIR, "cities.yaml")


@dataclass(frozen=True)
class WeaponPreset:
    """
    Weapon preset from the catalogue.

    Attributes:
        name: Display name, e.g. "W80"
        type: Weapon class, e.g. "Cruise Missile"
        yield_mt: Nominal yield [MT]
        is_airburst: Whether the weapon is normally air burst
        typical_height_m: Typical height of burst [m]
        group: Catalogue group (country or "Historic Weapons")
    """

    name: str
    type: str
    yield_mt: float
    is_airburst: bool
    typical_height_m: float
    group: str = ""

    def to_parameters(self, wind_speed_kmh: float = 0.0) -> DetonationParameters:
        """Detonation parameters at the preset's typical height."""
        height = self.typical_height_m if self.is_airburst else 0.0
        return DetonationParameters(
            yield_mt=self.yield_mt, height_m=height, wind_speed_kmh=wind_speed_kmh
        )


@dataclass(frozen=True)
class CityData:
    """
    Target city from the catalogue.

    Attributes:
        name: City name
        country: Country name
        population_millions: Metropolitan population [millions]
        area_km2: City area [km²]
        density: Urban core density [people/km²]
        radius_km: Urban core radius [km]
        suburban_density: Suburban reference density [people/km²]
    """

    name: str
    country: str
    population_millions: float
    area_km2: float
    density: float
    radius_km: float
    suburban_density: float

    def to_population_model(self) -> PopulationModel:
        return PopulationModel(
            core_density=self.density,
            suburban_density=self.suburban_density,
            core_radius_km=self.radius_km,
            name=self.name,
            country=self.country,
        )


# =============================================================================
# LOADING
# =============================================================================


def _read_yaml_list(filepath: str, key: str) -> List[Dict[str, Any]]:
    """Read the list stored under `key` in a YAML catalogue file."""
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Catalogue file not found: {filepath}")

    with open(filepath, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict) or not isinstance(data.get(key), list):
        raise ValueError(f"Catalogue file {filepath} has no '{key}' list")
    return data[key]


def _parse_preset(entry: Dict[str, Any]) -> WeaponPreset:
    try:
        return WeaponPreset(
            name=str(entry["name"]),
            type=str(entry.get("type", "")),
            yield_mt=float(entry["yield_mt"]),
            is_airburst=bool(entry.get("airburst", True)),
            typical_height_m=float(entry.get("typical_height_m", 0.0)),
            group=str(entry.get("group", "")),
        )
    except KeyError as e:
        raise ValueError(f"Weapon preset {entry!r} is missing field {e}") from e


def _parse_city(entry: Dict[str, Any]) -> CityData:
    try:
        return CityData(
            name=str(entry["name"]),
            country=str(entry.get("country", "")),
            population_millions=float(entry["population_millions"]),
            area_km2=float(entry["area_km2"]),
            density=float(entry["density"]),
            radius_km=float(entry["radius_km"]),
            suburban_density=float(entry["suburban_density"]),
        )
    except KeyError as e:
        raise ValueError(f"City {entry!r} is missing field {e}") from e


@lru_cache(maxsize=None)
def load_weapon_presets(filepath: str = WEAPONS_FILE) -> Tuple[WeaponPreset, ...]:
    """
    Load weapon presets in catalogue order.

    Args:
        filepath: Path to a weapons YAML file

    Returns:
        Tuple of WeaponPreset

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If an entry is malformed
    """
    presets = tuple(_parse_preset(entry) for entry in _read_yaml_list(filepath, "presets"))
    logger.info("Loaded %d weapon presets from %s", len(presets), filepath)
    return presets


@lru_cache(maxsize=None)
def load_cities(filepath: str = CITIES_FILE) -> Tuple[CityData, ...]:
    """
    Load target cities in catalogue order.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If an entry is malformed
    """
    cities = tuple(_parse_city(entry) for entry in _read_yaml_list(filepath, "cities"))
    logger.info("Loaded %d cities from %s", len(cities), filepath)
    return cities


# =============================================================================
# LOOKUP
# =============================================================================


def get_preset(name: str, presets: Optional[Tuple[WeaponPreset, ...]] = None) -> WeaponPreset:
    """
    Look up a weapon preset by name (case-insensitive).

    Raises:
        CatalogueError: Unknown preset name
    """
    presets = presets if presets is not None else load_weapon_presets()
    wanted = name.strip().lower()
    for preset in presets:
        if preset.name.lower() == wanted:
            return preset
    raise CatalogueError(f"Unknown weapon preset '{name}'")


def get_city(name: str, cities: Optional[Tuple[CityData, ...]] = None) -> CityData:
    """
    Look up a city by name (case-insensitive).

    Raises:
        CatalogueError: Unknown city name
    """
    cities = cities if cities is not None else load_cities()
    wanted = name.strip().lower()
    for city in cities:
        if city.name.lower() == wanted:
            return city
    raise CatalogueError(f"Unknown city '{name}'")


def get_preset_names() -> List[str]:
    return [preset.name for preset in load_weapon_presets()]


def get_city_names() -> List[str]:
    return [city.name for city in load_cities()]
