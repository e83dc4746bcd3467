"""
Scenario Loader

YAML-based scenario configuration parser for NucEffects.

Loads detonation scenarios from YAML files and resolves catalogue names
(weapon preset, burst type, city) into DetonationParameters and a
PopulationModel.

Supported scenario elements:
    - Weapon: catalogue preset or explicit yield
    - Burst: burst type (height from the optimizer) or explicit height
    - Target: catalogue city or explicit population model
    - Environment: wind speed
    - Simulation: casualty ring count

Usage:
    loader = ScenarioLoader('scenarios/w80_vienna.yaml')
    result = loader.run()
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from nuceffects.physics.height import BurstType, get_burst_type, suggested_height
from nuceffects.simulation.casualties import DEFAULT_RING_COUNT
from nuceffects.simulation.engine import EffectsEngine
from nuceffects.simulation.objects import DetonationParameters, EffectsResult, PopulationModel

from .catalogue import WeaponPreset, get_city, get_preset

logger = logging.getLogger(__name__)


@dataclass
class ScenarioConfig:
    """Complete scenario configuration."""

    name: str
    description: str
    params: DetonationParameters
    population: Optional[PopulationModel] = None
    n_rings: int = DEFAULT_RING_COUNT
    preset: Optional[WeaponPreset] = None


class ScenarioLoader:
    """
    Loads detonation scenarios from YAML files.

    Usage:
        loader = ScenarioLoader('scenarios/w80_vienna.yaml')
        config = loader.get_config()
        engine = loader.create_engine()
    """

    def __init__(self, filepath: Optional[str] = None):
        """
        Initialize scenario loader.

        Args:
            filepath: Path to YAML scenario file (optional)
        """
        self.filepath = filepath
        self.data: Dict[str, Any] = {}
        self._config: Optional[ScenarioConfig] = None

        if filepath:
            self.load(filepath)

    def load(self, filepath: str) -> bool:
        """
        Load scenario from YAML file.

        Args:
            filepath: Path to YAML scenario file

        Returns:
            True if loaded successfully

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the scenario is malformed
            CatalogueError: If a preset, burst type or city is unknown
        """
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Scenario file not found: {filepath}")

        self.filepath = filepath

        with open(filepath, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        self.load_dict(data)
        logger.info("Loaded scenario '%s' from %s", self._config.name, filepath)
        return True

    def load_dict(self, data: Any) -> ScenarioConfig:
        """
        Load scenario from an already parsed mapping.

        Raises:
            ValueError: If the scenario is malformed
        """
        if not isinstance(data, dict):
            raise ValueError("Scenario must be a YAML mapping")

        self.data = data
        self._config = self._parse_config()
        return self._config

    def _parse_config(self) -> ScenarioConfig:
        """Parse loaded YAML data into ScenarioConfig."""
        scenario = self._section("scenario")
        name = scenario.get("name", "Unnamed Scenario")
        description = scenario.get("description", "")

        preset, yield_mt = self._parse_weapon()
        height_m, burst_type = self._parse_burst(preset, yield_mt)

        env = self._section("environment")
        wind = float(env.get("wind_speed_kmh", 0.0))

        sim_params = self._section("simulation")
        n_rings = sim_params.get("n_rings", DEFAULT_RING_COUNT)
        if not isinstance(n_rings, int) or isinstance(n_rings, bool) or n_rings < 1:
            raise ValueError(f"simulation.n_rings must be a positive integer, got {n_rings!r}")

        return ScenarioConfig(
            name=name,
            description=description,
            params=DetonationParameters(
                yield_mt=yield_mt,
                height_m=height_m,
                wind_speed_kmh=wind,
                burst_type=burst_type,
            ),
            population=self._parse_target(),
            n_rings=n_rings,
            preset=preset,
        )

    def _section(self, key: str) -> Dict[str, Any]:
        section = self.data.get(key) or {}
        if not isinstance(section, dict):
            raise ValueError(f"Scenario section '{key}' must be a mapping")
        return section

    def _parse_weapon(self):
        """Resolve the weapon section to (preset or None, yield [MT])."""
        weapon = self._section("weapon")
        has_preset = "preset" in weapon
        has_yield = "yield_mt" in weapon

        if has_preset == has_yield:
            raise ValueError("Weapon section needs exactly one of 'preset' or 'yield_mt'")

        if has_preset:
            preset = get_preset(str(weapon["preset"]))
            return preset, preset.yield_mt

        return None, float(weapon["yield_mt"])

    def _parse_burst(self, preset: Optional[WeaponPreset], yield_mt: float):
        """Resolve the burst section to (height [m], burst type or None)."""
        burst = self._section("burst")

        if "type" in burst:
            burst_type = get_burst_type(str(burst["type"]))
            custom_height = burst.get("height_m")
            return (
                suggested_height(
                    burst_type,
                    yield_mt,
                    float(custom_height) if custom_height is not None else None,
                ),
                burst_type,
            )

        if "height_m" in burst:
            return suggested_height(BurstType.CUSTOM, yield_mt, float(burst["height_m"])), BurstType.CUSTOM

        # No burst section: presets detonate at their typical height
        if preset is not None and preset.is_airburst:
            return preset.typical_height_m, None
        return 0.0, BurstType.SURFACE

    def _parse_target(self) -> Optional[PopulationModel]:
        """Parse target configuration (None when no target is given)."""
        target = self._section("target")
        if not target:
            return None

        if "city" in target:
            return get_city(str(target["city"])).to_population_model()

        try:
            return PopulationModel(
                core_density=float(target["core_density"]),
                suburban_density=float(target["suburban_density"]),
                core_radius_km=float(target["core_radius_km"]),
                name=str(target.get("name", "")),
                country=str(target.get("country", "")),
            )
        except KeyError as e:
            raise ValueError(f"Target section is missing field {e}") from e

    def get_config(self) -> Optional[ScenarioConfig]:
        """
        Get parsed scenario configuration.

        Returns:
            ScenarioConfig or None if not loaded
        """
        return self._config

    def get_scenario_name(self) -> str:
        """Get scenario name."""
        if self._config:
            return self._config.name
        return "Unknown"

    def create_engine(self) -> EffectsEngine:
        """
        Create an EffectsEngine configured for the loaded scenario.

        Raises:
            ValueError: If no scenario is loaded
        """
        if not self._config:
            raise ValueError("No scenario loaded. Call load() first.")
        return EffectsEngine(n_rings=self._config.n_rings)

    def run(self) -> EffectsResult:
        """Run the loaded scenario."""
        engine = self.create_engine()
        return engine.calculate(self._config.params, self._config.population)


def load_scenario(filepath: str) -> ScenarioConfig:
    """
    Convenience function to load a scenario file.

    Args:
        filepath: Path to YAML scenario file

    Returns:
        ScenarioConfig instance
    """
    loader = ScenarioLoader(filepath)
    return loader.get_config()
