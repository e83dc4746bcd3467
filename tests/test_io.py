"""
NucEffects I/O Test Suite

Tests for the weapon/city catalogue, YAML scenario loading, the text report
and the command-line runners.

Test ID | Description                    | Reference           | Tolerance
--------|--------------------------------|---------------------|------------
1       | Catalogue completeness         | 35 presets, 31 cities| Exact
2       | Catalogue lookup               | Case-insensitive    | Exact
3       | Scenario file resolution       | Preset/type/city    | 1e-9 rel
4       | Malformed scenarios            | -                   | Raises
5       | Distance formatting            | "< 1 m", "N m", km  | Exact
6       | Headless CLI exit codes        | 0 ok, 1 invalid     | Exact
"""

import os
import sys

import pytest
import yaml

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import batch_run
import headless
from nuceffects.errors import CatalogueError
from nuceffects.io.catalogue import (
    get_city,
    get_city_names,
    get_preset,
    get_preset_names,
    load_cities,
    load_weapon_presets,
)
from nuceffects.io.report import format_count, format_distance, render_report
from nuceffects.io.scenario_loader import ScenarioLoader, load_scenario
from nuceffects.physics.height import BurstType, calculate_optimal_heights
from nuceffects.simulation.engine import EffectsEngine, calculate_effects
from nuceffects.simulation.objects import DetonationParameters


def write_scenario(tmp_path, data, name="scenario.yaml"):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return str(path)


# =============================================================================
# TEST 1-2: Catalogue
# =============================================================================


class TestCatalogue:
    def test_preset_count(self):
        assert len(load_weapon_presets()) == 35

    def test_city_count(self):
        assert len(load_cities()) == 31

    def test_names_unique(self):
        assert len(set(get_preset_names())) == 35
        assert len(set(get_city_names())) == 31

    def test_preset_lookup(self):
        preset = get_preset("w80")

        assert preset.name == "W80"
        assert preset.yield_mt == pytest.approx(0.15)
        assert preset.typical_height_m == pytest.approx(250.0)

    def test_tsar_bomba(self):
        preset = get_preset("Tsar Bomba (USSR)")

        assert preset.yield_mt == pytest.approx(50.0)
        assert preset.typical_height_m == pytest.approx(4000.0)
        assert preset.group == "Historic Weapons"

    def test_preset_to_parameters(self):
        params = get_preset("W80").to_parameters(wind_speed_kmh=3.0)

        assert params.height_m == pytest.approx(250.0)
        assert params.wind_speed_kmh == pytest.approx(3.0)

    def test_city_lookup(self):
        city = get_city("VIENNA")

        assert city.country == "Austria"
        assert city.radius_km == pytest.approx(11.5)

    def test_city_population_model(self):
        model = get_city("Vienna").to_population_model()

        assert model.core_density == pytest.approx(4579.0)
        assert model.suburban_density == pytest.approx(1600.0)
        assert model.core_radius_km == pytest.approx(11.5)
        assert model.name == "Vienna"

    def test_unknown_names(self):
        with pytest.raises(CatalogueError):
            get_preset("W99")
        with pytest.raises(KeyError):
            get_city("Atlantis")

    def test_missing_catalogue_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_cities(str(tmp_path / "missing.yaml"))

    def test_malformed_catalogue_entry(self, tmp_path):
        path = tmp_path / "cities.yaml"
        path.write_text("cities:\n  - {name: Nowhere}\n", encoding="utf-8")

        with pytest.raises(ValueError):
            load_cities(str(path))


# =============================================================================
# TEST 3-4: Scenario loader
# =============================================================================


class TestScenarioLoader:
    def test_preset_burst_type_city(self, tmp_path):
        path = write_scenario(
            tmp_path,
            {
                "scenario": {"name": "W80 on Vienna", "description": "Optimum air burst"},
                "weapon": {"preset": "W80"},
                "burst": {"type": "optimum"},
                "target": {"city": "Vienna"},
                "environment": {"wind_speed_kmh": 3},
                "simulation": {"n_rings": 40},
            },
        )
        config = load_scenario(path)

        assert config.name == "W80 on Vienna"
        assert config.preset.name == "W80"
        assert config.params.yield_mt == pytest.approx(0.15)
        assert config.params.height_m == pytest.approx(calculate_optimal_heights(0.15).combined_m)
        assert config.params.burst_type is BurstType.OPTIMUM
        assert config.params.wind_speed_kmh == pytest.approx(3.0)
        assert config.population.name == "Vienna"
        assert config.n_rings == 40

    def test_explicit_yield_and_height(self, tmp_path):
        path = write_scenario(
            tmp_path,
            {
                "weapon": {"yield_mt": 0.15},
                "burst": {"height_m": 159.4},
                "environment": {"wind_speed_kmh": 3.0},
            },
        )
        loader = ScenarioLoader(path)
        config = loader.get_config()

        assert config.params.height_m == pytest.approx(159.4)
        assert config.params.burst_type is BurstType.CUSTOM
        assert config.population is None
        assert loader.get_scenario_name() == "Unnamed Scenario"

    def test_explicit_population(self, tmp_path):
        path = write_scenario(
            tmp_path,
            {
                "weapon": {"yield_mt": 1.0},
                "target": {"core_density": 2000, "suburban_density": 800, "core_radius_km": 6},
            },
        )
        population = load_scenario(path).population

        assert population.core_density == pytest.approx(2000.0)
        assert population.core_radius_km == pytest.approx(6.0)

    def test_preset_without_burst_uses_typical_height(self):
        config = ScenarioLoader().load_dict({"weapon": {"preset": "Little Boy (US)"}})

        assert config.params.height_m == pytest.approx(580.0)
        assert config.params.burst_type is None

    def test_yield_without_burst_is_surface(self):
        config = ScenarioLoader().load_dict({"weapon": {"yield_mt": 1.0}})

        assert config.params.height_m == 0.0
        assert config.params.burst_type is BurstType.SURFACE

    def test_run(self):
        loader = ScenarioLoader()
        loader.load_dict(
            {
                "weapon": {"yield_mt": 0.15},
                "burst": {"height_m": 159.4},
                "target": {"city": "Vienna"},
                "environment": {"wind_speed_kmh": 3.0},
            }
        )
        result = loader.run()

        assert result.thermal.severe_m == pytest.approx(561.84, rel=1e-3)
        assert result.casualties.deaths > 0.0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ScenarioLoader(str(tmp_path / "missing.yaml"))

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError):
            ScenarioLoader(str(path))

    @pytest.mark.parametrize(
        "weapon", [{}, {"preset": "W80", "yield_mt": 0.1}]
    )
    def test_weapon_needs_one_source(self, weapon):
        with pytest.raises(ValueError):
            ScenarioLoader().load_dict({"weapon": weapon})

    def test_invalid_ring_count(self):
        with pytest.raises(ValueError):
            ScenarioLoader().load_dict({"weapon": {"yield_mt": 1.0}, "simulation": {"n_rings": 0}})

    def test_unknown_city(self):
        with pytest.raises(CatalogueError):
            ScenarioLoader().load_dict({"weapon": {"yield_mt": 1.0}, "target": {"city": "Atlantis"}})

    def test_engine_before_load(self):
        with pytest.raises(ValueError):
            ScenarioLoader().create_engine()


# =============================================================================
# TEST 5: Report
# =============================================================================


class TestReport:
    @pytest.mark.parametrize(
        "distance_m,expected",
        [
            (0.0, "< 1 m"),
            (0.5, "< 1 m"),
            (1.0, "1 m"),
            (561.84, "561 m"),
            (999.9, "999 m"),
            (1000.0, "1.0 km"),
            (1045.72, "1.0 km"),
            (1999.99, "1.9 km"),
            (74611.0, "74.6 km"),
        ],
    )
    def test_format_distance(self, distance_m, expected):
        assert format_distance(distance_m) == expected

    def test_format_count(self):
        assert format_count(1234567.4) == "1,234,567"

    def test_report_sections(self):
        population = get_city("Vienna").to_population_model()
        report = render_report(calculate_effects(0.15, 159.4, 3.0, population=population))

        assert "Air burst" in report
        assert "Thermal" in report
        assert "Radiation" in report
        assert "Fallout Data" in report
        assert "Estimated Casualties in Vienna:" in report

    def test_report_names_burst_type(self):
        params = DetonationParameters(0.15, 250.0, burst_type=BurstType.OPTIMUM)
        report = render_report(EffectsEngine().calculate(params))

        assert "Burst: Optimal Air Burst" in report

    def test_report_without_target(self):
        report = render_report(calculate_effects(1.0))

        assert "Ground burst" in report
        assert "Estimated Casualties" not in report


# =============================================================================
# TEST 6: Command line
# =============================================================================


class TestHeadlessCLI:
    def test_invalid_yield_exits_1(self, capsys):
        assert headless.main(["--yield", "-1"]) == 1
        assert "Error" in capsys.readouterr().out

    def test_zero_yield_exits_1(self):
        assert headless.main(["--yield", "0"]) == 1

    def test_unknown_preset_exits_1(self, capsys):
        assert headless.main(["--preset", "W99"]) == 1
        assert "Unknown weapon preset" in capsys.readouterr().out

    def test_custom_without_height_exits_1(self):
        assert headless.main(["--yield", "1", "--burst-type", "custom"]) == 1

    def test_missing_config_exits_1(self, tmp_path):
        assert headless.main(["--config", str(tmp_path / "missing.yaml")]) == 1

    def test_quiet_output(self, capsys):
        code = headless.main(["--yield", "0.15", "--height", "159.4", "--wind", "3", "--quiet"])
        thermal, blast, fallout, deaths = capsys.readouterr().out.split()

        assert code == 0
        assert float(thermal) == pytest.approx(561.8, abs=0.1)
        assert float(blast) == pytest.approx(1045.7, abs=0.1)
        assert float(fallout) == pytest.approx(74.6, rel=0.01)
        assert float(deaths) == 0.0

    def test_full_report(self, capsys):
        code = headless.main(["--preset", "W80", "--burst-type", "optimum", "--city", "Vienna"])
        out = capsys.readouterr().out

        assert code == 0
        assert "Weapon: W80 (Cruise Missile)" in out
        assert "Estimated Casualties in Vienna:" in out

    def test_list_burst_types(self, capsys):
        assert headless.main(["--list-burst-types"]) == 0
        out = capsys.readouterr().out

        assert "Optimal Air Burst" in out
        assert "Maximum fallout, reduced blast radius" in out
        assert "fallout x0.3, radiation x0.5" in out

    def test_config_file(self, tmp_path, capsys):
        path = write_scenario(
            tmp_path,
            {"scenario": {"name": "From file"}, "weapon": {"preset": "B83"}, "burst": {"type": "low"}},
        )

        assert headless.main(["--config", path]) == 0
        assert "From file" in capsys.readouterr().out

    def test_list_presets_and_cities(self, capsys):
        assert headless.main(["--list-presets", "--list-cities"]) == 0
        out = capsys.readouterr().out

        assert "Tsar Bomba (USSR)" in out
        assert "Zurich" in out


class TestBatchCLI:
    def test_quick_sweep_uses_ring_count(self, monkeypatch):
        captured = {}
        monkeypatch.setattr(
            batch_run, "run_batch", lambda jobs, n_workers: captured.setdefault("jobs", jobs)
        )

        assert batch_run.main(["--quick", "--rings", "45"]) == 0
        assert len(captured["jobs"]) == 10
        assert all(job.n_rings == 45 for job in captured["jobs"])

    def test_sweep(self, capsys):
        code = batch_run.main(
            ["--city", "Graz", "--yields", "0.1", "--burst-types", "surface", "optimum", "--workers", "1"]
        )

        assert code == 0
        assert "BATCH COMPLETE" in capsys.readouterr().out

    def test_unknown_city(self):
        assert batch_run.main(["--city", "Atlantis"]) == 1

    def test_custom_burst_rejected(self):
        assert batch_run.main(["--burst-types", "custom"]) == 1


# =============================================================================
# MAIN EXECUTION
# =============================================================================

if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
