#!/usr/bin/env python3
"""
Headless Effects CLI

Run a single detonation effects calculation from the command line.

Usage:
    python headless.py --preset W80 --burst-type optimum --city Vienna
    python headless.py --yield 0.15 --height 159.4 --wind 3
    python headless.py --config scenario.yaml   # From file

Examples:
    # Catalogue listings
    python headless.py --list-presets
    python headless.py --list-cities
    python headless.py --list-burst-types

    # Surface burst with wind
    python headless.py --yield 1.0 --burst-type surface --wind 20 --city London
"""

import argparse
import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from nuceffects.errors import CatalogueError
from nuceffects.io.catalogue import load_cities, load_weapon_presets
from nuceffects.io.report import render_report
from nuceffects.io.scenario_loader import ScenarioLoader
from nuceffects.physics.height import BURST_TYPE_INFO, get_burst_type_names
from nuceffects.simulation.casualties import DEFAULT_RING_COUNT


def _print_presets() -> None:
    group = None
    for preset in load_weapon_presets():
        if preset.group != group:
            group = preset.group
            print(f"\n{group}:")
        print(
            f"  {preset.name:<18} {preset.type:<22} {preset.yield_mt * 1000:>8.0f} kT"
            f"  {preset.typical_height_m:>6.0f} m"
        )


def _print_cities() -> None:
    for idx, city in enumerate(load_cities(), start=1):
        print(
            f"{idx:2d}. {city.name:<15}  {city.country:<12}  Pop: {city.population_millions:g}M"
        )


def _print_burst_types() -> None:
    for burst_type, info in BURST_TYPE_INFO.items():
        factors = ""
        if info.fallout_factor is not None:
            factors = f"  fallout x{info.fallout_factor:g}, radiation x{info.radiation_factor:g}"
        print(f"  {burst_type.value:<9} {info.name:<18} {info.description}{factors}")


def scenario_from_args(args: argparse.Namespace) -> dict:
    """Build a scenario mapping (same layout as a scenario file) from CLI args."""
    weapon = {}
    if args.preset is not None:
        weapon["preset"] = args.preset
    if args.yield_mt is not None:
        weapon["yield_mt"] = args.yield_mt

    burst = {}
    if args.burst_type is not None:
        burst["type"] = args.burst_type
    if args.height is not None:
        burst["height_m"] = args.height

    scenario = {
        "scenario": {"name": "Command line"},
        "weapon": weapon,
        "burst": burst,
        "environment": {"wind_speed_kmh": args.wind},
        "simulation": {"n_rings": args.rings},
    }
    if args.city is not None:
        scenario["target"] = {"city": args.city}
    return scenario


def main(argv=None):
    parser = argparse.ArgumentParser(description="Estimate nuclear detonation effects")

    # Config file
    parser.add_argument("--config", type=str, default=None, help="YAML scenario file")

    # Weapon parameters
    parser.add_argument("--preset", type=str, default=None, help="Weapon preset name")
    parser.add_argument(
        "--yield", dest="yield_mt", type=float, default=None, help="Weapon yield in MT"
    )

    # Burst parameters
    parser.add_argument(
        "--burst-type",
        type=str,
        default=None,
        choices=get_burst_type_names(),
        help="Burst type (height from the optimizer)",
    )
    parser.add_argument("--height", type=float, default=None, help="Height of burst in m")

    # Target and environment
    parser.add_argument("--city", type=str, default=None, help="Target city name")
    parser.add_argument("--wind", type=float, default=0.0, help="Wind speed in km/h (default: 0)")
    parser.add_argument(
        "--rings",
        type=int,
        default=DEFAULT_RING_COUNT,
        help=f"Casualty integration rings (default: {DEFAULT_RING_COUNT})",
    )

    # Options
    parser.add_argument("--list-presets", action="store_true", help="List weapon presets")
    parser.add_argument("--list-cities", action="store_true", help="List target cities")
    parser.add_argument("--list-burst-types", action="store_true", help="List burst types")
    parser.add_argument("--quiet", action="store_true", help="Machine-readable output only")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.list_presets or args.list_cities or args.list_burst_types:
        if args.list_presets:
            _print_presets()
        if args.list_cities:
            _print_cities()
        if args.list_burst_types:
            _print_burst_types()
        return 0

    loader = ScenarioLoader()
    try:
        if args.config:
            if not os.path.exists(args.config):
                print(f"Error: Config file not found: {args.config}")
                return 1
            loader.load(args.config)
        else:
            loader.load_dict(scenario_from_args(args))
        result = loader.run()
    except CatalogueError as e:
        print(f"Error: {e.args[0]}")
        return 1
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if not args.quiet:
        config = loader.get_config()
        print("=" * 78)
        print(f"NucEffects Headless Mode: {config.name}")
        if config.preset is not None:
            print(f"Weapon: {config.preset.name} ({config.preset.type})")
        print()
        print(render_report(result))
    else:
        # Machine-readable output
        print(
            f"{result.thermal.severe_m:.1f} {result.blast.severe_m:.1f} "
            f"{result.fallout.max_downwind_distance_km:.3f} {result.casualties.deaths:.0f}"
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
