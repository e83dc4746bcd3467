#!/usr/bin/env python3
"""
Batch Run Script - Parameter Sweep Executor

Runs effects calculations over yields × burst types × wind speeds for one
target city in parallel using multiprocessing, and prints a summary table.

Usage:
    python batch_run.py                          # Default sweep on Vienna
    python batch_run.py --city London --wind 0 10 30
    python batch_run.py --quick                  # Log-spaced yield sweep
"""

import argparse
import logging
import os
import sys
import time
from multiprocessing import Pool, cpu_count
from typing import List

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from nuceffects.errors import CatalogueError
from nuceffects.io.catalogue import get_city
from nuceffects.io.report import format_count, format_distance
from nuceffects.physics.height import BurstType, get_burst_type
from nuceffects.simulation.objects import EffectsResult
from nuceffects.simulation.scenario_generator import (
    ParameterSpace,
    ScenarioGenerator,
    ScenarioJob,
    run_scenario,
)

logger = logging.getLogger(__name__)


def run_batch(jobs: List[ScenarioJob], n_workers: int = None) -> List[EffectsResult]:
    """
    Run batch of effects calculations in parallel.

    Args:
        jobs: Scenario jobs
        n_workers: Number of parallel workers (default: CPU count - 1)

    Returns:
        List of results in job order
    """
    if n_workers is None:
        n_workers = max(1, cpu_count() - 1)

    print("=" * 60)
    print("NucEffects Batch Processor")
    print("=" * 60)
    print(f"Scenarios: {len(jobs)}")
    print(f"Workers: {n_workers}")
    print("=" * 60)

    start_time = time.perf_counter()

    with Pool(n_workers) as pool:
        results = pool.map(run_scenario, jobs)

    total_time = time.perf_counter() - start_time
    logger.info("Completed %d scenarios in %.2f s", len(results), total_time)

    _print_summary(results, total_time)
    return results


def _print_summary(results: List[EffectsResult], total_time: float) -> None:
    """Print batch run summary table."""
    if not results:
        print("No results to summarize")
        return

    print(
        f"\n{'Yield MT':>9} {'Burst':<8} {'HOB':>7} {'Wind':>5} "
        f"{'Blast sev.':>10} {'Therm sev.':>10} {'Fallout':>9} {'Deaths':>12}"
    )
    print("-" * 78)
    for result in results:
        params = result.parameters
        burst = params.burst_type.value if params.burst_type else "-"
        print(
            f"{params.yield_mt:>9g} {burst:<8} {params.height_m:>6.0f}m {params.wind_speed_kmh:>5g} "
            f"{format_distance(result.blast.severe_m):>10} "
            f"{format_distance(result.thermal.severe_m):>10} "
            f"{result.fallout.max_downwind_distance_km:>7.1f}km "
            f"{format_count(result.casualties.deaths):>12}"
        )

    worst = max(results, key=lambda r: r.casualties.total_casualties)
    print("\n" + "=" * 60)
    print("BATCH COMPLETE")
    print("=" * 60)
    print(f"Total scenarios: {len(results)}")
    print(
        f"Highest casualties: {format_count(worst.casualties.total_casualties)} "
        f"({worst.parameters.yield_mt:g} MT, "
        f"{worst.parameters.burst_type.value if worst.parameters.burst_type else '-'})"
    )
    print(f"Total time: {total_time:.2f}s")
    print(f"Scenarios/second: {len(results) / max(total_time, 1e-9):.1f}")
    print("=" * 60)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run nuclear effects parameter sweeps")
    parser.add_argument("--city", type=str, default="Vienna", help="Target city (default: Vienna)")
    parser.add_argument(
        "--yields",
        type=float,
        nargs="+",
        default=[0.015, 0.1, 0.3, 1.0, 5.0],
        help="Yields in MT",
    )
    parser.add_argument(
        "--burst-types",
        type=str,
        nargs="+",
        default=["surface", "low", "optimum", "high"],
        help="Burst types (custom is not allowed)",
    )
    parser.add_argument(
        "--wind", type=float, nargs="+", default=[15.0], help="Wind speeds in km/h"
    )
    parser.add_argument("--rings", type=int, default=20, help="Casualty integration rings")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of parallel workers (default: CPU count - 1)",
    )
    parser.add_argument(
        "--quick", action="store_true", help="Log-spaced yield sweep at optimum height"
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        population = get_city(args.city).to_population_model()

        if args.quick:
            print("Running quick yield sweep...")
            jobs = ScenarioGenerator.yield_sweep(
                yield_min_mt=0.01,
                yield_max_mt=10.0,
                n_yields=10,
                burst_type=BurstType.OPTIMUM,
                wind_speed_kmh=args.wind[0],
                population=population,
                n_rings=args.rings,
            )
        else:
            space = ParameterSpace(
                yields_mt=args.yields,
                burst_types=[get_burst_type(name) for name in args.burst_types],
                wind_speeds_kmh=args.wind,
                population=population,
                n_rings=args.rings,
            )
            jobs = ScenarioGenerator.generate(space)
    except CatalogueError as e:
        print(f"Error: {e.args[0]}")
        return 1
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    run_batch(jobs, n_workers=args.workers)
    return 0


if __name__ == "__main__":
    sys.exit(main())
