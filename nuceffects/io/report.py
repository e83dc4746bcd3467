"""
Plain-text Report

Renders an EffectsResult as the fixed-width text report printed by the
headless runner. Purely presentational: nothing here feeds back into the
calculation.
"""

import math
from typing import List

from nuceffects.physics.height import BURST_TYPE_INFO
from nuceffects.physics.levels import EffectLevels
from nuceffects.simulation.objects import EffectsResult

REPORT_WIDTH = 78


def format_distance(distance_m: float) -> str:
    """
    Format a radius for display.

    "< 1 m" below one metre, whole metres below 1 km, otherwise km with one
    truncated decimal (1045.7 m -> "1.0 km").
    """
    if distance_m < 1.0:
        return "< 1 m"
    if distance_m >= 1000.0:
        whole_km = int(distance_m // 1000.0)
        tenths = int(math.fmod(distance_m, 1000.0) // 100.0)
        return f"{whole_km}.{tenths} km"
    return f"{int(distance_m)} m"


def format_count(value: float) -> str:
    """Format a casualty count with thousands separators."""
    return f"{value:,.0f}"


def _effect_line(name: str, levels: EffectLevels) -> str:
    return (
        f"{name:<10}| "
        f"Severe: {format_distance(levels.severe_m):>8} ({levels.severe_area_km2:.2f} km²) | "
        f"Moderate: {format_distance(levels.moderate_m):>8} ({levels.moderate_area_km2:.2f} km²) | "
        f"Light: {format_distance(levels.light_m):>8} ({levels.light_area_km2:.2f} km²)"
    )


def render_report(result: EffectsResult) -> str:
    """
    Render the effects result as a text report.

    Args:
        result: Effects calculation result

    Returns:
        Multi-line report string
    """
    params = result.parameters
    heavy = "=" * REPORT_WIDTH
    light = "-" * REPORT_WIDTH

    weapon = f"Weapon Data | Yield: {params.yield_mt:g} MT | Type: "
    if params.is_airburst:
        weapon += f"Air burst | Height: {params.height_m:.1f} m"
    else:
        weapon += "Ground burst"
    if params.burst_type is not None:
        weapon += f" | Burst: {BURST_TYPE_INFO[params.burst_type].name}"

    lines: List[str] = ["Calculated Effects:", heavy, weapon, light]

    for name, levels in (
        ("Thermal", result.thermal),
        ("Blast", result.blast),
        ("Radiation", result.radiation),
    ):
        lines.append(_effect_line(name, levels))
        lines.append(light)

    fallout = result.fallout
    lines.append(
        f"Fallout Data | Wind Speed: {params.wind_speed_kmh:g} km/h | "
        f"Max Distance: {fallout.max_downwind_distance_km:.2f} km"
    )
    lines.append(
        f"Width: {fallout.max_width_km:.2f} km | "
        f"Fallout Zone: {fallout.dangerous_zone_area_km2:.2f} km² | "
        f"Angle: {fallout.fallout_angle_deg:.1f}°"
    )
    lines.append(light)

    heights = result.optimal_heights
    lines.append(
        f"Optimal Heights | Thermal: {int(heights.thermal_m)} m | "
        f"Blast: {int(heights.blast_m)} m | Combined: {int(heights.combined_m)} m"
    )

    if result.population is not None:
        casualties = result.casualties
        target = result.population.name or "target"
        lines.extend(
            [
                light,
                f"Estimated Casualties in {target}:",
                f"Fatalities: {format_count(casualties.deaths)}",
                f"Severe Injuries: {format_count(casualties.severe_injuries)}",
                f"Light Injuries: {format_count(casualties.light_injuries)}",
                f"Total Casualties: {format_count(casualties.total_casualties)}",
                f"Long-Term Deaths (1 Year): {format_count(casualties.long_term_deaths_1yr)}",
                f"Long-Term Deaths (5 Years): {format_count(casualties.long_term_deaths_5yr)}",
                f"Long-Term Deaths (10 Years): {format_count(casualties.long_term_deaths_10yr)}",
                f"Long-Term Deaths (20 Years): {format_count(casualties.long_term_deaths_20yr)}",
            ]
        )

    lines.append(heavy)
    return "\n".join(lines)
