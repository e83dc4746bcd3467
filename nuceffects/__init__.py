"""
NucEffects Source Package

Nuclear detonation effects estimation with:
- Blast overpressure with Mach stem enhancement
- Thermal fluence and burn radii
- Initial radiation and fallout footprint
- Height-of-burst optimization
- Population-weighted casualty estimates
"""

# Re-export from subpackages
from nuceffects.errors import (
    CatalogueError,
    InvalidDistanceError,
    InvalidPopulationModelError,
    InvalidYieldError,
)
from nuceffects.physics import (
    BurstType,
    EffectLevels,
    FalloutPattern,
    OptimalHeights,
    calculate_blast_radii,
    calculate_fallout,
    calculate_optimal_heights,
    calculate_radiation_radii,
    calculate_thermal_radii,
)
from nuceffects.simulation import (
    CasualtyEstimate,
    DetonationParameters,
    EffectsEngine,
    EffectsResult,
    PopulationModel,
    calculate_effects,
)

__version__ = "1.0.0"
__author__ = "NucEffects Contributors"

__all__ = [
    # Errors
    "InvalidYieldError",
    "InvalidDistanceError",
    "InvalidPopulationModelError",
    "CatalogueError",
    # Physics
    "EffectLevels",
    "FalloutPattern",
    "OptimalHeights",
    "BurstType",
    "calculate_blast_radii",
    "calculate_thermal_radii",
    "calculate_radiation_radii",
    "calculate_fallout",
    "calculate_optimal_heights",
    # Simulation
    "DetonationParameters",
    "PopulationModel",
    "CasualtyEstimate",
    "EffectsResult",
    "EffectsEngine",
    "calculate_effects",
]
