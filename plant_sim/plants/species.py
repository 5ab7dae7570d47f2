"""Plant types, their optimal-resource profiles, and satisfaction factors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from plant_sim.core.config import SATISFACTION_FALLOFF


class PlantType(str, Enum):
    SUCCULENT = "succulent"
    CACTUS = "cactus"
    FERN = "fern"
    FLOWERING = "flowering"


@dataclass(frozen=True)
class SpeciesProfile:
    """Design constants describing what a plant type thrives on."""

    optimal_water: float
    optimal_fertilizer: float
    optimal_sun: float
    sun_range: tuple[float, float]  # inclusive (min, max)


SPECIES: dict[PlantType, SpeciesProfile] = {
    PlantType.SUCCULENT: SpeciesProfile(
        optimal_water=30.0, optimal_fertilizer=30.0, optimal_sun=70.0, sun_range=(60.0, 90.0),
    ),
    PlantType.CACTUS: SpeciesProfile(
        optimal_water=20.0, optimal_fertilizer=20.0, optimal_sun=80.0, sun_range=(70.0, 95.0),
    ),
    PlantType.FERN: SpeciesProfile(
        optimal_water=70.0, optimal_fertilizer=60.0, optimal_sun=40.0, sun_range=(30.0, 60.0),
    ),
    PlantType.FLOWERING: SpeciesProfile(
        optimal_water=60.0, optimal_fertilizer=70.0, optimal_sun=60.0, sun_range=(50.0, 80.0),
    ),
}

# Every plant type must have a profile
_missing = [t for t in PlantType if t not in SPECIES]
if _missing:
    raise RuntimeError(f"No species profile for {_missing}")


def profile_for(plant_type: PlantType) -> SpeciesProfile:
    return SPECIES[PlantType(plant_type)]


def satisfaction(level: float, optimal_low: float, optimal_high: float) -> float:
    """How close a resource level is to the optimum, in [0, 1].

    1.0 anywhere inside the inclusive range [optimal_low, optimal_high];
    outside it the factor falls off linearly with the distance to the nearest
    bound and reaches 0 at SATISFACTION_FALLOFF. Passing the same value for
    both bounds gives the triangular center form.
    """
    if optimal_low <= level <= optimal_high:
        return 1.0
    if level < optimal_low:
        distance = optimal_low - level
    else:
        distance = level - optimal_high
    return max(0.0, 1.0 - distance / SATISFACTION_FALLOFF)


def water_factor(water_level: float, plant_type: PlantType) -> float:
    optimal = profile_for(plant_type).optimal_water
    return satisfaction(water_level, optimal, optimal)


def fertilizer_factor(fertilizer_level: float, plant_type: PlantType) -> float:
    optimal = profile_for(plant_type).optimal_fertilizer
    return satisfaction(fertilizer_level, optimal, optimal)


def sun_factor(sun_exposure: float, plant_type: PlantType) -> float:
    optimal = profile_for(plant_type).optimal_sun
    return satisfaction(sun_exposure, optimal, optimal)


def in_sun_range(sun_exposure: float, plant_type: PlantType) -> bool:
    low, high = profile_for(plant_type).sun_range
    return low <= sun_exposure <= high


def care_factors(
    water_level: float,
    fertilizer_level: float,
    sun_exposure: float,
    plant_type: PlantType,
) -> tuple[float, float, float]:
    """(water, fertilizer, sun) satisfaction factors for a plant's levels."""
    return (
        water_factor(water_level, plant_type),
        fertilizer_factor(fertilizer_level, plant_type),
        sun_factor(sun_exposure, plant_type),
    )
