"""Care action handlers: discrete, user-triggered plant interactions.

Every handler mutates the plant in place, clamps what it touches, stamps
`last_interaction` and appends exactly one care record. Handlers never fail
for a real plant; out-of-range amounts are clamped, not rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from plant_sim.core.config import (
    DEFAULT_FERTILIZER_AMOUNT,
    DEFAULT_SUNLIGHT_DELTA,
    DEFAULT_WATER_AMOUNT,
    OPTIMAL_BAND_HAPPINESS_BONUS,
    OPTIMAL_BAND_TOLERANCE,
    PRUNE_HAPPINESS_BONUS,
    PRUNE_HEALTH_BONUS,
    TALK_HAPPINESS_BONUS,
)
from plant_sim.plants.plant import CareAction, Plant
from plant_sim.plants.species import in_sun_range, profile_for


@dataclass
class CareResult:
    """Outcome of one care action on one plant."""

    action: CareAction
    requested: float
    previous_value: float
    new_value: float
    bonus_granted: bool


def within_optimal_band(level: float, optimal: float) -> bool:
    """True when level is strictly closer than OPTIMAL_BAND_TOLERANCE to optimal."""
    return abs(level - optimal) < OPTIMAL_BAND_TOLERANCE


def water(plant: Plant, amount: float, now: float) -> CareResult:
    previous = plant.water_level
    level = plant.adjust("water_level", amount)
    bonus = within_optimal_band(level, profile_for(plant.plant_type).optimal_water)
    if bonus:
        plant.adjust("happiness", OPTIMAL_BAND_HAPPINESS_BONUS)
    plant.record_care(CareAction.WATERING, now, amount)
    return CareResult(CareAction.WATERING, amount, previous, level, bonus)


def fertilize(plant: Plant, amount: float, now: float) -> CareResult:
    previous = plant.fertilizer_level
    level = plant.adjust("fertilizer_level", amount)
    bonus = within_optimal_band(level, profile_for(plant.plant_type).optimal_fertilizer)
    if bonus:
        plant.adjust("happiness", OPTIMAL_BAND_HAPPINESS_BONUS)
    plant.record_care(CareAction.FERTILIZING, now, amount)
    return CareResult(CareAction.FERTILIZING, amount, previous, level, bonus)


def adjust_sunlight(plant: Plant, delta: float, now: float) -> CareResult:
    previous = plant.sun_exposure
    level = plant.adjust("sun_exposure", delta)
    bonus = in_sun_range(level, plant.plant_type)
    if bonus:
        plant.adjust("happiness", OPTIMAL_BAND_HAPPINESS_BONUS)
    plant.record_care(CareAction.SUNLIGHT, now, delta)
    return CareResult(CareAction.SUNLIGHT, delta, previous, level, bonus)


def prune(plant: Plant, now: float) -> CareResult:
    previous = plant.health
    plant.adjust("health", PRUNE_HEALTH_BONUS)
    plant.adjust("happiness", PRUNE_HAPPINESS_BONUS)
    plant.record_care(CareAction.PRUNING, now, 1)
    return CareResult(CareAction.PRUNING, 1.0, previous, plant.health, True)


def talk(plant: Plant, now: float) -> CareResult:
    previous = plant.happiness
    plant.adjust("happiness", TALK_HAPPINESS_BONUS)
    plant.record_care(CareAction.TALKING, now, 1)
    return CareResult(CareAction.TALKING, 1.0, previous, plant.happiness, True)


_DEFAULT_AMOUNTS: dict[CareAction, float] = {
    CareAction.WATERING: DEFAULT_WATER_AMOUNT,
    CareAction.FERTILIZING: DEFAULT_FERTILIZER_AMOUNT,
    CareAction.SUNLIGHT: DEFAULT_SUNLIGHT_DELTA,
}

_AMOUNT_HANDLERS: dict[CareAction, Callable[[Plant, float, float], CareResult]] = {
    CareAction.WATERING: water,
    CareAction.FERTILIZING: fertilize,
    CareAction.SUNLIGHT: adjust_sunlight,
}


def perform(
    plant: Plant,
    action: CareAction,
    now: float,
    amount: Optional[float] = None,
) -> CareResult:
    """Dispatch a care action by name. Prune and talk ignore amount."""
    action = CareAction(action)
    if action == CareAction.PRUNING:
        return prune(plant, now)
    if action == CareAction.TALKING:
        return talk(plant, now)

    if amount is None:
        amount = _DEFAULT_AMOUNTS[action]
    return _AMOUNT_HANDLERS[action](plant, amount, now)
