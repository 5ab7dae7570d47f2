"""Growth & vitals: turns elapsed simulated time into plant changes.

The update is a single pass over the pre-update state. Satisfaction factors,
health and the interaction gap are all read before anything is written, so
`advance` is a pure function of (plant, elapsed_ms, now). Splitting a long
interval into several calls does not give a bit-identical result because the
factors are re-evaluated from the shifted resource levels between calls; this
coarse-tick approximation is intended.
"""

from __future__ import annotations

from dataclasses import dataclass

from plant_sim.core.clock import hours
from plant_sim.core.config import (
    FERTILIZER_DECAY_PER_HOUR,
    GROWTH_RATE_PER_HOUR,
    HAPPINESS_NEGLECT_FLOOR,
    HAPPINESS_NEUTRAL_HEALTH,
    HAPPINESS_RATE_PER_HOUR,
    HAPPY_THRESHOLD,
    HEALTH_NEUTRAL_FACTOR,
    HEALTH_RATE_PER_HOUR,
    INTERACTION_DECAY_MAX,
    INTERACTION_DECAY_PER_HOUR,
    LEVEL_MAX,
    WATER_DECAY_PER_HOUR,
)
from plant_sim.plants.plant import Plant
from plant_sim.plants.species import care_factors


@dataclass
class VitalsDelta:
    """What one `advance` call changed, all computed from pre-update values."""

    growth: float
    water: float
    fertilizer: float
    health: float
    happiness: float


def mean_factor(plant: Plant) -> float:
    factors = care_factors(
        plant.water_level, plant.fertilizer_level, plant.sun_exposure, plant.plant_type,
    )
    return sum(factors) / len(factors)


def interaction_decay(plant: Plant, now: float) -> float:
    """Happiness lost to being left alone, capped at INTERACTION_DECAY_MAX."""
    hours_since = max(0.0, hours(now - plant.last_interaction))
    return min(INTERACTION_DECAY_MAX, hours_since * INTERACTION_DECAY_PER_HOUR)


def happiness_delta(plant: Plant, hours_elapsed: float, now: float) -> float:
    """Happiness change including the neglect floor.

    A negative change never takes happiness below HAPPINESS_NEGLECT_FLOOR:
    at or under the floor it is suppressed entirely, above it it stops at the
    floor. Positive changes are never limited.
    """
    health_term = (plant.health / LEVEL_MAX - HAPPINESS_NEUTRAL_HEALTH) * HAPPINESS_RATE_PER_HOUR * hours_elapsed
    delta = health_term - interaction_decay(plant, now)
    if delta >= 0:
        return delta
    if plant.happiness <= HAPPINESS_NEGLECT_FLOOR:
        return 0.0
    return max(delta, HAPPINESS_NEGLECT_FLOOR - plant.happiness)


def compute_delta(plant: Plant, elapsed_ms: float, now: float) -> VitalsDelta:
    hours_elapsed = hours(elapsed_ms)
    growth_rate = mean_factor(plant)
    return VitalsDelta(
        growth=growth_rate * GROWTH_RATE_PER_HOUR * hours_elapsed,
        water=-WATER_DECAY_PER_HOUR * hours_elapsed,
        fertilizer=-FERTILIZER_DECAY_PER_HOUR * hours_elapsed,
        health=(growth_rate - HEALTH_NEUTRAL_FACTOR) * HEALTH_RATE_PER_HOUR * hours_elapsed,
        happiness=happiness_delta(plant, hours_elapsed, now),
    )


def advance(plant: Plant, elapsed_ms: float, now: float) -> Plant:
    """Return a new plant advanced by elapsed_ms of simulated time."""
    if elapsed_ms <= 0:
        return plant.copy()

    delta = compute_delta(plant, elapsed_ms, now)
    updated = plant.copy()
    updated.grow(delta.growth)
    updated.adjust("water_level", delta.water)
    updated.adjust("fertilizer_level", delta.fertilizer)
    updated.adjust("health", delta.health)
    updated.adjust("happiness", delta.happiness)

    if updated.happiness > HAPPY_THRESHOLD:
        updated.happy_streak_ms = plant.happy_streak_ms + elapsed_ms
    else:
        updated.happy_streak_ms = 0.0
    return updated
