"""Achievement definitions and the rule engine that unlocks them.

Each rule reads only plant state and its own achievement, so rules can be
evaluated in any order. Rules are monotonic: an unlocked achievement stays
unlocked and progress never goes down.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from plant_sim.core.clock import local_hour
from plant_sim.core.config import (
    CARE_ACTION_TARGET,
    FULLY_GROWN_STAGE,
    GROWTH_SPURT_STAGE,
    HAPPY_STREAK_TARGET_MS,
    NIGHT_OWL_END_HOUR,
    NIGHT_OWL_START_HOUR,
    NIGHT_OWL_WINDOW_MS,
    PLANT_TYPE_TARGET,
    TALK_TARGET,
)
from plant_sim.plants.plant import CareAction, CareRecord, Plant


@dataclass
class Achievement:
    """A milestone the player can unlock."""

    id: str
    title: str
    description: str
    category: str  # "care", "growth", "collection", "happiness", "special"
    unlocked: bool = False
    progress: Optional[int] = None
    max_progress: Optional[int] = None
    unlocked_at: Optional[float] = None

    @property
    def is_counting(self) -> bool:
        return self.max_progress is not None

    def unlock(self, now: float) -> bool:
        """Mark unlocked. Returns True only on the first unlock."""
        if self.unlocked:
            return False
        self.unlocked = True
        self.unlocked_at = now
        if self.is_counting:
            self.progress = self.max_progress
        return True

    def advance_progress(self, count: int) -> None:
        """Raise progress toward max_progress; never lowers it."""
        if not self.is_counting:
            return
        capped = min(count, self.max_progress)
        self.progress = max(self.progress or 0, capped)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "unlocked": self.unlocked,
            "progress": self.progress,
            "maxProgress": self.max_progress,
            "unlockedAt": self.unlocked_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Achievement:
        return cls(
            id=data["id"],
            title=data["title"],
            description=data["description"],
            category=data["category"],
            unlocked=bool(data.get("unlocked", False)),
            progress=data.get("progress"),
            max_progress=data.get("maxProgress"),
            unlocked_at=data.get("unlockedAt"),
        )


def initial_achievements() -> list[Achievement]:
    """The full achievement set, all locked with zero progress."""
    return [
        Achievement("green_thumb", "Green Thumb", "Water a plant for the first time", "care"),
        Achievement(
            "plant_whisperer", "Plant Whisperer", f"Talk to a plant {TALK_TARGET} times", "care",
            progress=0, max_progress=TALK_TARGET,
        ),
        Achievement(
            "master_gardener", "Master Gardener", f"Perform {CARE_ACTION_TARGET} care actions", "care",
            progress=0, max_progress=CARE_ACTION_TARGET,
        ),
        Achievement("growth_spurt", "Growth Spurt", "Grow a plant to 50%", "growth"),
        Achievement("fully_grown", "Fully Grown", "Grow a plant to 100%", "growth"),
        Achievement(
            "plant_collector", "Plant Collector",
            f"Have {PLANT_TYPE_TARGET} different plant types in your garden", "collection",
            progress=0, max_progress=PLANT_TYPE_TARGET,
        ),
        Achievement("happy_plants", "Happy Plants", "Keep a plant above 80% happiness for 3 days", "happiness"),
        Achievement("night_owl", "Night Owl", "Care for your plants late at night", "special"),
    ]


# ---------------------------------------------------------------------------
# Predicates (binary rules)
# ---------------------------------------------------------------------------

def _ever_watered(plants: list[Plant], now: float) -> bool:
    return any(p.count_actions(CareAction.WATERING) > 0 for p in plants)


def _half_grown(plants: list[Plant], now: float) -> bool:
    return any(p.growth_stage >= GROWTH_SPURT_STAGE for p in plants)


def _fully_grown(plants: list[Plant], now: float) -> bool:
    return any(p.growth_stage >= FULLY_GROWN_STAGE for p in plants)


def _happy_for_days(plants: list[Plant], now: float) -> bool:
    return any(p.happy_streak_ms >= HAPPY_STREAK_TARGET_MS for p in plants)


def is_night_owl_hour(hour: int) -> bool:
    return hour >= NIGHT_OWL_START_HOUR or hour <= NIGHT_OWL_END_HOUR


def _is_recent_night_care(record: CareRecord, now: float) -> bool:
    age = now - record.timestamp
    return 0 <= age < NIGHT_OWL_WINDOW_MS and is_night_owl_hour(local_hour(record.timestamp))


def _night_care(plants: list[Plant], now: float) -> bool:
    for plant in plants:
        # History is chronological, so only the tail can be inside the window
        for record in reversed(plant.care_history):
            if now - record.timestamp >= NIGHT_OWL_WINDOW_MS:
                break
            if _is_recent_night_care(record, now):
                return True
    return False


# ---------------------------------------------------------------------------
# Counters (progress rules)
# ---------------------------------------------------------------------------

def _talk_count(plants: list[Plant]) -> int:
    return sum(p.count_actions(CareAction.TALKING) for p in plants)


def _care_count(plants: list[Plant]) -> int:
    return sum(p.count_actions() for p in plants)


def _distinct_types(plants: list[Plant]) -> int:
    return len({p.plant_type for p in plants})


BINARY_RULES: dict[str, Callable[[list[Plant], float], bool]] = {
    "green_thumb": _ever_watered,
    "growth_spurt": _half_grown,
    "fully_grown": _fully_grown,
    "happy_plants": _happy_for_days,
    "night_owl": _night_care,
}

COUNTING_RULES: dict[str, Callable[[list[Plant]], int]] = {
    "plant_whisperer": _talk_count,
    "master_gardener": _care_count,
    "plant_collector": _distinct_types,
}


def evaluate(
    plants: list[Plant],
    achievements: list[Achievement],
    now: float,
) -> list[Achievement]:
    """Update achievements in place. Returns the ones unlocked by this call."""
    newly_unlocked: list[Achievement] = []
    for achievement in achievements:
        if achievement.unlocked:
            continue

        predicate = BINARY_RULES.get(achievement.id)
        if predicate is not None:
            if predicate(plants, now) and achievement.unlock(now):
                newly_unlocked.append(achievement)
            continue

        counter = COUNTING_RULES.get(achievement.id)
        if counter is not None:
            count = counter(plants)
            achievement.advance_progress(count)
            if count >= achievement.max_progress and achievement.unlock(now):
                newly_unlocked.append(achievement)

    return newly_unlocked
