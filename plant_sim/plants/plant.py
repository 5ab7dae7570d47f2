"""The Plant entity: vitals, resource levels, and its care history."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Optional

from numpy.random import Generator

from plant_sim.core.config import (
    DEFAULT_POT_COLOR,
    DEFAULT_POT_TYPE,
    GROWTH_MAX,
    GROWTH_MIN,
    INITIAL_FERTILIZER_LEVEL,
    INITIAL_GROWTH_STAGE,
    INITIAL_HAPPINESS,
    INITIAL_HEALTH,
    INITIAL_SUN_EXPOSURE,
    INITIAL_WATER_LEVEL,
    LEVEL_MAX,
    LEVEL_MIN,
    PERSONALITIES,
)
from plant_sim.plants.species import PlantType


class CareAction(str, Enum):
    WATERING = "watering"
    FERTILIZING = "fertilizing"
    SUNLIGHT = "sunlight"
    PRUNING = "pruning"
    TALKING = "talking"


@dataclass(frozen=True)
class CareRecord:
    """One entry in a plant's care history. Never modified once appended."""

    action: CareAction
    timestamp: float
    value: float


# Every bounded field and its inclusive range
BOUNDED_FIELDS: dict[str, tuple[float, float]] = {
    "health": (LEVEL_MIN, LEVEL_MAX),
    "happiness": (LEVEL_MIN, LEVEL_MAX),
    "water_level": (LEVEL_MIN, LEVEL_MAX),
    "fertilizer_level": (LEVEL_MIN, LEVEL_MAX),
    "sun_exposure": (LEVEL_MIN, LEVEL_MAX),
}


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass
class Plant:
    """A single potted plant owned by the player."""

    id: str
    name: str
    plant_type: PlantType
    growth_stage: float = INITIAL_GROWTH_STAGE
    health: float = INITIAL_HEALTH
    happiness: float = INITIAL_HAPPINESS
    water_level: float = INITIAL_WATER_LEVEL
    fertilizer_level: float = INITIAL_FERTILIZER_LEVEL
    sun_exposure: float = INITIAL_SUN_EXPOSURE
    personality: str = "cheerful"
    pot_type: str = DEFAULT_POT_TYPE
    pot_color: str = DEFAULT_POT_COLOR
    care_history: list[CareRecord] = field(default_factory=list)
    created_at: float = 0.0
    last_interaction: float = 0.0
    happy_streak_ms: float = 0.0

    # ------------------------------------------------------------------
    # Bounded updates
    # ------------------------------------------------------------------

    def set_bounded(self, name: str, value: float) -> float:
        """Set a bounded field, clamped to its range. Returns the stored value."""
        low, high = BOUNDED_FIELDS[name]
        stored = clamp(float(value), low, high)
        setattr(self, name, stored)
        return stored

    def adjust(self, name: str, delta: float) -> float:
        """Shift a bounded field by delta, clamped to its range."""
        return self.set_bounded(name, getattr(self, name) + delta)

    def grow(self, amount: float) -> None:
        """Advance growth. Negative amounts are ignored; growth saturates at 1."""
        if amount <= 0:
            return
        self.growth_stage = clamp(self.growth_stage + amount, GROWTH_MIN, GROWTH_MAX)

    def record_care(self, action: CareAction, now: float, value: float) -> CareRecord:
        record = CareRecord(action=CareAction(action), timestamp=now, value=float(value))
        self.care_history.append(record)
        self.last_interaction = now
        return record

    def copy(self) -> Plant:
        """Shallow copy with its own history list (records are immutable)."""
        return replace(self, care_history=list(self.care_history))

    def assign(self, other: Plant) -> None:
        """Overwrite every field with other's, keeping this object's identity."""
        for f in fields(self):
            setattr(self, f.name, getattr(other, f.name))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def count_actions(self, action: Optional[CareAction] = None) -> int:
        if action is None:
            return len(self.care_history)
        return sum(1 for r in self.care_history if r.action == action)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.plant_type.value,
            "growthStage": self.growth_stage,
            "health": self.health,
            "happiness": self.happiness,
            "waterLevel": self.water_level,
            "fertilizerLevel": self.fertilizer_level,
            "sunExposure": self.sun_exposure,
            "personality": self.personality,
            "potType": self.pot_type,
            "potColor": self.pot_color,
            "careHistory": [
                {"action": r.action.value, "timestamp": r.timestamp, "value": r.value}
                for r in self.care_history
            ],
            "createdAt": self.created_at,
            "lastInteraction": self.last_interaction,
            "happyStreakMs": self.happy_streak_ms,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Plant:
        return cls(
            id=data["id"],
            name=data["name"],
            plant_type=PlantType(data["type"]),
            growth_stage=float(data["growthStage"]),
            health=float(data["health"]),
            happiness=float(data["happiness"]),
            water_level=float(data["waterLevel"]),
            fertilizer_level=float(data["fertilizerLevel"]),
            sun_exposure=float(data["sunExposure"]),
            personality=data.get("personality", "cheerful"),
            pot_type=data.get("potType", DEFAULT_POT_TYPE),
            pot_color=data.get("potColor", DEFAULT_POT_COLOR),
            care_history=[
                CareRecord(CareAction(r["action"]), float(r["timestamp"]), float(r["value"]))
                for r in data.get("careHistory", [])
            ],
            created_at=float(data["createdAt"]),
            last_interaction=float(data["lastInteraction"]),
            happy_streak_ms=float(data.get("happyStreakMs", 0.0)),
        )


def create_plant(
    name: str,
    plant_type: PlantType,
    now: float,
    rng: Optional[Generator] = None,
) -> Plant:
    """Create a fresh plant with default vitals and a random personality."""
    personality = PERSONALITIES[int(rng.integers(len(PERSONALITIES)))] if rng is not None else "cheerful"
    return Plant(
        id=uuid.uuid4().hex,
        name=name,
        plant_type=PlantType(plant_type),
        personality=personality,
        created_at=now,
        last_interaction=now,
    )
