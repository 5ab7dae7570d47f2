"""GameState: the aggregate root, plus the JSON snapshot round trip."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Optional

from plant_sim.core.config import DEFAULT_TIME_SCALE
from plant_sim.plants.plant import Plant
from plant_sim.simulation.achievements import Achievement, initial_achievements
from plant_sim.world.environment import Environment


@dataclass
class GameState:
    """Everything that persists between sessions."""

    plants: list[Plant] = field(default_factory=list)
    environment: Environment = field(default_factory=Environment)
    achievements: list[Achievement] = field(default_factory=initial_achievements)
    active_plant_id: Optional[str] = None
    time_scale: float = DEFAULT_TIME_SCALE
    last_update: float = 0.0

    @classmethod
    def fresh(cls, now: float) -> GameState:
        return cls(last_update=now)

    def find_plant(self, plant_id: str) -> Optional[Plant]:
        for plant in self.plants:
            if plant.id == plant_id:
                return plant
        return None

    def get_achievement(self, achievement_id: str) -> Optional[Achievement]:
        for achievement in self.achievements:
            if achievement.id == achievement_id:
                return achievement
        return None

    @property
    def unlocked_count(self) -> int:
        return sum(1 for a in self.achievements if a.unlocked)

    def to_dict(self) -> dict:
        return {
            "plants": [p.to_dict() for p in self.plants],
            "environment": self.environment.to_dict(),
            "achievements": [a.to_dict() for a in self.achievements],
            "activePlantId": self.active_plant_id,
            "timeScale": self.time_scale,
            "lastUpdate": self.last_update,
        }

    @classmethod
    def from_dict(cls, data: dict) -> GameState:
        achievements = [Achievement.from_dict(a) for a in data.get("achievements", [])]
        # Snapshots from older versions may lack newer achievements
        known = {a.id for a in achievements}
        achievements.extend(a for a in initial_achievements() if a.id not in known)
        return cls(
            plants=[Plant.from_dict(p) for p in data.get("plants", [])],
            environment=Environment.from_dict(data.get("environment", {})),
            achievements=achievements,
            active_plant_id=data.get("activePlantId"),
            time_scale=float(data.get("timeScale", DEFAULT_TIME_SCALE)),
            last_update=float(data["lastUpdate"]),
        )


def save_state(state: GameState, filepath: str) -> None:
    """Write a snapshot to JSON."""
    os.makedirs(os.path.dirname(filepath) if os.path.dirname(filepath) else ".", exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(state.to_dict(), f, indent=2)


def load_state(filepath: str) -> GameState:
    """Read a snapshot written by save_state."""
    with open(filepath, "r", encoding="utf-8") as f:
        return GameState.from_dict(json.load(f))
