"""The room the plants live in: day/night, curtains, and the grow light.

Sunlight reaches plants only through the four effects below (dawn, dusk,
curtain toggle, grow-light toggle) plus the sunlight care action.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from plant_sim.core.clock import CycleClock
from plant_sim.core.config import (
    CURTAIN_SUN_SHIFT,
    DAWN_SUN_SHIFT,
    DUSK_SUN_SHIFT,
    GROW_LIGHT_SUN_SHIFT,
)
from plant_sim.plants.plant import Plant


@dataclass
class Environment:
    """Shared room state, one per game."""

    is_daytime: bool = True
    is_curtains_open: bool = True
    is_grow_light_on: bool = False

    def to_dict(self) -> dict:
        return {
            "isDaytime": self.is_daytime,
            "isCurtainsOpen": self.is_curtains_open,
            "isGrowLightOn": self.is_grow_light_on,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Environment:
        return cls(
            is_daytime=bool(data.get("isDaytime", True)),
            is_curtains_open=bool(data.get("isCurtainsOpen", True)),
            is_grow_light_on=bool(data.get("isGrowLightOn", False)),
        )


def _shift_sunlight(plants: Iterable[Plant], delta: float) -> None:
    for plant in plants:
        plant.adjust("sun_exposure", delta)


class DayNightController:
    """Drives the day/night cycle and propagates light changes to plants."""

    def __init__(self, clock: Optional[CycleClock] = None) -> None:
        self.clock = clock or CycleClock()

    def transition_shift(self, env: Environment, to_daytime: bool) -> float:
        """Sunlight change applied to every plant on a day/night switch."""
        if to_daytime:
            return DAWN_SUN_SHIFT if env.is_curtains_open else 0.0
        return 0.0 if env.is_grow_light_on else -DUSK_SUN_SHIFT

    def update(self, env: Environment, plants: list[Plant], now: float) -> Optional[str]:
        """Recompute day/night for `now`. Returns "dawn"/"dusk" on a switch, else None."""
        daytime = self.clock.is_daytime(now)
        if daytime == env.is_daytime:
            return None

        env.is_daytime = daytime
        shift = self.transition_shift(env, daytime)
        if shift:
            _shift_sunlight(plants, shift)
        return "dawn" if daytime else "dusk"

    def toggle_curtains(self, env: Environment, plants: list[Plant]) -> bool:
        """Open/close the curtains. Only changes sunlight during the day."""
        env.is_curtains_open = not env.is_curtains_open
        if env.is_daytime:
            shift = CURTAIN_SUN_SHIFT if env.is_curtains_open else -CURTAIN_SUN_SHIFT
            _shift_sunlight(plants, shift)
        return env.is_curtains_open

    def toggle_grow_light(self, env: Environment, plants: list[Plant]) -> bool:
        """Switch the grow light. Only changes sunlight at night."""
        env.is_grow_light_on = not env.is_grow_light_on
        if not env.is_daytime:
            shift = GROW_LIGHT_SUN_SHIFT if env.is_grow_light_on else -GROW_LIGHT_SUN_SHIFT
            _shift_sunlight(plants, shift)
        return env.is_grow_light_on
