"""Garden engine: the single owner of GameState and the tick cycle."""

from __future__ import annotations

import math
from typing import Callable, Optional

import numpy as np
from numpy.random import Generator

from plant_sim.core.clock import now_ms
from plant_sim.core.config import (
    MIN_TICK_ELAPSED_MS,
    MIN_TIME_SCALE,
    POT_COLORS,
    POT_TYPES,
)
from plant_sim.plants import care
from plant_sim.plants.growth import advance
from plant_sim.plants.plant import CareAction, Plant, create_plant
from plant_sim.plants.responses import ResponseContext, classify, plant_response
from plant_sim.plants.species import PlantType
from plant_sim.simulation.achievements import Achievement, evaluate
from plant_sim.simulation.metrics import MetricsCollector
from plant_sim.simulation.state import GameState
from plant_sim.viz.logger import SimLogger
from plant_sim.world.environment import DayNightController


class GardenEngine:
    """Orchestrates the plant simulation.

    Every mutation of the game state goes through this object. It is not
    thread-safe and is not meant to be: callers drive it from one loop, with
    `tick` invoked by a timer and care actions invoked in between.
    """

    def __init__(
        self,
        seed: int = 42,
        state: Optional[GameState] = None,
        clock: Callable[[], float] = now_ms,
    ) -> None:
        self.rng: Generator = np.random.default_rng(seed)
        self._clock = clock

        self.state = state if state is not None else GameState.fresh(self._clock())
        self.day_night = DayNightController()
        self.metrics = MetricsCollector()
        self.logger = SimLogger()

    def _now(self, now: Optional[float]) -> float:
        return self._clock() if now is None else now

    # ------------------------------------------------------------------
    # Tick scheduler
    # ------------------------------------------------------------------

    def tick(self, now: Optional[float] = None) -> list[Achievement]:
        """Advance the garden to `now`. Returns achievements unlocked by this tick.

        Ticks worth less than MIN_TICK_ELAPSED_MS of simulated time are
        skipped without touching `last_update`, so the skipped time is applied
        in full by the next tick that crosses the threshold.
        """
        now = self._now(now)
        state = self.state
        elapsed = (now - state.last_update) * state.time_scale
        if elapsed < MIN_TICK_ELAPSED_MS:
            return []

        # 1. Room: day/night and the sunlight it lets in
        transition = self.day_night.update(state.environment, state.plants, now)
        if transition:
            self.logger.log(
                SimLogger.ENVIRONMENT,
                f"{transition.capitalize()}: it is now {'day' if state.environment.is_daytime else 'night'}",
                timestamp=now,
            )

        # 2. Plants, advanced in place
        for plant in state.plants:
            plant.assign(advance(plant, elapsed, now))
            self.logger.log(
                SimLogger.GROWTH,
                f"{plant.name}: growth {plant.growth_stage:.3f}, health {plant.health:.1f}, "
                f"happiness {plant.happiness:.1f}",
                plant_ids=[plant.id],
                timestamp=now,
            )

        # 3. Achievements
        unlocked = self._evaluate_achievements(now)

        # 4. Commit, metrics & log
        state.last_update = now
        self.metrics.collect_tick(
            now, elapsed, state.plants, state.environment.is_daytime, state.unlocked_count,
        )
        self.logger.flush()
        return unlocked

    def _evaluate_achievements(self, now: float) -> list[Achievement]:
        unlocked = evaluate(self.state.plants, self.state.achievements, now)
        for achievement in unlocked:
            self.logger.log(
                SimLogger.ACHIEVEMENT,
                f"Achievement unlocked: {achievement.title}",
                timestamp=now,
                achievement_id=achievement.id,
            )
        return unlocked

    # ------------------------------------------------------------------
    # Care actions
    # ------------------------------------------------------------------

    def apply_care_action(
        self,
        plant_id: str,
        action: CareAction,
        amount: Optional[float] = None,
        now: Optional[float] = None,
    ) -> tuple[Optional[Plant], Optional[ResponseContext]]:
        """Perform a care action. Returns (None, None) when the plant does not exist."""
        now = self._now(now)
        action = CareAction(action)
        plant = self.state.find_plant(plant_id)
        if plant is None:
            self.logger.log(
                SimLogger.WARNING,
                f"Ignored {action.value}: no plant with id {plant_id}",
                timestamp=now,
            )
            self.logger.flush()
            return None, None

        # Responses react to how the plant was doing before it was cared for
        response_type = classify(plant, action)
        result = care.perform(plant, action, now, amount)
        _, message = plant_response(plant, action, self.rng, response_type)

        self.metrics.record_care(action)
        self.logger.log(
            SimLogger.CARE,
            f"{plant.name} received {action.value} ({result.previous_value:.0f} -> {result.new_value:.0f})"
            f"{' +bonus' if result.bonus_granted else ''}: {message}",
            plant_ids=[plant.id],
            timestamp=now,
        )
        unlocked = self._evaluate_achievements(now)
        self.logger.flush()

        context = ResponseContext(
            action=action,
            response_type=response_type,
            message=message,
            bonus_granted=result.bonus_granted,
            unlocked_achievements=unlocked,
        )
        return plant, context

    def water(self, plant_id: str, amount: Optional[float] = None, now: Optional[float] = None):
        return self.apply_care_action(plant_id, CareAction.WATERING, amount, now)

    def fertilize(self, plant_id: str, amount: Optional[float] = None, now: Optional[float] = None):
        return self.apply_care_action(plant_id, CareAction.FERTILIZING, amount, now)

    def adjust_sunlight(self, plant_id: str, delta: Optional[float] = None, now: Optional[float] = None):
        return self.apply_care_action(plant_id, CareAction.SUNLIGHT, delta, now)

    def prune(self, plant_id: str, now: Optional[float] = None):
        return self.apply_care_action(plant_id, CareAction.PRUNING, None, now)

    def talk(self, plant_id: str, now: Optional[float] = None):
        return self.apply_care_action(plant_id, CareAction.TALKING, None, now)

    # ------------------------------------------------------------------
    # Room controls
    # ------------------------------------------------------------------

    def toggle_curtains(self) -> bool:
        is_open = self.day_night.toggle_curtains(self.state.environment, self.state.plants)
        self.logger.log(
            SimLogger.ENVIRONMENT, f"Curtains {'opened' if is_open else 'closed'}",
            timestamp=self._clock(),
        )
        return is_open

    def toggle_grow_light(self) -> bool:
        is_on = self.day_night.toggle_grow_light(self.state.environment, self.state.plants)
        self.logger.log(
            SimLogger.ENVIRONMENT, f"Grow light switched {'on' if is_on else 'off'}",
            timestamp=self._clock(),
        )
        return is_on

    # ------------------------------------------------------------------
    # Plant management
    # ------------------------------------------------------------------

    def add_plant(self, name: str, plant_type: PlantType, now: Optional[float] = None) -> Plant:
        """Pot a new plant and make it the active one."""
        now = self._now(now)
        plant = create_plant(name, PlantType(plant_type), now, self.rng)
        self.state.plants.append(plant)
        self.state.active_plant_id = plant.id
        self.logger.log(
            SimLogger.LIFECYCLE,
            f"Potted {plant.name} the {plant.personality} {plant.plant_type.value}",
            plant_ids=[plant.id],
            timestamp=now,
        )
        self._evaluate_achievements(now)
        return plant

    def remove_plant(self, plant_id: str) -> bool:
        plant = self.state.find_plant(plant_id)
        if plant is None:
            return False
        self.state.plants = [p for p in self.state.plants if p.id != plant_id]
        if self.state.active_plant_id == plant_id:
            self.state.active_plant_id = None
        self.logger.log(
            SimLogger.LIFECYCLE, f"Removed {plant.name}", plant_ids=[plant_id], timestamp=self._clock(),
        )
        return True

    def rename_plant(self, plant_id: str, name: str) -> Optional[Plant]:
        plant = self.state.find_plant(plant_id)
        if plant is not None:
            plant.name = name
        return plant

    def update_pot(
        self,
        plant_id: str,
        pot_type: Optional[str] = None,
        pot_color: Optional[str] = None,
    ) -> Optional[Plant]:
        """Restyle a plant's pot. Unknown styles are ignored."""
        plant = self.state.find_plant(plant_id)
        if plant is None:
            return None
        if pot_type in POT_TYPES:
            plant.pot_type = pot_type
        if pot_color in POT_COLORS:
            plant.pot_color = pot_color
        return plant

    def get_plant(self, plant_id: str) -> Optional[Plant]:
        return self.state.find_plant(plant_id)

    def set_active_plant(self, plant_id: Optional[str]) -> bool:
        if plant_id is not None and self.state.find_plant(plant_id) is None:
            return False
        self.state.active_plant_id = plant_id
        return True

    @property
    def active_plant(self) -> Optional[Plant]:
        if self.state.active_plant_id is None:
            return None
        return self.state.find_plant(self.state.active_plant_id)

    # ------------------------------------------------------------------
    # Game-level controls & persistence
    # ------------------------------------------------------------------

    def set_time_scale(self, multiplier: float) -> float:
        """Set the simulation speed. Any positive finite multiplier is kept as given;
        anything else falls back to MIN_TIME_SCALE.
        """
        multiplier = float(multiplier)
        if not math.isfinite(multiplier) or multiplier <= 0:
            multiplier = MIN_TIME_SCALE
        self.state.time_scale = multiplier
        return self.state.time_scale

    def get_state(self) -> GameState:
        return self.state

    def load_state(self, state: GameState) -> None:
        """Adopt a restored snapshot. The next tick applies any offline time."""
        self.state = state
        self.logger.log(
            SimLogger.LIFECYCLE,
            f"Loaded garden with {len(state.plants)} plants",
            timestamp=state.last_update,
        )

    def reset_game(self, now: Optional[float] = None) -> GameState:
        now = self._now(now)
        self.state = GameState.fresh(now)
        self.logger.log(SimLogger.LIFECYCLE, "Garden reset", timestamp=now)
        return self.state
