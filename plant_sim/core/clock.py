"""Time system for the simulation: wall-clock milliseconds and the day/night phase."""

from __future__ import annotations

import time
from datetime import datetime

from plant_sim.core.config import CYCLE_DURATION_MS, DAYTIME_FRACTION, MS_PER_HOUR


def now_ms() -> float:
    """Current wall-clock time in epoch milliseconds."""
    return time.time() * 1000.0


def hours(elapsed_ms: float) -> float:
    return elapsed_ms / MS_PER_HOUR


def local_hour(timestamp_ms: float) -> int:
    """Local-time hour of day (0-23) for an epoch-millisecond timestamp."""
    return datetime.fromtimestamp(timestamp_ms / 1000.0).hour


class CycleClock:
    """Maps wall-clock time onto a repeating day/night cycle."""

    def __init__(
        self,
        cycle_duration_ms: int = CYCLE_DURATION_MS,
        daytime_fraction: float = DAYTIME_FRACTION,
    ) -> None:
        self.cycle_duration_ms = cycle_duration_ms
        self.daytime_fraction = daytime_fraction

    def phase(self, now: float) -> float:
        """Position within the current cycle, in [0, 1)."""
        return (now % self.cycle_duration_ms) / self.cycle_duration_ms

    def is_daytime(self, now: float) -> bool:
        return self.phase(now) < self.daytime_fraction

    def ms_until_transition(self, now: float) -> float:
        """Milliseconds until the next day->night or night->day switch."""
        phase = self.phase(now)
        if phase < self.daytime_fraction:
            remaining = self.daytime_fraction - phase
        else:
            remaining = 1.0 - phase
        return remaining * self.cycle_duration_ms
