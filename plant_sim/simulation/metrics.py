"""Data collection, garden statistics, and export."""

from __future__ import annotations

import csv
import os
from collections import deque
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from plant_sim.core.clock import hours
from plant_sim.core.config import METRICS_HISTORY_SIZE
from plant_sim.plants.plant import CareAction, Plant


@dataclass
class TickSnapshot:
    """Garden state right after one effective tick."""

    timestamp: float = 0.0
    sim_hours: float = 0.0       # cumulative simulated hours
    elapsed_ms: float = 0.0      # simulated ms applied by this tick
    plant_count: int = 0
    is_daytime: bool = True
    avg_growth: float = 0.0
    avg_health: float = 0.0
    avg_happiness: float = 0.0
    min_happiness: float = 0.0
    avg_water: float = 0.0
    avg_fertilizer: float = 0.0
    avg_sun: float = 0.0
    care_counts: dict[str, int] = field(default_factory=dict)
    unlocked_achievements: int = 0


class MetricsCollector:
    """Collects a time series of garden snapshots, one per effective tick.

    Only the newest `history_size` snapshots are retained, so exports and
    summaries cover a rolling window of the run.
    """

    def __init__(self, history_size: int = METRICS_HISTORY_SIZE) -> None:
        self.snapshots: deque[TickSnapshot] = deque(maxlen=history_size)
        self._sim_hours: float = 0.0
        self._pending_care: dict[str, int] = {}

    def record_care(self, action: CareAction) -> None:
        key = CareAction(action).value
        self._pending_care[key] = self._pending_care.get(key, 0) + 1

    def collect_tick(
        self,
        timestamp: float,
        elapsed_ms: float,
        plants: list[Plant],
        is_daytime: bool,
        unlocked_achievements: int,
    ) -> TickSnapshot:
        """Collect all metrics for this tick."""
        self._sim_hours += hours(elapsed_ms)

        if plants:
            vitals = np.array(
                [
                    [p.growth_stage, p.health, p.happiness, p.water_level, p.fertilizer_level, p.sun_exposure]
                    for p in plants
                ],
                dtype=float,
            )
            means = vitals.mean(axis=0)
            min_happiness = float(vitals[:, 2].min())
        else:
            means = np.zeros(6)
            min_happiness = 0.0

        snapshot = TickSnapshot(
            timestamp=timestamp,
            sim_hours=self._sim_hours,
            elapsed_ms=elapsed_ms,
            plant_count=len(plants),
            is_daytime=is_daytime,
            avg_growth=float(means[0]),
            avg_health=float(means[1]),
            avg_happiness=float(means[2]),
            min_happiness=min_happiness,
            avg_water=float(means[3]),
            avg_fertilizer=float(means[4]),
            avg_sun=float(means[5]),
            care_counts=dict(self._pending_care),
            unlocked_achievements=unlocked_achievements,
        )
        self.snapshots.append(snapshot)

        # Reset per-tick counters
        self._pending_care.clear()

        return snapshot

    def export_csv(self, filepath: str) -> None:
        """Export all snapshots to CSV."""
        os.makedirs(os.path.dirname(filepath) if os.path.dirname(filepath) else ".", exist_ok=True)
        actions = [a.value for a in CareAction]
        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow([
                "timestamp", "sim_hours", "elapsed_ms", "plants", "daytime",
                "avg_growth", "avg_health", "avg_happiness", "min_happiness",
                "avg_water", "avg_fertilizer", "avg_sun", "achievements",
                *actions,
            ])
            for s in self.snapshots:
                writer.writerow([
                    f"{s.timestamp:.0f}", f"{s.sim_hours:.3f}", f"{s.elapsed_ms:.0f}",
                    s.plant_count, int(s.is_daytime),
                    f"{s.avg_growth:.4f}", f"{s.avg_health:.2f}",
                    f"{s.avg_happiness:.2f}", f"{s.min_happiness:.2f}",
                    f"{s.avg_water:.2f}", f"{s.avg_fertilizer:.2f}",
                    f"{s.avg_sun:.2f}", s.unlocked_achievements,
                    *[s.care_counts.get(a, 0) for a in actions],
                ])

    def summary_report(self, start_hour: float = 0.0, end_hour: Optional[float] = None) -> str:
        """Generate a human-readable summary of the simulated period."""
        relevant = [
            s for s in self.snapshots
            if s.sim_hours >= start_hour and (end_hour is None or s.sim_hours <= end_hour)
        ]
        if not relevant:
            return "No data available for the specified period."

        first = relevant[0]
        last = relevant[-1]
        care_totals: dict[str, int] = {}
        for s in relevant:
            for action, count in s.care_counts.items():
                care_totals[action] = care_totals.get(action, 0) + count
        day_fraction = sum(1 for s in relevant if s.is_daytime) / len(relevant)

        lines = [
            f"=== Garden Summary: hour {first.sim_hours:.1f} to hour {last.sim_hours:.1f} ===",
            f"Ticks: {len(relevant)} ({day_fraction:.0%} in daylight)",
            f"Plants: {first.plant_count} -> {last.plant_count}",
            f"",
            f"Final Vitals (average):",
            f"  Growth: {last.avg_growth:.1%}",
            f"  Health: {last.avg_health:.1f}/100",
            f"  Happiness: {last.avg_happiness:.1f}/100 (lowest {last.min_happiness:.1f})",
            f"",
            f"Final Resources (average):",
            f"  Water: {last.avg_water:.1f}/100",
            f"  Fertilizer: {last.avg_fertilizer:.1f}/100",
            f"  Sunlight: {last.avg_sun:.1f}/100",
            f"",
            f"Achievements unlocked: {last.unlocked_achievements}",
        ]

        if care_totals:
            lines.append(f"")
            lines.append(f"Care Actions:")
            total = sum(care_totals.values())
            for action, count in sorted(care_totals.items(), key=lambda x: -x[1]):
                pct = count / max(1, total) * 100
                lines.append(f"  {action}: {count} ({pct:.0f}%)")

        return "\n".join(lines)
