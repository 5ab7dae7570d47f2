"""Static matplotlib reports of a garden run."""

from __future__ import annotations

import os

import matplotlib
matplotlib.use("Agg")  # reports are written to disk, no window needed
import matplotlib.pyplot as plt
import numpy as np

from plant_sim.core.config import DASHBOARD_DPI


class Dashboard:
    """Post-hoc plots of the metrics time series."""

    @staticmethod
    def shade_nights(ax, snapshots) -> None:
        """Grey out the stretches of the run that happened at night."""
        hours = np.array([s.sim_hours for s in snapshots])
        night = np.array([not s.is_daytime for s in snapshots])
        if night.any():
            ax.fill_between(
                hours, 0, 1, where=night, color="#1f2a44", alpha=0.12,
                transform=ax.get_xaxis_transform(), step="post", zorder=0,
            )

    @staticmethod
    def comprehensive_report(metrics: "MetricsCollector", output_dir: str) -> list[str]:  # noqa: F821
        """Generate all plots and save to output directory. Returns the file paths."""
        os.makedirs(output_dir, exist_ok=True)

        snapshots = metrics.snapshots
        if not snapshots:
            return []

        sim_hours = [s.sim_hours for s in snapshots]
        written: list[str] = []

        # Vitals
        fig, ax = plt.subplots(figsize=(10, 5))
        ax.plot(sim_hours, [s.avg_health for s in snapshots], "b-", linewidth=1.5, label="Health")
        ax.plot(sim_hours, [s.avg_happiness for s in snapshots], "m-", linewidth=1.5, label="Happiness")
        ax.plot(sim_hours, [s.min_happiness for s in snapshots], "m:", linewidth=1, label="Lowest happiness")
        ax.set_title("Average Vitals Over Time")
        ax.set_xlabel("Simulated hours")
        ax.set_ylabel("Percent")
        ax.set_ylim(0, 100)
        ax.legend(fontsize=8)
        Dashboard.shade_nights(ax, snapshots)
        ax.grid(True, alpha=0.3)
        path = os.path.join(output_dir, "vitals.png")
        fig.savefig(path, dpi=DASHBOARD_DPI)
        plt.close(fig)
        written.append(path)

        # Resources
        fig, ax = plt.subplots(figsize=(10, 5))
        ax.plot(sim_hours, [s.avg_water for s in snapshots], color="tab:blue", label="Water")
        ax.plot(sim_hours, [s.avg_fertilizer for s in snapshots], color="tab:brown", label="Fertilizer")
        ax.plot(sim_hours, [s.avg_sun for s in snapshots], color="orange", label="Sunlight")
        ax.set_title("Average Resource Levels Over Time")
        ax.set_xlabel("Simulated hours")
        ax.set_ylabel("Level (0-100)")
        ax.set_ylim(0, 100)
        ax.legend(fontsize=8)
        Dashboard.shade_nights(ax, snapshots)
        ax.grid(True, alpha=0.3)
        path = os.path.join(output_dir, "resources.png")
        fig.savefig(path, dpi=DASHBOARD_DPI)
        plt.close(fig)
        written.append(path)

        # Growth
        fig, ax = plt.subplots(figsize=(10, 5))
        ax.plot(sim_hours, [s.avg_growth * 100 for s in snapshots], "g-", linewidth=2)
        ax.axhline(y=50, color="grey", linestyle="--", alpha=0.5)
        ax.set_title("Average Growth Over Time")
        ax.set_xlabel("Simulated hours")
        ax.set_ylabel("Growth (%)")
        ax.set_ylim(0, 100)
        ax.grid(True, alpha=0.3)
        path = os.path.join(output_dir, "growth.png")
        fig.savefig(path, dpi=DASHBOARD_DPI)
        plt.close(fig)
        written.append(path)

        print(f"Reports saved to {output_dir}/")
        return written
