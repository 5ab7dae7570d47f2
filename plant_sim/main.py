"""Entry point: run a headless garden simulation on a synthetic clock."""

from __future__ import annotations

import argparse
import os
import time

from plant_sim.core.config import MS_PER_HOUR, MS_PER_SECOND, RECOMMENDED_TICK_INTERVAL_MS

_PLANT_NAMES = ["Fernanda", "Spike", "Rosie", "Sukki", "Leafy", "Prickles", "Bloom", "Moss"]


def _autocare(engine, now: float) -> None:
    """A scripted caretaker that nudges every plant back toward its optimum."""
    from plant_sim.plants.plant import CareAction
    from plant_sim.plants.species import profile_for

    for plant in list(engine.state.plants):
        profile = profile_for(plant.plant_type)
        if plant.water_level < profile.optimal_water - 10:
            engine.apply_care_action(plant.id, CareAction.WATERING, profile.optimal_water - plant.water_level, now)
        if plant.fertilizer_level < profile.optimal_fertilizer - 10:
            engine.apply_care_action(
                plant.id, CareAction.FERTILIZING, profile.optimal_fertilizer - plant.fertilizer_level, now,
            )
        low, high = profile.sun_range
        if not low <= plant.sun_exposure <= high:
            engine.apply_care_action(plant.id, CareAction.SUNLIGHT, profile.optimal_sun - plant.sun_exposure, now)
        if plant.happiness < 50:
            engine.apply_care_action(plant.id, CareAction.TALKING, None, now)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Plant Care Simulation",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--hours", type=float, default=48.0, help="Simulated hours to run")
    parser.add_argument("--time-scale", type=float, default=3600.0, help="Simulated ms per wall-clock ms")
    parser.add_argument("--tick-seconds", type=float, default=RECOMMENDED_TICK_INTERVAL_MS / MS_PER_SECOND, help="Wall-clock seconds between ticks")
    parser.add_argument("--plants", type=int, default=3, help="Plants to pot in a new garden")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility")
    parser.add_argument("--autocare", action="store_true", help="Let a scripted caretaker look after the plants")
    parser.add_argument("--state-file", type=str, default=None, help="Load/save the garden from this JSON file")
    parser.add_argument("--verbosity", type=int, default=0, choices=[0, 1, 2, 3], help="Log verbosity level")
    parser.add_argument("--output-dir", type=str, default="results", help="Output directory for results")
    parser.add_argument("--no-plots", action="store_true", help="Skip writing PNG reports")

    args = parser.parse_args()

    # Import here to allow --help without loading everything
    from plant_sim.core.clock import now_ms
    from plant_sim.plants.responses import growth_stage_label, mood_response
    from plant_sim.plants.species import PlantType
    from plant_sim.simulation.engine import GardenEngine
    from plant_sim.simulation.state import load_state, save_state
    from plant_sim.viz.logger import SimLogger

    # Synthetic wall clock, advanced by hand between ticks
    clock = {"now": now_ms()}
    engine = GardenEngine(seed=args.seed, clock=lambda: clock["now"])
    engine.logger = SimLogger(
        verbosity=args.verbosity,
        log_file=os.path.join(args.output_dir, "simulation.log"),
        stdout=(args.verbosity > 0),
    )

    if args.state_file and os.path.exists(args.state_file):
        engine.load_state(load_state(args.state_file))
        # Resume on the saved timeline; offline time is not replayed here
        clock["now"] = engine.state.last_update
        print(f"Loaded garden from {args.state_file}")
    else:
        types = list(PlantType)
        for i in range(args.plants):
            engine.add_plant(_PLANT_NAMES[i % len(_PLANT_NAMES)], types[i % len(types)])
    engine.set_time_scale(args.time_scale)

    state = engine.state
    print(f"=== Plant Care Simulation ===")
    print(f"Plants: {len(state.plants)} | Hours: {args.hours} | Time scale: {state.time_scale:g}x | Seed: {args.seed}")
    print(f"Next day/night switch in {engine.day_night.clock.ms_until_transition(clock['now']) / MS_PER_SECOND:.0f}s")
    print()

    tick_ms = args.tick_seconds * MS_PER_SECOND
    total_ticks = max(1, int(args.hours * MS_PER_HOUR / state.time_scale / tick_ms))

    t0 = time.time()
    try:
        for _ in range(total_ticks):
            clock["now"] += tick_ms
            if args.autocare:
                _autocare(engine, clock["now"])
            for achievement in engine.tick(clock["now"]):
                print(f"  Achievement unlocked: {achievement.title}")
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")

    elapsed = time.time() - t0
    print(f"\nSimulation complete: {total_ticks} ticks in {elapsed:.2f}s")

    # Export results
    os.makedirs(args.output_dir, exist_ok=True)
    csv_path = os.path.join(args.output_dir, "metrics.csv")
    engine.metrics.export_csv(csv_path)
    print(f"Metrics exported to {csv_path}")

    if not args.no_plots:
        try:
            from plant_sim.viz.dashboard import Dashboard
            Dashboard.comprehensive_report(engine.metrics, args.output_dir)
        except Exception as e:
            print(f"Could not generate plots: {e}")

    print()
    print(engine.metrics.summary_report())
    print()
    for plant in engine.state.plants:
        print(f"{plant.name} ({plant.plant_type.value}, {growth_stage_label(plant.growth_stage)}): {mood_response(plant)}")

    if args.state_file:
        save_state(engine.state, args.state_file)
        print(f"\nGarden saved to {args.state_file}")

    engine.logger.export_json(os.path.join(args.output_dir, "events.json"))
    engine.logger.close()

    print(f"\nAll results saved to {args.output_dir}/")


if __name__ == "__main__":
    main()
