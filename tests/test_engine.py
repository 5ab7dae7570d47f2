import pytest

from plant_sim.core.config import METRICS_HISTORY_SIZE, MIN_TIME_SCALE, MS_PER_HOUR
from plant_sim.plants.growth import advance
from plant_sim.plants.plant import CareAction
from plant_sim.plants.responses import ResponseType
from plant_sim.plants.species import PlantType
from plant_sim.simulation.engine import GardenEngine
from plant_sim.simulation.metrics import MetricsCollector
from plant_sim.simulation.state import GameState
from plant_sim.viz.logger import SimLogger

from conftest import T0


def test_fresh_engine_state(engine):
    state = engine.get_state()
    assert state.plants == []
    assert state.active_plant_id is None
    assert state.time_scale == 1.0
    assert state.last_update == T0
    assert state.environment.is_daytime
    assert state.unlocked_count == 0


def test_add_plant_makes_it_active(engine):
    plant = engine.add_plant("Fernanda", PlantType.FERN)
    assert engine.active_plant is plant
    assert plant.created_at == T0
    assert plant.personality in ("sassy", "shy", "cheerful")
    assert engine.state.get_achievement("plant_collector").progress == 1


def test_sub_second_ticks_are_coalesced(engine):
    plant = engine.add_plant("Sukki", PlantType.SUCCULENT)
    before = plant.copy()
    snapshot = engine.get_state().to_dict()

    assert engine.tick(T0 + 400) == []
    assert engine.tick(T0 + 800) == []
    assert engine.get_state().to_dict() == snapshot
    assert len(engine.metrics.snapshots) == 0

    engine.tick(T0 + 1200)
    assert engine.state.last_update == T0 + 1200
    assert len(engine.metrics.snapshots) == 1
    assert engine.metrics.snapshots[0].elapsed_ms == 1200
    assert engine.state.plants[0] == advance(before, 1200, T0 + 1200)


def test_time_scale_multiplies_elapsed(engine):
    engine.add_plant("Sukki", PlantType.SUCCULENT)
    engine.set_time_scale(3600)
    engine.tick(T0 + 1000)
    # one wall-clock second is one simulated hour
    assert engine.metrics.snapshots[0].elapsed_ms == MS_PER_HOUR
    assert engine.state.plants[0].water_level == pytest.approx(48)


@pytest.mark.parametrize(
    "requested, stored",
    [(0, MIN_TIME_SCALE), (-5, MIN_TIME_SCALE), (float("nan"), MIN_TIME_SCALE), (float("inf"), MIN_TIME_SCALE),
     (0.05, 0.05), (2.5, 2.5), (1e6, 1e6)],
)
def test_time_scale_keeps_positive_values(engine, requested, stored):
    assert engine.set_time_scale(requested) == stored
    assert engine.state.time_scale == stored


def test_dusk_during_tick(engine):
    plant = engine.add_plant("Sukki", PlantType.SUCCULENT)
    engine.tick(T0 + 480_000)
    assert not engine.state.environment.is_daytime
    assert engine.state.plants[0].sun_exposure == 30
    assert plant.sun_exposure == 30


def test_growth_never_decreases_across_ticks(engine):
    engine.add_plant("Sukki", PlantType.SUCCULENT)
    engine.set_time_scale(600)
    last = engine.state.plants[0].growth_stage
    for i in range(1, 200):
        engine.tick(T0 + i * 5_000)
        current = engine.state.plants[0].growth_stage
        assert current >= last
        last = current


def test_care_action_returns_plant_and_response(engine):
    plant = engine.add_plant("Sukki", PlantType.SUCCULENT)
    plant.water_level = 10

    updated, context = engine.apply_care_action(plant.id, CareAction.WATERING, 25)
    assert updated is plant
    assert plant.water_level == 35
    assert context.action == CareAction.WATERING
    # judged on the state before watering
    assert context.response_type == ResponseType.TOO_LITTLE
    assert context.bonus_granted
    assert context.message
    assert [a.id for a in context.unlocked_achievements] == ["green_thumb"]


def test_unknown_plant_is_a_no_op(engine):
    engine.add_plant("Sukki", PlantType.SUCCULENT)
    snapshot = engine.get_state().to_dict()

    assert engine.apply_care_action("missing", CareAction.TALKING) == (None, None)
    assert engine.get_state().to_dict() == snapshot
    assert engine.logger.entries[-1].category == "WARNING"


def test_talking_achievement_scenario(engine):
    first = engine.add_plant("Sukki", PlantType.SUCCULENT)
    second = engine.add_plant("Spike", PlantType.CACTUS)
    whisperer = engine.state.get_achievement("plant_whisperer")

    engine.talk(first.id)
    assert (whisperer.progress, whisperer.max_progress, whisperer.unlocked) == (1, 5, False)

    for plant_id in (second.id, first.id, second.id):
        engine.talk(plant_id)
    assert not whisperer.unlocked
    _, context = engine.talk(first.id)
    assert whisperer.unlocked
    assert whisperer in context.unlocked_achievements


def test_convenience_actions(engine):
    plant = engine.add_plant("Fernanda", PlantType.FERN)
    engine.water(plant.id, 10)
    engine.fertilize(plant.id, 10)
    engine.adjust_sunlight(plant.id, -10)
    engine.prune(plant.id)
    engine.talk(plant.id)
    assert [r.action for r in plant.care_history] == list(CareAction)
    assert sum(engine.metrics._pending_care.values()) == 5


def test_toggles_route_through_environment(engine):
    plant = engine.add_plant("Sukki", PlantType.SUCCULENT)
    assert engine.toggle_curtains() is False
    assert plant.sun_exposure == 30
    assert engine.toggle_grow_light() is True
    # daytime: grow light does not change sunlight
    assert plant.sun_exposure == 30


def test_plant_management(engine):
    plant = engine.add_plant("Sukki", PlantType.SUCCULENT)
    other = engine.add_plant("Spike", PlantType.CACTUS)

    assert engine.rename_plant(plant.id, "Suzy").name == "Suzy"
    assert engine.rename_plant("missing", "x") is None

    assert engine.update_pot(plant.id, pot_type="hexagonal", pot_color="blue") is plant
    assert (plant.pot_type, plant.pot_color) == ("hexagonal", "blue")
    engine.update_pot(plant.id, pot_type="teacup", pot_color="plaid")
    assert (plant.pot_type, plant.pot_color) == ("hexagonal", "blue")

    assert engine.set_active_plant(plant.id)
    assert not engine.set_active_plant("missing")
    assert engine.active_plant is plant

    assert engine.remove_plant(plant.id)
    assert not engine.remove_plant(plant.id)
    assert engine.state.active_plant_id is None
    assert engine.state.plants == [other]
    assert engine.get_plant(plant.id) is None


def test_reset_game(engine):
    plant = engine.add_plant("Sukki", PlantType.SUCCULENT)
    engine.water(plant.id, 10)
    engine.toggle_curtains()
    engine.set_time_scale(50)

    state = engine.reset_game(T0 + 5000)
    assert state is engine.get_state()
    assert state.plants == []
    assert state.time_scale == 1.0
    assert state.last_update == T0 + 5000
    assert state.environment.is_curtains_open
    assert state.unlocked_count == 0
    assert all(a.progress in (None, 0) for a in state.achievements)


def test_loaded_state_applies_offline_time(engine):
    engine.add_plant("Sukki", PlantType.SUCCULENT)
    saved = GameState.from_dict(engine.get_state().to_dict())

    restored = GardenEngine(seed=1, clock=lambda: T0 + 2 * MS_PER_HOUR)
    restored.load_state(saved)
    restored.tick()
    assert restored.metrics.snapshots[0].elapsed_ms == 2 * MS_PER_HOUR
    assert restored.state.plants[0].water_level == pytest.approx(46)


def test_plant_handles_stay_live_across_ticks(engine):
    plant = engine.add_plant("Sukki", PlantType.SUCCULENT)
    engine.set_time_scale(3600)
    engine.tick(T0 + 2000)
    assert engine.state.plants[0] is plant
    assert plant.water_level == pytest.approx(46)
    assert engine.get_plant(plant.id) is plant


def test_history_stays_bounded_over_many_ticks(engine):
    assert engine.metrics.snapshots.maxlen == METRICS_HISTORY_SIZE
    for i in range(10):
        engine.add_plant(f"Plant {i}", PlantType.FERN)
    engine.metrics = MetricsCollector(history_size=20)
    engine.logger = SimLogger(verbosity=0, stdout=False, history_size=30)

    for i in range(1, 301):
        engine.tick(T0 + i * 1000)

    assert len(engine.metrics.snapshots) == 20
    assert engine.metrics.snapshots[-1].timestamp == T0 + 300_000
    assert len(engine.logger.entries) == 30
    assert engine.logger.entries[-1].timestamp == T0 + 300_000
