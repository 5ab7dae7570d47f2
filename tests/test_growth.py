import pytest

from plant_sim.core.config import MS_PER_HOUR, MS_PER_DAY
from plant_sim.plants.growth import advance, interaction_decay, mean_factor

from conftest import T0


def test_optimal_plant_grows_and_heals(make_plant):
    plant = make_plant(water_level=30, fertilizer_level=30, sun_exposure=70, health=50, happiness=50)
    updated = advance(plant, MS_PER_HOUR, T0)

    assert updated.growth_stage == pytest.approx(0.11)
    assert updated.water_level == pytest.approx(28)
    assert updated.fertilizer_level == pytest.approx(29)
    assert updated.sun_exposure == 70
    assert updated.health == pytest.approx(55)
    # health term is zero at health 50 and there is no interaction gap
    assert updated.happiness == pytest.approx(50)


def test_advance_does_not_mutate_input(make_plant):
    plant = make_plant()
    before = plant.to_dict()
    advance(plant, 5 * MS_PER_HOUR, T0)
    assert plant.to_dict() == before


def test_default_succulent_factors(make_plant):
    plant = make_plant()
    assert mean_factor(plant) == pytest.approx(0.8)
    updated = advance(plant, MS_PER_HOUR, T0)
    assert updated.growth_stage == pytest.approx(0.108)
    assert updated.health == 100


def test_poor_care_lowers_health(make_plant):
    plant = make_plant(water_level=100, fertilizer_level=100, sun_exposure=0, health=80)
    # factors 0.3, 0.3, 0.3 -> (0.3 - 0.5) * 10 = -2 per hour
    updated = advance(plant, 2 * MS_PER_HOUR, T0)
    assert updated.health == pytest.approx(76)


def test_resources_never_go_negative(make_plant):
    plant = make_plant(water_level=1, fertilizer_level=1)
    updated = advance(plant, 10 * MS_PER_HOUR, T0)
    assert updated.water_level == 0
    assert updated.fertilizer_level == 0


def test_growth_saturates_at_one(make_plant):
    plant = make_plant(growth_stage=0.999, water_level=30, fertilizer_level=30, sun_exposure=70)
    updated = advance(plant, 100 * MS_PER_HOUR, T0)
    assert updated.growth_stage == 1.0


def test_interaction_decay_is_capped(make_plant):
    plant = make_plant(last_interaction=T0)
    assert interaction_decay(plant, T0 + 10 * MS_PER_HOUR) == pytest.approx(2.0)
    assert interaction_decay(plant, T0 + 100 * MS_PER_HOUR) == 5.0


def test_neglect_lowers_happiness(make_plant):
    plant = make_plant(health=50, happiness=50, last_interaction=T0)
    updated = advance(plant, MS_PER_HOUR, T0 + 10 * MS_PER_HOUR)
    assert updated.happiness == pytest.approx(48)


def test_happiness_floor_suppresses_idle_decay(make_plant):
    plant = make_plant(health=20, happiness=8, last_interaction=T0)
    now = T0
    for _ in range(50):
        now += MS_PER_HOUR
        plant = advance(plant, MS_PER_HOUR, now)
        assert plant.happiness >= 8


def test_idle_decay_stops_at_the_floor(make_plant):
    plant = make_plant(health=0, happiness=12, last_interaction=T0)
    updated = advance(plant, 5 * MS_PER_HOUR, T0 + 50 * MS_PER_HOUR)
    assert updated.happiness == pytest.approx(10)


def test_happiness_can_still_rise_below_floor(make_plant):
    plant = make_plant(health=100, happiness=5, last_interaction=T0)
    updated = advance(plant, 4 * MS_PER_HOUR, T0)
    assert updated.happiness == pytest.approx(15)


def test_split_ticks_only_approximate_a_single_tick(make_plant):
    plant = make_plant()
    whole = advance(plant, 10 * MS_PER_HOUR, T0)
    half = advance(plant, 5 * MS_PER_HOUR, T0)
    halves = advance(half, 5 * MS_PER_HOUR, T0)

    assert whole.growth_stage == pytest.approx(0.18)
    assert halves.growth_stage == pytest.approx(0.1825)
    assert whole.growth_stage != halves.growth_stage
    assert whole.water_level == pytest.approx(halves.water_level)


def test_same_input_gives_same_output(make_plant):
    plant = make_plant()
    assert advance(plant, 3 * MS_PER_HOUR, T0) == advance(plant, 3 * MS_PER_HOUR, T0)


def test_happy_streak_accumulates_and_resets(make_plant):
    plant = make_plant(happiness=95)
    plant = advance(plant, MS_PER_DAY, T0)
    assert plant.happy_streak_ms == MS_PER_DAY

    plant.happiness = 50
    plant = advance(plant, MS_PER_HOUR, T0)
    assert plant.happy_streak_ms == 0
