import pytest

from plant_sim.core.clock import CycleClock
from plant_sim.world.environment import DayNightController, Environment

from conftest import T0

DUSK = T0 + 480_000   # phase 0.8
DAWN = T0 + 600_000   # phase 0.0 of the next cycle


def test_phase_and_daytime():
    clock = CycleClock()
    assert clock.phase(T0) == 0.0
    assert clock.phase(T0 + 300_000) == pytest.approx(0.5)
    assert clock.is_daytime(T0 + 419_999)
    assert not clock.is_daytime(T0 + 420_000)
    assert not clock.is_daytime(T0 + 599_999)
    assert clock.is_daytime(DAWN)


def test_ms_until_transition():
    clock = CycleClock()
    assert clock.ms_until_transition(T0) == pytest.approx(420_000)
    assert clock.ms_until_transition(T0 + 420_000) == pytest.approx(180_000)


def test_dusk_lowers_sunlight(make_plant):
    env = Environment()
    plant = make_plant(sun_exposure=50)
    controller = DayNightController()

    assert controller.update(env, [plant], DUSK) == "dusk"
    assert not env.is_daytime
    assert plant.sun_exposure == 30


def test_dusk_with_grow_light_holds_sunlight(make_plant):
    env = Environment(is_grow_light_on=True)
    plant = make_plant(sun_exposure=50)
    DayNightController().update(env, [plant], DUSK)
    assert plant.sun_exposure == 50


def test_transition_applies_once(make_plant):
    env = Environment()
    plant = make_plant(sun_exposure=50)
    controller = DayNightController()
    controller.update(env, [plant], DUSK)
    assert controller.update(env, [plant], DUSK + 10_000) is None
    assert plant.sun_exposure == 30


@pytest.mark.parametrize("curtains_open, expected", [(True, 70), (False, 50)])
def test_dawn_depends_on_curtains(make_plant, curtains_open, expected):
    env = Environment(is_daytime=False, is_curtains_open=curtains_open)
    plant = make_plant(sun_exposure=50)
    assert DayNightController().update(env, [plant], DAWN) == "dawn"
    assert env.is_daytime
    assert plant.sun_exposure == expected


def test_dawn_sunlight_is_clamped(make_plant):
    env = Environment(is_daytime=False)
    plant = make_plant(sun_exposure=95)
    DayNightController().update(env, [plant], DAWN)
    assert plant.sun_exposure == 100


def test_curtains_shift_sunlight_only_by_day(make_plant):
    env = Environment()
    plants = [make_plant(sun_exposure=50), make_plant(id="p2", sun_exposure=10)]
    controller = DayNightController()

    assert controller.toggle_curtains(env, plants) is False
    assert [p.sun_exposure for p in plants] == [30, 0]
    assert controller.toggle_curtains(env, plants) is True
    assert [p.sun_exposure for p in plants] == [50, 20]

    env.is_daytime = False
    controller.toggle_curtains(env, plants)
    assert not env.is_curtains_open
    assert [p.sun_exposure for p in plants] == [50, 20]


def test_grow_light_shifts_sunlight_only_at_night(make_plant):
    env = Environment()
    plant = make_plant(sun_exposure=50)
    controller = DayNightController()

    controller.toggle_grow_light(env, [plant])
    assert env.is_grow_light_on
    assert plant.sun_exposure == 50

    controller.toggle_grow_light(env, [plant])
    env.is_daytime = False
    controller.toggle_grow_light(env, [plant])
    assert plant.sun_exposure == 80
    controller.toggle_grow_light(env, [plant])
    assert plant.sun_exposure == 50


def test_environment_round_trip():
    env = Environment(is_daytime=False, is_curtains_open=False, is_grow_light_on=True)
    assert Environment.from_dict(env.to_dict()) == env
