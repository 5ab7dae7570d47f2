from datetime import datetime

import pytest

from plant_sim.plants.plant import Plant
from plant_sim.plants.species import PlantType
from plant_sim.simulation.engine import GardenEngine

# Local midday, snapped to the start of a day/night cycle (phase 0, daytime)
T0 = float(int(datetime(2027, 1, 15, 12, 0).timestamp() * 1000) // 600_000 * 600_000)


@pytest.fixture
def make_plant():
    def _make(plant_type=PlantType.SUCCULENT, **overrides):
        fields = dict(
            id="p1",
            name="Sukki",
            plant_type=plant_type,
            created_at=T0,
            last_interaction=T0,
        )
        fields.update(overrides)
        return Plant(**fields)
    return _make


@pytest.fixture
def engine():
    return GardenEngine(seed=7, clock=lambda: T0)
