import pytest

from orbitalsandbox.config import SimulationConfig
from orbitalsandbox.engine.body import Body
from orbitalsandbox.engine.simulation import Simulation
from orbitalsandbox import helpers


@pytest.fixture
def primary():
    return Body((10.0, 0.0, 0.0), 1e7)


@pytest.fixture
def secondary():
    return Body((-20.0, 0.0, 0.0), 5e6)


@pytest.fixture
def binary_sim():
    """The default seed system: 1e7 at (10, 0, 0) orbiting with 5e6 at (-20, 0, 0)."""
    return Simulation.create()


@pytest.fixture
def unary_sim():
    return Simulation.create(SimulationConfig(bodies=[helpers.create_primary()]))
