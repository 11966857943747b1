import numpy as np

from orbitalsandbox import config
from orbitalsandbox.engine.body import Body
from orbitalsandbox.engine.compute import orbital_velocity
from orbitalsandbox.engine.vec import Vec3


def random_color(rng: np.random.Generator) -> Vec3:
    """Create a random RGB colour whose channels sum to 1.

    Red is uniform in [0, 1), green uniform in [0, 1 - red) and blue takes
    what is left, so no colour is ever brighter than another.
    """
    red = rng.uniform(0.0, 1.0)
    green = rng.uniform(0.0, 1.0 - red)
    blue = 1.0 - (red + green)
    return (float(red), float(green), float(blue))


def random_position(rng: np.random.Generator, extent: Vec3 = config.SPAWN_EXTENT, center: Vec3 = (0.0, 0.0, 0.0)) -> Vec3:
    """Uniform point in the box ``center ± extent``."""
    x, y, z = (rng.uniform(c - e, c + e) for c, e in zip(center, extent))
    return (float(x), float(y), float(z))


def create_primary(*, mass: float = config.UNARY_MASS) -> Body:
    """A single body resting at the origin."""
    return Body((0.0, 0.0, 0.0), mass)


def binary_pair(
    primary_mass: float = config.PRIMARY_MASS,
    secondary_mass: float = config.SECONDARY_MASS,
    separation: float = config.BINARY_SEPARATION,
    *,
    G: float = config.G,
    up: Vec3 = config.UP,
) -> list[Body]:
    """Two bodies on mutual circular orbits around the origin.

    The bodies sit on the x axis with the barycenter at the origin, the
    primary on the positive side. Each takes its share of the relative orbital
    speed, so total momentum is zero.
    """
    if separation <= 0:
        raise ValueError(f"Separation must be positive, got {separation}.")
    m_total = primary_mass + secondary_mass
    p1 = Body((separation * secondary_mass / m_total, 0.0, 0.0), primary_mass)
    p2 = Body((-separation * primary_mass / m_total, 0.0, 0.0), secondary_mass)
    return [
        Body(p1.position, p1.mass, orbital_velocity(p1, p2, G, up)),
        Body(p2.position, p2.mass, orbital_velocity(p2, p1, G, up)),
    ]
