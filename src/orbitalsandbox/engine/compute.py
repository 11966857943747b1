import math
from typing import Sequence

from orbitalsandbox import config
from orbitalsandbox.engine.body import Body
from orbitalsandbox.engine.errors import DegenerateGeometryError, EmptySystemError
from orbitalsandbox.engine import vec


def separation(a: Body, b: Body) -> float:
    """Distance between the centres of two bodies."""
    return vec.v_norm(vec.v_sub(b.position, a.position))


def gravitational_force(a: Body, b: Body, G: float = config.G) -> float:
    """Newton's Law of Universal Gravitation

    Args:
        a (Body): First body
        b (Body): Second body
        G (float): Gravitational constant

    Returns:
        float: Magnitude of the attraction, G * m_a * m_b / r**2.

    Raises:
        DegenerateGeometryError: The bodies share a position.
    """
    d = vec.v_sub(b.position, a.position)
    r2 = vec.v_dot(d, d)
    if r2 == 0:
        raise DegenerateGeometryError(f"Coincident bodies at {a.position}.")
    return G * ((a.mass * b.mass) / r2)


def standard_grav_param(M1: float, M2: float, G: float = config.G) -> float:
    """
    Standard gravitational parameter μ = G (M1 + M2).
    """
    return G * (M1 + M2)


def orbital_velocity(a: Body, b: Body, G: float = config.G, up: vec.Vec3 = config.UP) -> vec.Vec3:
    """Velocity ``a`` needs for an approximately circular orbit around ``b``.

    Reduced two-body problem: the relative speed sqrt(μ/r) is shared between the
    two bodies in inverse proportion to their masses, and ``a`` takes the share
    m_b / (m_a + m_b). The direction is normalize(p_b - p_a) × up, so every
    orbit is planar about ``up`` and a body directly above or below ``b`` gets
    no tangential velocity.

    The result is in ``b``'s rest frame; add ``b.velocity`` to co-move.

    Raises:
        DegenerateGeometryError: The bodies share a position.
    """
    m_total = a.mass + b.mass
    mu = standard_grav_param(a.mass, b.mass, G)
    d = vec.v_sub(b.position, a.position)
    r = vec.v_norm(d)
    if r == 0:
        raise DegenerateGeometryError(f"Cannot orbit a body at the same position {a.position}.")
    direction = vec.v_scale(d, 1.0 / r)
    speed = math.sqrt(mu / r) * (b.mass / m_total)
    return vec.v_scale(vec.v_cross(direction, up), speed)


def total_mass(bodies: Sequence[Body]) -> float:
    return math.fsum(b.mass for b in bodies)


def barycenter(bodies: Sequence[Body]) -> vec.Vec3:
    """Mass-weighted mean position, Σ(m_i p_i) / Σ m_i.

    Raises:
        EmptySystemError: ``bodies`` is empty.
    """
    if not bodies:
        raise EmptySystemError("Barycenter of an empty system is undefined.")
    m = total_mass(bodies)
    return (
        math.fsum(b.mass * b.position[0] for b in bodies) / m,
        math.fsum(b.mass * b.position[1] for b in bodies) / m,
        math.fsum(b.mass * b.position[2] for b in bodies) / m,
    )


def scale_from_mass(mass: float, divisor: float = config.SCALE_DIVISOR) -> float:
    """Rendered radius; grows with the order of magnitude of the mass."""
    return math.log10(mass) / divisor
