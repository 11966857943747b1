"""Placement of new bodies into a running system.

A new body starts on an approximately circular orbit around an *anchor*. With
the default heuristic the anchor is whichever of the two strongest attractors
the body was dropped close to, and otherwise a virtual body standing in for the
whole system at its barycenter. The other ``OrbitTarget`` strategies pick the
anchor more bluntly and are used for random spawns.
"""
from enum import Enum
from typing import Sequence

from orbitalsandbox import config
from orbitalsandbox.engine import logger
from orbitalsandbox.engine.body import Body
from orbitalsandbox.engine.compute import barycenter, gravitational_force, orbital_velocity, separation, total_mass
from orbitalsandbox.engine.errors import DegenerateGeometryError
from orbitalsandbox.engine import vec


class OrbitTarget(Enum):
    HEURISTIC = "heuristic"
    GREATEST_FORCE = "greatest_force"
    GREATEST_MASS = "greatest_mass"
    BARYCENTER = "barycenter"


def rank_attractors(candidate: Body, bodies: Sequence[Body], G: float = config.G) -> list[Body]:
    """Bodies ordered by the force they exert on ``candidate``, strongest first.

    The sort is stable, so equal forces keep their arena order.
    """
    return sorted(bodies, key=lambda b: gravitational_force(b, candidate, G), reverse=True)


def select_anchor(candidate: Body, ranked: Sequence[Body]) -> Body|None:
    """Pick the anchor among attractors already sorted by ``rank_attractors``.

    A lone body is always the anchor. Otherwise the candidate must lie within a
    capture radius of one of the two strongest attractors, the radius being
    their separation divided by ``ANCHOR_RADIUS_DIVISOR``.
    """
    if len(ranked) == 0:
        return None
    if len(ranked) == 1:
        return ranked[0]

    first, second = ranked[0], ranked[1]
    radius = separation(first, second) / config.ANCHOR_RADIUS_DIVISOR
    if separation(candidate, first) <= radius:
        return first
    if separation(candidate, second) <= radius:
        return second
    return None


def virtual_barycenter(bodies: Sequence[Body]) -> Body:
    """A resting body holding the whole system's mass at its barycenter."""
    return Body(barycenter(bodies), total_mass(bodies))


def check_clearance(candidate: Body, bodies: Sequence[Body]):
    for b in bodies:
        if b.position == candidate.position:
            raise DegenerateGeometryError(
                f"Position {candidate.position} is occupied by body {b.id}."
            )


def find_anchor(candidate: Body, bodies: Sequence[Body], target: OrbitTarget = OrbitTarget.HEURISTIC, G: float = config.G) -> Body:
    """Resolve the body ``candidate`` should orbit.

    Returns either one of ``bodies`` or, when no real body qualifies, the
    virtual barycenter body (``id`` is None, velocity zero).
    """
    if target == OrbitTarget.HEURISTIC:
        anchor = select_anchor(candidate, rank_attractors(candidate, bodies, G))
    elif target == OrbitTarget.GREATEST_FORCE:
        anchor = rank_attractors(candidate, bodies, G)[0]
    elif target == OrbitTarget.GREATEST_MASS:
        anchor = max(bodies, key=lambda b: b.mass)
    elif target == OrbitTarget.BARYCENTER:
        anchor = None
    else:
        raise ValueError(f"Unknown orbit target {target!r}.")

    if anchor is None:
        anchor = virtual_barycenter(bodies)
        logger.debug("No anchor near %s, orbiting the barycenter %s.", candidate.position, anchor.position)
    return anchor


def initial_velocity(
    candidate: Body,
    bodies: Sequence[Body],
    target: OrbitTarget = OrbitTarget.HEURISTIC,
    eccentricity: float = 1.0,
    G: float = config.G,
    up: vec.Vec3 = config.UP,
) -> vec.Vec3:
    """World-space velocity for ``candidate`` so that it orbits its anchor.

    The circular orbital velocity about the anchor is scaled by
    ``eccentricity`` (1.0 keeps it circular, smaller values drop the body into
    an ellipse) and boosted by the anchor's own velocity so the body co-moves
    with it. An empty system has nothing to orbit and yields zero velocity.

    Raises:
        DegenerateGeometryError: ``candidate`` sits on an existing body or on
            the barycenter it would have to orbit.
    """
    if eccentricity < 0:
        raise ValueError(f"Eccentricity factor must be non-negative, got {eccentricity}.")
    if len(bodies) == 0:
        logger.debug("Empty system, %s starts at rest.", candidate.position)
        return vec.ZERO

    check_clearance(candidate, bodies)
    anchor = find_anchor(candidate, bodies, target, G)
    orbit = vec.v_scale(orbital_velocity(candidate, anchor, G, up), eccentricity)
    return vec.v_add(orbit, anchor.velocity)
