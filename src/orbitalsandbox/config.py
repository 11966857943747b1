"""Configuration for the orbital sandbox engine.

Units are arbitrary: the gravitational constant is tuned so that masses in the
1e3–1e8 range at distances of 1–100 give slow, visually stable orbits with a
time step of one tick.
"""
from dataclasses import dataclass, field
from enum import Enum

from orbitalsandbox.engine.body import Body
from orbitalsandbox.engine.vec import Vec3

# =============================================================================
# PHYSICS
# =============================================================================

G = 1e-7                            # gravitational scaling constant (not physical)
UP: Vec3 = (0.0, 0.0, 1.0)          # orbits are planar about this axis

# Candidate is captured by one of the two strongest attractors when it lies
# within (separation of those two) / ANCHOR_RADIUS_DIVISOR of it.
ANCHOR_RADIUS_DIVISOR = 5.0

# =============================================================================
# MASS PRESETS
# =============================================================================

MASS_SMALL = 1e4
MASS_MEDIUM = 1e5
MASS_LARGE = 1e6


class MassClass(Enum):
    SMALL = MASS_SMALL
    MEDIUM = MASS_MEDIUM
    LARGE = MASS_LARGE

    @property
    def mass(self) -> float:
        return float(self.value)


# =============================================================================
# SEED SYSTEMS
# =============================================================================

PRIMARY_MASS = 1e7
SECONDARY_MASS = 5e6
BINARY_SEPARATION = 30.0
UNARY_MASS = 1e5

# =============================================================================
# RENDERING PROJECTION
# =============================================================================

SCALE_DIVISOR = 20.0                # radius = log10(mass) / SCALE_DIVISOR

TICKS_PER_TRAIL_POINT = 1           # record a trail vertex every N ticks
TRAIL_DEPTH = 1000                  # max trail vertices kept per body

# Half-extents of the box random bodies are spawned in, thin along UP.
SPAWN_EXTENT: Vec3 = (40.0, 40.0, 2.0)

# =============================================================================
# STATE ARENA
# =============================================================================

INITIAL_CAPACITY = 16               # slots allocated up front, doubled on demand

DEFAULT_SEED = 0xf00d


@dataclass
class SimulationConfig:
    """Initial configuration handed to ``Simulation.create``.

    ``bodies`` are copied into the state arena in order and receive arena
    indices 0..n-1. ``seed`` feeds the ``numpy.random.Generator`` used for
    colours and random spawns; ``None`` draws fresh entropy.
    """
    bodies: list[Body] = field(default_factory=list)
    G: float = G
    up: Vec3 = UP
    seed: int|None = DEFAULT_SEED
    trail_depth: int = TRAIL_DEPTH
    ticks_per_trail_point: int = TICKS_PER_TRAIL_POINT
