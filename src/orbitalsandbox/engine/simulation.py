from typing import Iterable, Iterator, NamedTuple

import numpy as np

from orbitalsandbox import config, helpers
from orbitalsandbox.config import MassClass, SimulationConfig
from orbitalsandbox.engine import integrator, logger
from orbitalsandbox.engine.body import Body
from orbitalsandbox.engine.compute import barycenter, scale_from_mass
from orbitalsandbox.engine.errors import EmptySystemError
from orbitalsandbox.engine.history import ordered_trail, record_trail
from orbitalsandbox.engine.insertion import OrbitTarget, initial_velocity
from orbitalsandbox.engine.memory import BodyProxy, SimulationMemory
from orbitalsandbox.engine.vec import Vec3, as_vec3
from orbitalsandbox.fmt import mag_format, vec_format


class Instance(NamedTuple):
    """What the renderer needs to draw one body."""
    position: Vec3
    scale: float
    color: Vec3


class Simulation:
    """Gravitational N-body system advanced one tick at a time.

    State lives in a double-buffered ``SimulationMemory``: a tick reads only the
    current buffer, writes the whole successor into the other one and then
    flips, so queries between ticks always see one consistent snapshot.
    """

    def __init__(self, cfg: SimulationConfig):
        if len(cfg.bodies) == 0:
            raise EmptySystemError("A simulation needs at least one seed body.")
        if cfg.ticks_per_trail_point < 1:
            raise ValueError(f"ticks_per_trail_point must be at least 1, got {cfg.ticks_per_trail_point}.")

        self.G = cfg.G
        self.up = as_vec3(cfg.up)
        self.rng = np.random.default_rng(cfg.seed)
        self.ticks_per_trail_point = cfg.ticks_per_trail_point
        self.memory = SimulationMemory(
            capacity=max(config.INITIAL_CAPACITY, len(cfg.bodies)),
            trail_depth=cfg.trail_depth,
        )
        for b in cfg.bodies:
            self._append(b.position, b.velocity, b.mass)
        logger.info("Simulation created with %s bodies, total mass %s.",
                    self.memory.N, mag_format(float(self.memory.masses().sum())))

    @classmethod
    def create(cls, cfg: SimulationConfig|None = None) -> "Simulation":
        """Build a simulation; without a config, seed the default binary pair."""
        if cfg is None:
            cfg = SimulationConfig(bodies=helpers.binary_pair())
        return cls(cfg)

    def __len__(self) -> int:
        return self.memory.N

    def __iter__(self) -> Iterator[BodyProxy]:
        for i in range(self.memory.N):
            yield self.body(i)

    @property
    def ticks(self) -> int:
        """Number of completed ticks."""
        return self.memory.step_id

    def body(self, idx: int) -> BodyProxy:
        """Get a proxy view for a body at a specific index

        Args:
            idx (int): The index of the body in memory

        Returns:
            BodyProxy: Object allowing for easy retrieval of body properties.
        """
        return BodyProxy(idx, self.memory)

    def bodies(self) -> list[Body]:
        """Snapshot of every body in the current buffer, in index order."""
        return [proxy.snapshot() for proxy in self]

    def tick(self):
        """Advance the system by one unit of time (semi-implicit Euler)."""
        m = self.memory
        cur, nxt = m.current, m.next

        degenerate = integrator.kick(
            self.G,
            m.masses(cur),
            m.positions(cur),
            m.velocities(cur),
            m.velocities(nxt),
        )
        integrator.drift(m.positions(cur), m.velocities(nxt), m.positions(nxt))
        m.mass[nxt, :m.N] = m.mass[cur, :m.N]
        if degenerate:
            logger.warning("Tick %s: skipped %s coincident body pair(s).", m.step_id, degenerate // 2)

        m.swap()

        if m.step_id % self.ticks_per_trail_point == 0:
            record_trail(m.positions(), m.trail, m.trail_index, m.trail_length)

    def advance(self, num_steps: int):
        """Run ``num_steps`` ticks back to back."""
        if num_steps < 0:
            raise ValueError(f"Cannot advance by {num_steps} steps.")
        for _ in range(num_steps):
            self.tick()

    def barycenter(self) -> Vec3:
        """Mass-weighted centre of the current buffer."""
        return barycenter(self.bodies())

    def instances(self) -> list[Instance]:
        return [
            Instance(b.position, scale_from_mass(b.mass), b.color)
            for b in self
        ]

    def add_body_at_position(self, position: Iterable[float], mass_class: MassClass) -> int:
        """Insert a body that starts on a plausible orbit; returns its index.

        Raises:
            DegenerateGeometryError: ``position`` coincides with an existing
                body, or with the barycenter when that is the orbit target.
        """
        return self._insert(as_vec3(position), MassClass(mass_class), OrbitTarget.HEURISTIC, 1.0)

    def add_random_body(
        self,
        mass_class: MassClass = MassClass.SMALL,
        target: OrbitTarget = OrbitTarget.GREATEST_FORCE,
        eccentricity: float = 1.0,
    ) -> int:
        """Insert a body at a random spawn position; returns its index."""
        position = helpers.random_position(self.rng)
        return self._insert(position, MassClass(mass_class), OrbitTarget(target), eccentricity)

    def _insert(self, position: Vec3, mass_class: MassClass, target: OrbitTarget, eccentricity: float) -> int:
        candidate = Body(position, mass_class.mass)
        velocity = initial_velocity(candidate, self.bodies(), target, eccentricity, self.G, self.up)
        return self._append(position, velocity, candidate.mass)

    def _append(self, position: Vec3, velocity: Vec3, mass: float) -> int:
        idx = self.memory.append(position, velocity, mass, helpers.random_color(self.rng))
        logger.info("Body %s added: mass=%s position=%s velocity=%s",
                    idx, mag_format(mass), vec_format(position), vec_format(velocity))
        return idx

    def trail(self, idx: int) -> list[Vec3]:
        """Recorded positions of one body, oldest first."""
        proxy = self.body(idx)
        m = self.memory
        points = ordered_trail(m.trail[proxy.idx], m.trail_index[proxy.idx], m.trail_length[proxy.idx])
        return [as_vec3(p) for p in points]

    def clear_trails(self):
        self.memory.trail[:] = 0
        self.memory.trail_index[:] = 0
        self.memory.trail_length[:] = 0
