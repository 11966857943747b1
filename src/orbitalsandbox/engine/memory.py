from collections import OrderedDict
import math
import numpy as np
from numpy.typing import NDArray

from orbitalsandbox import config
from orbitalsandbox.engine import logger
from orbitalsandbox.engine.body import Body
from orbitalsandbox.engine.vec import Vec3, as_vec3
from orbitalsandbox.fmt import mag_format


FIELDS = OrderedDict()

# Physical state. The leading axis is the buffer: index `step_id % 2` is
# current, the other one is written by the next tick.
FIELDS['position'] = lambda N, D: {
    'dtype': np.float64,
    'shape': (2, N, 3),
    'body_axis': 1,
}

FIELDS['velocity'] = lambda N, D: {
    'dtype': np.float64,
    'shape': (2, N, 3),
    'body_axis': 1,
}

FIELDS['mass'] = lambda N, D: {
    'dtype': np.float64,
    'shape': (2, N),
    'body_axis': 1,
}

# Presentation state, never touched by the integrator.
FIELDS['color'] = lambda N, D: {
    'dtype': np.float64,
    'shape': (N, 3),
    'body_axis': 0,
}

FIELDS['trail'] = lambda N, D: {
    'dtype': np.float64,
    'shape': (N, D, 3),
    'body_axis': 0,
}

# Slot the next trail vertex is written to.
FIELDS['trail_index'] = lambda N, D: {
    'dtype': np.int64,
    'shape': (N,),
    'body_axis': 0,
}

# Number of valid trail vertices (saturates at D).
FIELDS['trail_length'] = lambda N, D: {
    'dtype': np.int64,
    'shape': (N,),
    'body_axis': 0,
}

def get_size(field):
    """Get the full byte size of a field based on its dtype and shape."""
    return np.dtype(field["dtype"]).itemsize * math.prod(field["shape"])

def body_slice(field, stop:int):
    """Index selecting bodies [0, stop) along the field's body axis."""
    return (slice(None),) * field['body_axis'] + (slice(0, stop),)


class SimulationMemory:
    """Double-buffered arena holding every body of a simulation.

    Bodies occupy slots ``[0, N)`` and keep their slot for the lifetime of the
    arena, so the slot index is the body's identity. Slots are allocated in
    blocks; when the arena is full the capacity doubles and live slots are
    copied over.
    """
    N:int

    # Number of completed ticks; its parity names the current buffer.
    step_id:int

    # Position, shape (2, capacity, 3)
    position:NDArray[np.float64]

    # Velocity, shape (2, capacity, 3)
    velocity:NDArray[np.float64]

    # Mass (arbitrary units), shape (2, capacity)
    mass:NDArray[np.float64]

    # RGB in [0, 1], shape (capacity, 3)
    color:NDArray[np.float64]

    trail:NDArray[np.float64]
    trail_index:NDArray[np.int64]
    trail_length:NDArray[np.int64]

    def __init__(self, capacity:int=config.INITIAL_CAPACITY, trail_depth:int=config.TRAIL_DEPTH):
        if capacity < 1:
            raise ValueError(f"Capacity must be at least 1, got {capacity}.")
        if trail_depth < 1:
            raise ValueError(f"Trail depth must be at least 1, got {trail_depth}.")
        self.N = 0
        self.step_id = 0
        self.capacity = 0
        self.trail_depth = trail_depth
        self._allocate(capacity)

    def _allocate(self, capacity:int):
        buffer_size = 0
        for field, f in FIELDS.items():
            f = f(capacity, self.trail_depth)
            array = np.zeros(f['shape'], dtype=f['dtype'])
            if self.capacity:
                idx = body_slice(f, self.N)
                array[idx] = getattr(self, field)[idx]
            setattr(self, field, array)
            buffer_size += get_size(f)
        self.capacity = capacity
        logger.info("Allocated %sB for %s body slots.", mag_format(buffer_size), capacity)

    @property
    def current(self) -> int:
        """Index of the authoritative buffer."""
        return self.step_id % 2

    @property
    def next(self) -> int:
        """Index of the buffer the next tick writes."""
        return (self.step_id + 1) % 2

    def swap(self):
        """Make the buffer written by the last tick authoritative."""
        self.step_id += 1

    def append(self, position:Vec3, velocity:Vec3, mass:float, color:Vec3=(1.0, 1.0, 1.0)) -> int:
        """Add a body to both buffers and return its slot index."""
        if not mass > 0:
            raise ValueError(f"Body mass must be positive, got {mass}.")
        if self.N == self.capacity:
            self._allocate(self.capacity * 2)

        idx = self.N
        self.position[:, idx] = position
        self.velocity[:, idx] = velocity
        self.mass[:, idx] = mass
        self.color[idx] = color
        self.trail[idx] = 0
        self.trail_index[idx] = 0
        self.trail_length[idx] = 0
        self.N += 1
        return idx

    def positions(self, buffer:int|None=None) -> NDArray[np.float64]:
        """View of live positions in ``buffer`` (default: current)."""
        return self.position[self.current if buffer is None else buffer, :self.N]

    def velocities(self, buffer:int|None=None) -> NDArray[np.float64]:
        return self.velocity[self.current if buffer is None else buffer, :self.N]

    def masses(self, buffer:int|None=None) -> NDArray[np.float64]:
        return self.mass[self.current if buffer is None else buffer, :self.N]


class BodyProxy:
    """ Convenience class for accessing body properties.

        Reads always go to the buffer that is current at access time, so a
        proxy held across ticks follows its body. This should not be used for
        bulk operations, but rather for cases when dealing with one or two
        specific bodies.
    """

    idx:int
    memory:SimulationMemory

    def __init__(self, idx:int, memory:SimulationMemory):
        if not 0 <= idx < memory.N:
            raise IndexError(f"No body at index {idx}.")
        self.idx = idx
        self.memory = memory

    def __repr__(self):
        return f"BodyProxy(idx={self.idx}, position={self.position}, mass={self.mass})"

    @property
    def position(self) -> Vec3:
        return as_vec3(self.memory.position[self.memory.current, self.idx])

    @property
    def velocity(self) -> Vec3:
        return as_vec3(self.memory.velocity[self.memory.current, self.idx])

    @property
    def mass(self) -> float:
        return float(self.memory.mass[self.memory.current, self.idx])

    @property
    def color(self) -> Vec3:
        return as_vec3(self.memory.color[self.idx])

    def snapshot(self) -> Body:
        """Freeze the current state of the body into a value."""
        return Body(self.position, self.mass, self.velocity, id=self.idx)
