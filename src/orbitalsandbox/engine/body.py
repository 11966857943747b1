from dataclasses import dataclass, field

from orbitalsandbox.engine.vec import ZERO, Vec3, as_vec3


@dataclass(frozen=True)
class Body:
    position: Vec3
    mass: float
    velocity: Vec3 = ZERO
    # Arena index once the body lives in a simulation; None for candidates.
    id: int|None = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "position", as_vec3(self.position))
        object.__setattr__(self, "velocity", as_vec3(self.velocity))
        object.__setattr__(self, "mass", float(self.mass))
        if not self.mass > 0:
            raise ValueError(f"Body mass must be positive, got {self.mass}.")
