import math
from typing import Iterable, Tuple


Vec3 = Tuple[float, float, float]

ZERO: Vec3 = (0.0, 0.0, 0.0)

# ---------------------------
# basic 3D vector operations
# ---------------------------

def v_add(a: Vec3, b: Vec3) -> Vec3:
    """Elementwise a + b."""
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])

def v_sub(a: Vec3, b: Vec3) -> Vec3:
    """Elementwise a - b (vector from b to a)."""
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])

def v_dot(a: Vec3, b: Vec3) -> float:
    """Dot product a·b."""
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]

def v_cross(a: Vec3, b: Vec3) -> Vec3:
    """Cross product a × b (right-handed)."""
    return (
        a[1]*b[2] - a[2]*b[1],
        a[2]*b[0] - a[0]*b[2],
        a[0]*b[1] - a[1]*b[0],
    )

def v_scale(a: Vec3, s: float) -> Vec3:
    """Scale vector a by scalar s."""
    return (a[0]*s, a[1]*s, a[2]*s)

def v_norm(a: Vec3) -> float:
    """Euclidean norm |a|."""
    return math.hypot(a[0], a[1], a[2])

def as_vec3(values: Iterable[float]) -> Vec3:
    """Coerce any 3-element sequence (tuple, list, ndarray row) to a float tuple."""
    items = tuple(float(v) for v in values)
    if len(items) != 3:
        raise ValueError(f"Expected 3 components, got {len(items)}.")
    return (items[0], items[1], items[2])
