import numpy as np
from numpy.typing import NDArray
from numba import njit, float64, int64


@njit(float64(float64, float64, float64, float64), cache=True)
def accel(
    G: np.float64,
    mass_i: np.float64,
    mass_j: np.float64,
    r2: np.float64
) -> np.float64:
    """Acceleration magnitude of body i towards body j: F(i, j) / m_i.

    See: https://en.wikipedia.org/wiki/Newton's_law_of_universal_gravitation
    """
    F = G * ((mass_i * mass_j) / r2)
    return F / mass_i


@njit(int64(float64, float64[:], float64[:, :], float64[:, :], float64[:, :]), cache=True)
def kick(
    G: np.float64,
    mass: NDArray[np.float64],
    position_in: NDArray[np.float64],
    velocity_in: NDArray[np.float64],
    velocity_out: NDArray[np.float64],
) -> np.int64:
    """Write v_i + Σ_{j≠i} a_ij into ``velocity_out`` for every body.

    Only ``velocity_out`` is written. Bodies are excluded from their own sum by
    index. A pair at zero separation contributes nothing; the number of such
    ordered pairs is returned.
    """
    degenerate = 0
    for i in range(mass.size):
        dv0 = 0.0
        dv1 = 0.0
        dv2 = 0.0
        for j in range(mass.size):
            if i == j:
                continue

            dx = position_in[j, 0] - position_in[i, 0]
            dy = position_in[j, 1] - position_in[i, 1]
            dz = position_in[j, 2] - position_in[i, 2]
            r2 = dx*dx + dy*dy + dz*dz
            if r2 == 0.0:
                degenerate += 1
                continue

            a = accel(G, mass[i], mass[j], r2)
            r = np.sqrt(r2)
            dv0 += a * (dx / r)
            dv1 += a * (dy / r)
            dv2 += a * (dz / r)

        velocity_out[i, 0] = velocity_in[i, 0] + dv0
        velocity_out[i, 1] = velocity_in[i, 1] + dv1
        velocity_out[i, 2] = velocity_in[i, 2] + dv2
    return degenerate
