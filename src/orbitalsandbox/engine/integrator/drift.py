import numpy as np
from numpy.typing import NDArray
from numba import njit, void, float64


@njit(void(float64[:, :], float64[:, :], float64[:, :]), cache=True)
def drift(
    position_in: NDArray[np.float64],
    velocity_out: NDArray[np.float64],
    position_out: NDArray[np.float64],
):
    """Advance positions by one unit of time using the already-kicked velocity."""
    for i in range(position_in.shape[0]):
        for k in range(3):
            position_out[i, k] = position_in[i, k] + velocity_out[i, k]
