import numpy as np
from numpy.typing import NDArray
from numba import njit, void, float64, int64


@njit(void(float64[:, :], float64[:, :, :], int64[:], int64[:]), cache=True)
def record_trail(
    position: NDArray[np.float64],
    trail: NDArray[np.float64],
    trail_index: NDArray[np.int64],
    trail_length: NDArray[np.int64],
):
    """Push each body's position onto its trail ring buffer.

    ``position`` holds the live bodies only; the trail arrays may be larger.
    """
    depth = trail.shape[1]
    for b_id in range(position.shape[0]):
        hist_idx = trail_index[b_id]
        for k in range(3):
            trail[b_id, hist_idx, k] = position[b_id, k]
        trail_index[b_id] = (hist_idx + 1) % depth
        if trail_length[b_id] < depth:
            trail_length[b_id] += 1


def ordered_trail(trail: NDArray[np.float64], trail_index: np.int64, trail_length: np.int64) -> NDArray[np.float64]:
    """Trail vertices of one body, oldest first."""
    depth = trail.shape[0]
    ordered = np.roll(trail, -int(trail_index), axis=0)
    return ordered[depth - int(trail_length):]
