import numpy as np
import pytest

from orbitalsandbox.engine import integrator
from orbitalsandbox.engine.body import Body
from orbitalsandbox.engine.compute import gravitational_force
from orbitalsandbox.engine.history import ordered_trail, record_trail


def arrays(*rows):
    return np.array(rows, dtype=np.float64)


def test_kick_single_body_keeps_velocity():
    mass = np.array([1e6])
    position = arrays((1.0, 2.0, 3.0))
    velocity = arrays((0.1, -0.2, 0.3))
    out = np.zeros_like(velocity)
    assert integrator.kick(1.0, mass, position, velocity, out) == 0
    np.testing.assert_array_equal(out, velocity)


def test_kick_pair_matches_force_model():
    mass = np.array([2.0, 3.0])
    position = arrays((0.0, 0.0, 0.0), (2.0, 0.0, 0.0))
    velocity = np.zeros((2, 3))
    out = np.zeros_like(velocity)
    integrator.kick(1.0, mass, position, velocity, out)
    np.testing.assert_allclose(out, [[0.75, 0.0, 0.0], [-0.5, 0.0, 0.0]])


def test_kick_matches_direct_sum():
    rng = np.random.default_rng(11)
    n = 6
    G = 1e-7
    mass = rng.uniform(1e3, 1e7, size=n)
    position = rng.uniform(-40, 40, size=(n, 3))
    velocity = rng.uniform(-0.1, 0.1, size=(n, 3))
    out = np.zeros_like(velocity)
    integrator.kick(G, mass, position, velocity, out)

    bodies = [Body(p, m) for p, m in zip(position, mass)]
    for i, bi in enumerate(bodies):
        dv = np.zeros(3)
        for j, bj in enumerate(bodies):
            if i == j:
                continue
            d = position[j] - position[i]
            dv += gravitational_force(bi, bj, G) / bi.mass * d / np.linalg.norm(d)
        np.testing.assert_allclose(out[i], velocity[i] + dv, rtol=1e-12, atol=1e-15)


def test_kick_reads_inputs_only():
    mass = np.array([1.0, 1.0])
    position = arrays((0.0, 0.0, 0.0), (1.0, 0.0, 0.0))
    velocity = arrays((0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    position_before = position.copy()
    velocity_before = velocity.copy()
    out = np.zeros_like(velocity)
    integrator.kick(1.0, mass, position, velocity, out)
    np.testing.assert_array_equal(position, position_before)
    np.testing.assert_array_equal(velocity, velocity_before)


def test_kick_coincident_pair_skips_mutual_term_only():
    # Two distinct unit masses share a position; both still feel the third.
    mass = np.array([1.0, 1.0, 4.0])
    position = arrays((0.0, 0.0, 0.0), (0.0, 0.0, 0.0), (1.0, 0.0, 0.0))
    velocity = np.zeros((3, 3))
    out = np.zeros_like(velocity)
    degenerate = integrator.kick(1.0, mass, position, velocity, out)

    assert degenerate == 2
    np.testing.assert_allclose(out[0], [4.0, 0.0, 0.0])
    np.testing.assert_allclose(out[1], [4.0, 0.0, 0.0])
    np.testing.assert_allclose(out[2], [-2.0, 0.0, 0.0])
    assert np.all(np.isfinite(out))


def test_drift_uses_new_velocity():
    position_in = arrays((1.0, 1.0, 1.0), (-2.0, 0.0, 0.5))
    velocity_out = arrays((0.5, 0.0, -1.0), (0.0, 0.25, 0.0))
    position_out = np.zeros_like(position_in)
    integrator.drift(position_in, velocity_out, position_out)
    np.testing.assert_array_equal(position_out, [[1.5, 1.0, 0.0], [-2.0, 0.25, 0.5]])


def test_record_trail_wraps_around():
    trail = np.zeros((2, 3, 3))
    trail_index = np.zeros(2, dtype=np.int64)
    trail_length = np.zeros(2, dtype=np.int64)

    # Only the first body is live.
    for step in range(1, 5):
        record_trail(arrays((float(step), 0.0, 0.0)), trail, trail_index, trail_length)

    assert trail_length[0] == 3
    assert trail_length[1] == 0
    ordered = ordered_trail(trail[0], trail_index[0], trail_length[0])
    np.testing.assert_array_equal(ordered[:, 0], [2.0, 3.0, 4.0])


def test_ordered_trail_partial_and_empty():
    trail = np.zeros((4, 3))
    assert ordered_trail(trail, np.int64(0), np.int64(0)).shape == (0, 3)

    trail[0] = (1.0, 0.0, 0.0)
    trail[1] = (2.0, 0.0, 0.0)
    ordered = ordered_trail(trail, np.int64(2), np.int64(2))
    np.testing.assert_array_equal(ordered[:, 0], [1.0, 2.0])


@pytest.mark.parametrize("n", [0, 1])
def test_kernels_accept_tiny_systems(n):
    mass = np.ones(n)
    position = np.zeros((n, 3))
    velocity = np.zeros((n, 3))
    out_v = np.zeros((n, 3))
    out_p = np.zeros((n, 3))
    assert integrator.kick(1.0, mass, position, velocity, out_v) == 0
    integrator.drift(position, out_v, out_p)
    np.testing.assert_array_equal(out_p, position)
