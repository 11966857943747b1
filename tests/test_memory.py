import numpy as np
import pytest

from orbitalsandbox.engine.memory import BodyProxy, SimulationMemory


def test_append_writes_both_buffers():
    m = SimulationMemory(capacity=4, trail_depth=8)
    idx = m.append((1.0, 2.0, 3.0), (0.1, 0.0, 0.0), 50.0, (0.2, 0.3, 0.5))
    assert idx == 0
    assert m.N == 1
    for buf in (0, 1):
        np.testing.assert_array_equal(m.positions(buf), [[1.0, 2.0, 3.0]])
        np.testing.assert_array_equal(m.velocities(buf), [[0.1, 0.0, 0.0]])
        np.testing.assert_array_equal(m.masses(buf), [50.0])
    np.testing.assert_array_equal(m.color[0], [0.2, 0.3, 0.5])


def test_append_assigns_sequential_indices():
    m = SimulationMemory(capacity=4, trail_depth=8)
    assert [m.append((float(i), 0.0, 0.0), (0.0, 0.0, 0.0), 1.0) for i in range(3)] == [0, 1, 2]


def test_growth_preserves_existing_bodies():
    m = SimulationMemory(capacity=2, trail_depth=4)
    m.append((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), 10.0, (1.0, 0.0, 0.0))
    m.append((2.0, 0.0, 0.0), (0.0, 2.0, 0.0), 20.0, (0.0, 1.0, 0.0))
    m.trail[1, 0] = (9.0, 9.0, 9.0)
    m.trail_length[1] = 1
    m.append((3.0, 0.0, 0.0), (0.0, 3.0, 0.0), 30.0, (0.0, 0.0, 1.0))

    assert m.capacity == 4
    assert m.N == 3
    for buf in (0, 1):
        np.testing.assert_array_equal(m.positions(buf)[:, 0], [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(m.velocities(buf)[:, 1], [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(m.masses(buf), [10.0, 20.0, 30.0])
    np.testing.assert_array_equal(m.color[:3], np.eye(3))
    np.testing.assert_array_equal(m.trail[1, 0], [9.0, 9.0, 9.0])
    assert m.trail_length[1] == 1


def test_swap_flips_current_buffer():
    m = SimulationMemory(capacity=1, trail_depth=1)
    assert (m.current, m.next) == (0, 1)
    m.swap()
    assert (m.current, m.next) == (1, 0)
    m.swap()
    assert m.step_id == 2
    assert m.current == 0


def test_views_default_to_current_buffer():
    m = SimulationMemory(capacity=2, trail_depth=1)
    m.append((1.0, 0.0, 0.0), (0.0, 0.0, 0.0), 1.0)
    m.position[1, 0] = (5.0, 0.0, 0.0)
    assert m.positions()[0, 0] == 1.0
    m.swap()
    assert m.positions()[0, 0] == 5.0


def test_append_rejects_non_positive_mass():
    m = SimulationMemory(capacity=1, trail_depth=1)
    with pytest.raises(ValueError):
        m.append((0.0, 0.0, 0.0), (0.0, 0.0, 0.0), 0.0)
    assert m.N == 0


def test_invalid_sizes_rejected():
    with pytest.raises(ValueError):
        SimulationMemory(capacity=0)
    with pytest.raises(ValueError):
        SimulationMemory(trail_depth=0)


def test_proxy_follows_current_buffer():
    m = SimulationMemory(capacity=2, trail_depth=1)
    m.append((1.0, 0.0, 0.0), (0.0, 0.5, 0.0), 7.0, (0.5, 0.25, 0.25))
    proxy = BodyProxy(0, m)
    assert proxy.position == (1.0, 0.0, 0.0)
    assert proxy.velocity == (0.0, 0.5, 0.0)
    assert proxy.mass == 7.0
    assert proxy.color == (0.5, 0.25, 0.25)

    m.position[m.next, 0] = (1.0, 0.5, 0.0)
    assert proxy.position == (1.0, 0.0, 0.0)
    m.swap()
    assert proxy.position == (1.0, 0.5, 0.0)


def test_proxy_snapshot_carries_index():
    m = SimulationMemory(capacity=2, trail_depth=1)
    m.append((0.0, 0.0, 0.0), (0.0, 0.0, 0.0), 1.0)
    m.append((4.0, 0.0, 0.0), (0.0, 0.0, 0.0), 2.0)
    body = BodyProxy(1, m).snapshot()
    assert body.id == 1
    assert body.position == (4.0, 0.0, 0.0)
    assert body.mass == 2.0


def test_proxy_out_of_range():
    m = SimulationMemory(capacity=2, trail_depth=1)
    m.append((0.0, 0.0, 0.0), (0.0, 0.0, 0.0), 1.0)
    with pytest.raises(IndexError):
        BodyProxy(1, m)
    with pytest.raises(IndexError):
        BodyProxy(-1, m)
