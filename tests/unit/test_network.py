import numpy as np
import pytest

from paintnet.core.activations import sigmoid, sigmoid_deriv_from_output
from paintnet.core.errors import DimensionMismatch, InvalidTopology
from paintnet.core.network import Network


@pytest.mark.parametrize("sizes", [[2, 1], [2, 4, 1], [3, 5, 2, 4], [1, 1, 1, 1, 1]])
def test_propagate_shape_and_strict_sigmoid_range(sizes):
    net = Network(sizes, seed=0)
    rng = np.random.default_rng(1)
    for _ in range(10):
        out = net.propagate(rng.uniform(0.0, 1.0, size=sizes[0]))
        assert out.shape == (sizes[-1],)
        assert np.all(out > 0.0) and np.all(out < 1.0)


def test_parameter_shapes():
    net = Network([2, 3, 1], seed=0)
    assert [W.shape for W in net.weights] == [(3, 2), (1, 3)]
    assert [b.shape for b in net.biases] == [(3,), (1,)]
    assert net.parameter_count() == 2 * 3 + 3 + 3 * 1 + 1
    flat = net.get_parameters()
    assert np.all(np.abs(flat) <= 1.0)


@pytest.mark.parametrize("sizes", [[1], [], [2, 0, 1], [2, -1], [2, 1.5], [2, True]])
def test_invalid_topology(sizes):
    with pytest.raises(InvalidTopology):
        Network(sizes)


def test_propagate_rejects_wrong_length():
    net = Network([2, 3, 1], seed=0)
    with pytest.raises(DimensionMismatch):
        net.propagate([0.5])
    with pytest.raises(DimensionMismatch):
        net.propagate([0.5, 0.5, 0.5])


def test_propagate_is_deterministic():
    net = Network([2, 4, 1], seed=3)
    first = net.propagate([0.25, 0.75])
    second = net.propagate([0.25, 0.75])
    assert np.array_equal(first, second)


def test_propagate_matches_manual_computation():
    net = Network([2, 2, 1], seed=0)
    net.set_parameters([1.0, -1.0, 0.5, 0.5, 0.0, -0.5, 2.0, -1.0, 0.25])
    x = np.array([0.2, 0.4])
    hidden = sigmoid(np.array([[1.0, -1.0], [0.5, 0.5]]) @ x + np.array([0.0, -0.5]))
    expected = sigmoid(np.array([2.0, -1.0]) @ hidden + 0.25)
    assert np.allclose(net.propagate(x), [expected])


def test_forward_batch_matches_single_propagate():
    net = Network([2, 5, 3, 1], seed=4)
    inputs = np.random.default_rng(0).uniform(size=(7, 2))
    batch = net.predict(inputs)
    single = np.stack([net.propagate(row) for row in inputs])
    assert np.allclose(batch, single)


def test_parameter_round_trip_preserves_outputs():
    net = Network([2, 4, 1], seed=5)
    probe = [0.1, 0.9]
    before = net.propagate(probe)
    net.set_parameters(net.get_parameters())
    assert np.allclose(net.propagate(probe), before)


def test_get_parameters_order():
    net = Network([2, 2, 1], seed=0)
    flat = net.get_parameters()
    assert np.array_equal(flat[:4], net.weights[0].ravel())
    assert np.array_equal(flat[4:6], net.biases[0])
    assert np.array_equal(flat[6:8], net.weights[1].ravel())
    assert np.array_equal(flat[8:], net.biases[1])


def test_set_parameters_rejects_wrong_length():
    net = Network([2, 2, 1], seed=0)
    before = net.get_parameters()
    with pytest.raises(DimensionMismatch):
        net.set_parameters(np.zeros(before.size - 1))
    with pytest.raises(DimensionMismatch):
        net.set_parameters(np.zeros(before.size + 1))
    with pytest.raises(DimensionMismatch):
        net.set_parameters(np.zeros((1, before.size)))
    assert np.array_equal(net.get_parameters(), before)


def test_get_parameters_returns_a_copy():
    net = Network([2, 1], seed=0)
    flat = net.get_parameters()
    flat[:] = 0.0
    assert not np.allclose(net.get_parameters(), 0.0)


def test_seeded_networks_are_reproducible_and_copyable():
    a = Network([2, 3, 1], seed=9)
    b = Network([2, 3, 1], seed=9)
    assert np.array_equal(a.get_parameters(), b.get_parameters())
    clone = a.copy()
    clone.set_parameters(np.zeros(clone.parameter_count()))
    assert np.array_equal(a.get_parameters(), b.get_parameters())


def test_sigmoid_is_stable_for_large_inputs():
    with np.errstate(over="raise", invalid="raise", divide="raise"):
        values = sigmoid(np.array([-1000.0, 0.0, 1000.0]))
    assert np.allclose(values, [0.0, 0.5, 1.0])
    assert np.allclose(sigmoid_deriv_from_output(np.array([0.5])), [0.25])
