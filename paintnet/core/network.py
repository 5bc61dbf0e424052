"""Sigmoid multilayer perceptron with a fixed topology and mutable parameters."""

from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from typing import List, MutableSequence, Sequence, Tuple

import numpy as np

from .activations import sigmoid
from .errors import DimensionMismatch, InvalidTopology
from .types import Array, ModelDescription


def _validate_layer_sizes(layer_sizes: Sequence[int]) -> Tuple[int, ...]:
    try:
        sizes = list(layer_sizes)
    except TypeError as exc:
        raise InvalidTopology(f"Layer sizes must be a sequence, got {layer_sizes!r}") from exc
    if len(sizes) < 2:
        raise InvalidTopology(
            f"A network needs at least an input and an output layer, got {sizes}"
        )
    for size in sizes:
        if isinstance(size, bool) or not isinstance(size, numbers.Integral):
            raise InvalidTopology(f"Layer sizes must be integers, got {size!r}")
        if size < 1:
            raise InvalidTopology(f"Layer sizes must be >= 1, got {sizes}")
    return tuple(int(size) for size in sizes)


@dataclass(eq=False)
class Network:
    """Fully connected feed-forward network with sigmoid units.

    ``weights[l]`` has shape ``(layer_sizes[l + 1], layer_sizes[l])`` and
    ``biases[l]`` has length ``layer_sizes[l + 1]``.  The topology is fixed at
    construction; parameters are updated in place by the trainer.
    """

    layer_sizes: Sequence[int]
    seed: int | None = None
    init_range: float = 1.0
    weights: MutableSequence[Array] = field(init=False, repr=False)
    biases: MutableSequence[Array] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.layer_sizes = _validate_layer_sizes(self.layer_sizes)
        self.reset(self.seed)

    def reset(self, seed: int | None = None) -> None:
        """Draw fresh parameters uniformly from ``[-init_range, init_range]``."""

        rng = np.random.default_rng(seed)
        limit = float(self.init_range)
        weights: list[Array] = []
        biases: list[Array] = []
        for in_dim, out_dim in zip(self.layer_sizes[:-1], self.layer_sizes[1:]):
            weights.append(rng.uniform(-limit, limit, size=(out_dim, in_dim)))
            biases.append(rng.uniform(-limit, limit, size=out_dim))
        self.weights = weights
        self.biases = biases

    def describe(self) -> ModelDescription:
        return ModelDescription(layer_dims=list(self.layer_sizes))

    @property
    def d_in(self) -> int:
        return self.layer_sizes[0]

    @property
    def d_out(self) -> int:
        return self.layer_sizes[-1]

    def propagate(self, inputs: Sequence[float]) -> Array:
        """Evaluate the network for a single input vector."""

        x = np.asarray(inputs, dtype=np.float64)
        if x.ndim != 1 or x.shape[0] != self.d_in:
            raise DimensionMismatch(
                f"Expected an input vector of length {self.d_in}, got shape {x.shape}"
            )
        for W, b in zip(self.weights, self.biases):
            x = sigmoid(W @ x + b)
        return x

    def forward(self, inputs: Array) -> List[Array]:
        """Evaluate an ``(N, d_in)`` batch and return every layer's activations.

        The first entry is the input batch itself, the last one the network
        output of shape ``(N, d_out)``.
        """

        x = np.asarray(inputs, dtype=np.float64)
        if x.ndim != 2 or x.shape[1] != self.d_in:
            raise DimensionMismatch(
                f"Expected a batch of shape (N, {self.d_in}), got {x.shape}"
            )
        activations = [x]
        for W, b in zip(self.weights, self.biases):
            x = sigmoid(x @ W.T + b)
            activations.append(x)
        return activations

    def predict(self, inputs: Array) -> Array:
        return self.forward(inputs)[-1]

    def parameter_count(self) -> int:
        return int(sum(W.size + b.size for W, b in zip(self.weights, self.biases)))

    def get_parameters(self) -> Array:
        """Return ``W0, b0, W1, b1, ...`` flattened into one new vector."""

        parts: list[Array] = []
        for W, b in zip(self.weights, self.biases):
            parts.append(W.ravel())
            parts.append(b.ravel())
        return np.concatenate(parts)

    def set_parameters(self, flat: Sequence[float]) -> None:
        """Load parameters from a vector laid out as by :meth:`get_parameters`."""

        vector = np.asarray(flat, dtype=np.float64)
        expected = self.parameter_count()
        if vector.ndim != 1 or vector.shape[0] != expected:
            raise DimensionMismatch(
                f"Expected a flat vector of {expected} parameters, got shape {vector.shape}"
            )
        offset = 0
        for idx, (W, b) in enumerate(zip(self.weights, self.biases)):
            self.weights[idx] = vector[offset : offset + W.size].reshape(W.shape).copy()
            offset += W.size
            self.biases[idx] = vector[offset : offset + b.size].copy()
            offset += b.size

    def all_finite(self) -> bool:
        return all(
            bool(np.all(np.isfinite(W))) and bool(np.all(np.isfinite(b)))
            for W, b in zip(self.weights, self.biases)
        )

    def copy(self) -> "Network":
        clone = Network(self.layer_sizes, seed=self.seed, init_range=self.init_range)
        clone.set_parameters(self.get_parameters())
        return clone


__all__ = ["Network"]
