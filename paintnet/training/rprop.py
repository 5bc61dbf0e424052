"""Full-batch resilient backpropagation (Rprop) for :class:`Network`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..core.activations import sigmoid_deriv_from_output
from ..core.errors import DimensionMismatch, NotReady, NumericDivergence
from ..core.network import Network
from ..core.types import Array, SampleSet
from .losses import mse


@dataclass(frozen=True)
class RpropConfig:
    """Rprop hyperparameters; defaults are the usual Rprop constants."""

    initial_step: float = 0.1
    increase: float = 1.2
    decrease: float = 0.5
    max_step: float = 50.0
    min_step: float = 1e-6
    check_finite: bool = True

    def __post_init__(self) -> None:
        if self.initial_step <= 0:
            raise ValueError("initial_step must be positive")
        if self.increase <= 1.0:
            raise ValueError("increase must be > 1")
        if not 0.0 < self.decrease < 1.0:
            raise ValueError("decrease must lie in (0, 1)")
        if not 0.0 < self.min_step <= self.max_step:
            raise ValueError("require 0 < min_step <= max_step")


class Trainer:
    """Train a :class:`Network` on a fixed sample set with Rprop.

    A trainer built without ``network``/``inputs``/``targets`` is
    uninitialised and refuses to :meth:`step` until :meth:`initialize` has
    been called.  Callbacks exposing ``on_step(iteration, metrics)`` receive
    the pre-update loss of every repetition.
    """

    def __init__(
        self,
        network: Network | None = None,
        inputs: Array | Sequence[Sequence[float]] | None = None,
        targets: Array | Sequence[Sequence[float]] | None = None,
        config: RpropConfig | None = None,
        callbacks: Sequence[object] | None = None,
    ) -> None:
        self.config = config or RpropConfig()
        self.callbacks = list(callbacks or [])
        self.network: Network | None = None
        self.samples: SampleSet | None = None
        self.iteration = 0
        self._error = 0.0
        self._step_sizes: Array | None = None
        self._prev_gradient: Array | None = None
        if network is not None or inputs is not None or targets is not None:
            if network is None or inputs is None or targets is None:
                raise TypeError("network, inputs and targets must be given together")
            self.initialize(network, inputs, targets)

    # ------------------------------------------------------------------
    # Lifecycle

    @property
    def ready(self) -> bool:
        return self.network is not None

    def initialize(
        self,
        network: Network,
        inputs: Array | Sequence[Sequence[float]],
        targets: Array | Sequence[Sequence[float]],
    ) -> None:
        """Bind ``network`` and a copy of the sample set and reset Rprop state."""

        samples = SampleSet(inputs, targets)
        if samples.d_in != network.d_in:
            raise DimensionMismatch(
                f"Samples have {samples.d_in} inputs but the network expects {network.d_in}"
            )
        if samples.d_out != network.d_out:
            raise DimensionMismatch(
                f"Samples have {samples.d_out} targets but the network produces {network.d_out}"
            )
        if not (np.all(np.isfinite(samples.inputs)) and np.all(np.isfinite(samples.targets))):
            raise ValueError("Sample values must be finite")

        count = network.parameter_count()
        self.network = network
        self.samples = samples
        self.iteration = 0
        self._step_sizes = np.full(count, self.config.initial_step, dtype=np.float64)
        self._prev_gradient = np.zeros(count, dtype=np.float64)
        self._error = self._mean_squared_error()

    # ------------------------------------------------------------------
    # Public API

    @property
    def error(self) -> float:
        """Mean squared error over the sample set after the last :meth:`step`."""

        self._require_ready()
        return self._error

    @property
    def error_percent(self) -> float:
        return self.error * 100.0

    def step(self, n: int = 1) -> float:
        """Run ``n`` full-batch Rprop iterations and return the new error."""

        self._require_ready()
        if n < 1:
            raise ValueError(f"step count must be >= 1, got {n}")
        for _ in range(n):
            loss, gradient = self._gradient()
            self._rprop_update(gradient)
            self.iteration += 1
            if self.config.check_finite and not self.network.all_finite():
                raise NumericDivergence(
                    f"Non-finite parameter after iteration {self.iteration}"
                )
            self._emit_step({"loss": loss})
        self._error = self._mean_squared_error()
        return self._error

    def predict(self) -> Array:
        """Network outputs for every training input."""

        self._require_ready()
        return self.network.predict(self.samples.inputs)

    def accuracy(self) -> float:
        """Fraction of samples whose thresholded outputs all match the targets."""

        preds = self.predict() >= 0.5
        labels = self.samples.targets >= 0.5
        return float(np.mean(np.all(preds == labels, axis=1)))

    # ------------------------------------------------------------------
    # Internal helpers

    def _require_ready(self) -> None:
        if self.network is None:
            raise NotReady("Trainer has no network or samples; call initialize() first")

    def _mean_squared_error(self) -> float:
        loss, _ = mse(self.network.predict(self.samples.inputs), self.samples.targets)
        return loss

    def _gradient(self) -> tuple[float, Array]:
        network = self.network
        activations = network.forward(self.samples.inputs)
        loss, diff = mse(activations[-1], self.samples.targets)
        batch = diff.shape[0]

        delta = diff * sigmoid_deriv_from_output(activations[-1])
        grads_w: list[Array] = [None] * len(network.weights)
        grads_b: list[Array] = [None] * len(network.weights)
        for idx in reversed(range(len(network.weights))):
            grads_w[idx] = delta.T @ activations[idx] / batch
            grads_b[idx] = delta.sum(axis=0) / batch
            if idx > 0:
                delta = (delta @ network.weights[idx]) * sigmoid_deriv_from_output(
                    activations[idx]
                )

        parts: list[Array] = []
        for gW, gb in zip(grads_w, grads_b):
            parts.append(gW.ravel())
            parts.append(gb.ravel())
        return loss, np.concatenate(parts)

    def _rprop_update(self, gradient: Array) -> None:
        cfg = self.config
        sign_change = np.sign(gradient * self._prev_gradient)
        grow = sign_change > 0
        shrink = sign_change < 0

        steps = self._step_sizes
        steps[grow] = np.minimum(steps[grow] * cfg.increase, cfg.max_step)
        steps[shrink] = np.maximum(steps[shrink] * cfg.decrease, cfg.min_step)

        gradient = np.where(shrink, 0.0, gradient)
        params = self.network.get_parameters()
        params -= np.sign(gradient) * steps
        self.network.set_parameters(params)
        self._prev_gradient = gradient

    def _emit_step(self, metrics: dict) -> None:
        for callback in self.callbacks:
            if hasattr(callback, "on_step"):
                callback.on_step(self.iteration, metrics)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(self.iteration, metrics)


__all__ = ["RpropConfig", "Trainer"]
