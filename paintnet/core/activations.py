"""Activation utilities for PaintNet."""

from __future__ import annotations

import numpy as np

from .types import Array


def sigmoid(x: Array) -> Array:
    """Return the logistic sigmoid ``1 / (1 + exp(-x))``."""

    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(-np.asarray(x, dtype=np.float64)))


def sigmoid_deriv_from_output(y: Array) -> Array:
    """Derivative of the sigmoid expressed through its output ``y = sigmoid(z)``."""

    return y * (1.0 - y)
