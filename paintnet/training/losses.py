"""Loss used by the Rprop trainer."""

from __future__ import annotations

import numpy as np

from ..core.types import Array


def mse(pred: Array, target: Array) -> tuple[float, Array]:
    """Return the mean squared error and the raw output error ``pred - target``.

    The mean runs over every sample and every output unit.
    """

    diff = pred - target
    loss = float(np.mean(np.square(diff)))
    return loss, diff


__all__ = ["mse"]
