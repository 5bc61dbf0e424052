"""Regular sample grid used to turn a canvas into training data."""

from __future__ import annotations

import math

import numpy as np

from ..core.types import Array, SampleSet
from .canvas import Canvas

DEFAULT_GRANULARITY = 25


def sample_points(width: int, height: int, granularity: int = DEFAULT_GRANULARITY) -> Array:
    """Return integer ``(x, y)`` grid points spaced ``granularity`` pixels apart.

    Points are ordered x-major: all rows of the first column, then the next
    column, and so on.
    """

    if granularity < 1:
        raise ValueError(f"granularity must be >= 1, got {granularity}")
    xs = np.arange(math.ceil(width / granularity)) * granularity
    ys = np.arange(math.ceil(height / granularity)) * granularity
    grid_x, grid_y = np.meshgrid(xs, ys, indexing="ij")
    return np.stack([grid_x.ravel(), grid_y.ravel()], axis=1).astype(np.int64)


def normalise(points: Array, width: int, height: int) -> Array:
    """Scale pixel coordinates into ``[0, 1)`` network inputs."""

    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    return pts / np.array([width, height], dtype=np.float64)


def build_samples(canvas: Canvas, granularity: int = DEFAULT_GRANULARITY) -> SampleSet:
    """Sample ``canvas`` on the grid and return normalised inputs with labels."""

    points = sample_points(canvas.width, canvas.height, granularity)
    inputs = normalise(points, canvas.width, canvas.height)
    targets = canvas.labels_at(points).reshape(-1, 1)
    return SampleSet(inputs=inputs, targets=targets)


__all__ = ["DEFAULT_GRANULARITY", "build_samples", "normalise", "sample_points"]
