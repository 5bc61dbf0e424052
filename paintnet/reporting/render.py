"""Render a trained network as a two-colour image."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np

from ..core.network import Network
from ..core.types import Array
from ..data.canvas import NO_COLOR, SAMPLE_COLOR, YES_COLOR, Color


def render_field(network: Network, width: int, height: int, output: int = 0) -> Array:
    """Evaluate ``network`` at ``(x / width, y / height)`` for every pixel.

    Returns a ``(height, width)`` array holding output unit ``output``.
    """

    ys, xs = np.mgrid[:height, :width]
    coords = np.stack([xs.ravel() / width, ys.ravel() / height], axis=1)
    values = network.predict(coords)[:, output]
    return values.reshape(height, width)


def blend(field: Array, yes_color: Color = YES_COLOR, no_color: Color = NO_COLOR) -> Array:
    """Linearly mix two colours per pixel; 1.0 gives ``yes_color``."""

    amount = np.clip(np.asarray(field, dtype=np.float64), 0.0, 1.0)[..., None]
    yes = np.asarray(yes_color, dtype=np.float64)
    no = np.asarray(no_color, dtype=np.float64)
    return (yes * amount + no * (1.0 - amount)).astype(np.uint8)


def overlay_samples(
    rgb: Array,
    points: Array,
    size: int = 4,
    color: Color = SAMPLE_COLOR,
) -> Array:
    """Return a copy of ``rgb`` with a dot drawn at every ``(x, y)`` sample point."""

    out = np.array(rgb, copy=True)
    height, width = out.shape[:2]
    ys, xs = np.ogrid[:height, :width]
    radius = size / 2.0
    for x, y in np.asarray(points, dtype=np.int64).reshape(-1, 2):
        out[(xs - x) ** 2 + (ys - y) ** 2 <= radius**2] = color
    return out


def render_network(
    network: Network,
    width: int,
    height: int,
    yes_color: Color = YES_COLOR,
    no_color: Color = NO_COLOR,
) -> Array:
    return blend(render_field(network, width, height), yes_color, no_color)


def save_image(path: str | Path, rgb: Array) -> str:
    import matplotlib

    matplotlib.use("Agg", force=True)
    import matplotlib.pyplot as plt  # imported lazily for headless safety

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.imsave(path, np.asarray(rgb, dtype=np.uint8))
    return str(path)


def side_by_side(images: Sequence[Array], gap: int = 4) -> Array:
    """Join equally tall RGB images horizontally with a white gap."""

    height = images[0].shape[0]
    spacer = np.full((height, gap, 3), 255, dtype=np.uint8)
    parts: list[Array] = []
    for idx, image in enumerate(images):
        if idx:
            parts.append(spacer)
        parts.append(np.asarray(image, dtype=np.uint8))
    return np.concatenate(parts, axis=1)


def format_status(iteration: int, error: float) -> str:
    return f"Iteration {iteration} | Error: {error * 100:.2f}%"


__all__ = [
    "blend",
    "format_status",
    "overlay_samples",
    "render_field",
    "render_network",
    "save_image",
    "side_by_side",
]
