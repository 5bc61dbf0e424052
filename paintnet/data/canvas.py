"""Two-colour painting surface."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence, Tuple

import numpy as np

from ..core.types import Array

Color = Tuple[int, int, int]

YES_COLOR: Color = (144, 238, 144)  # LightGreen
NO_COLOR: Color = (250, 128, 114)  # Salmon
SAMPLE_COLOR: Color = (0, 0, 255)  # Blue

DEFAULT_BRUSH_SIZE = 25


@dataclass(eq=False)
class Canvas:
    """Boolean bitmap; ``True`` pixels carry the "yes" label (1.0).

    ``mask`` is indexed ``[y, x]``.  A new canvas is filled with ``fill``.
    """

    width: int
    height: int
    fill: bool = True
    mask: Array = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Canvas must be at least 1x1, got {self.width}x{self.height}")
        self.width = int(self.width)
        self.height = int(self.height)
        self.mask = np.full((self.height, self.width), bool(self.fill), dtype=bool)

    @classmethod
    def from_mask(cls, mask: Array) -> "Canvas":
        mask = np.asarray(mask, dtype=bool)
        if mask.ndim != 2:
            raise ValueError(f"Mask must be two dimensional, got shape {mask.shape}")
        canvas = cls(width=mask.shape[1], height=mask.shape[0])
        canvas.mask = mask.copy()
        return canvas

    @classmethod
    def from_image(
        cls,
        path: str | Path,
        yes_color: Color = YES_COLOR,
        tolerance: int = 1,
    ) -> "Canvas":
        """Load a painted image; pixels within ``tolerance`` of ``yes_color`` are "yes"."""

        import matplotlib.image as mpimg

        rgb = _to_uint8_rgb(mpimg.imread(str(path)))
        return cls.from_mask(color_matches(rgb, yes_color, tolerance))

    def clear(self, value: bool = True) -> None:
        self.mask[:, :] = bool(value)

    def paint(
        self,
        x: int,
        y: int,
        value: bool = True,
        brush_size: int = DEFAULT_BRUSH_SIZE,
    ) -> None:
        """Fill a round brush of diameter ``brush_size`` centred on ``(x, y)``."""

        radius = brush_size / 2.0
        ys, xs = np.ogrid[: self.height, : self.width]
        inside = (xs - x) ** 2 + (ys - y) ** 2 <= radius**2
        self.mask[inside] = bool(value)

    def erase(self, x: int, y: int, brush_size: int = DEFAULT_BRUSH_SIZE) -> None:
        self.paint(x, y, value=False, brush_size=brush_size)

    def stroke(
        self,
        points: Iterable[Tuple[int, int]],
        value: bool = True,
        brush_size: int = DEFAULT_BRUSH_SIZE,
    ) -> None:
        for x, y in points:
            self.paint(x, y, value=value, brush_size=brush_size)

    def labels_at(self, points: Array) -> Array:
        """Return 1.0/0.0 labels for integer ``(x, y)`` rows in ``points``."""

        pts = np.asarray(points, dtype=np.int64).reshape(-1, 2)
        return self.mask[pts[:, 1], pts[:, 0]].astype(np.float64)

    def to_rgb(self, yes_color: Color = YES_COLOR, no_color: Color = NO_COLOR) -> Array:
        rgb = np.empty((self.height, self.width, 3), dtype=np.uint8)
        rgb[self.mask] = yes_color
        rgb[~self.mask] = no_color
        return rgb


def color_matches(rgb: Array, color: Sequence[int], tolerance: int = 1) -> Array:
    """Per-pixel test that every channel is within ``tolerance`` of ``color``."""

    diff = np.abs(rgb[..., :3].astype(np.int16) - np.asarray(color, dtype=np.int16))
    return np.max(diff, axis=-1) <= tolerance


def _to_uint8_rgb(image: Array) -> Array:
    arr = np.asarray(image)
    if arr.ndim == 2:
        arr = np.stack([arr] * 3, axis=-1)
    arr = arr[..., :3]
    if np.issubdtype(arr.dtype, np.floating):
        arr = np.clip(np.rint(arr * 255.0), 0, 255)
    return arr.astype(np.uint8)


__all__ = [
    "Canvas",
    "Color",
    "DEFAULT_BRUSH_SIZE",
    "NO_COLOR",
    "SAMPLE_COLOR",
    "YES_COLOR",
    "color_matches",
]
