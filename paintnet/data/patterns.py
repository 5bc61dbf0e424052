"""Registry of procedurally painted canvases."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterable, MutableMapping

import numpy as np

from .canvas import YES_COLOR, Canvas

PatternFactory = Callable[..., Canvas]

_REGISTRY: MutableMapping[str, PatternFactory] = {}


def register_pattern(
    name: str | None = None,
    factory: PatternFactory | None = None,
) -> Callable[[PatternFactory], PatternFactory] | PatternFactory:
    """Register a pattern factory, either directly or as a decorator::

        @register_pattern("rings")
        def _rings(width, height, **options):
            ...
    """

    def _decorator(func: PatternFactory) -> PatternFactory:
        _REGISTRY[str(name or func.__name__)] = func
        return func

    if factory is not None:
        return _decorator(factory)
    if name is None:
        raise TypeError("register_pattern requires a name when used without a decorator")
    return _decorator


def get_pattern(name: str, /, width: int = 200, height: int = 200, **options: Any) -> Canvas:
    """Build the canvas registered under ``name``."""

    if name not in _REGISTRY:
        available = ", ".join(available_patterns())
        raise KeyError(f"Unknown pattern {name!r}. Available patterns: {available}")
    return _REGISTRY[name](width=int(width), height=int(height), **options)


def available_patterns() -> Iterable[str]:
    return sorted(_REGISTRY)


def _coords(width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    ys, xs = np.mgrid[:height, :width]
    return xs / width, ys / height


@register_pattern("blank")
def _blank(width: int, height: int, value: bool = True, **_: object) -> Canvas:
    return Canvas(width, height, fill=bool(value))


@register_pattern("xor")
def _xor(width: int, height: int, **_: object) -> Canvas:
    x, y = _coords(width, height)
    return Canvas.from_mask((x >= 0.5) != (y >= 0.5))


@register_pattern("circle")
def _circle(
    width: int,
    height: int,
    radius: float = 0.3,
    cx: float = 0.5,
    cy: float = 0.5,
    **_: object,
) -> Canvas:
    x, y = _coords(width, height)
    return Canvas.from_mask((x - cx) ** 2 + (y - cy) ** 2 <= radius**2)


@register_pattern("stripes")
def _stripes(width: int, height: int, bands: int = 3, **_: object) -> Canvas:
    x, _y = _coords(width, height)
    return Canvas.from_mask(np.floor(x * bands).astype(int) % 2 == 0)


@register_pattern("checker")
def _checker(width: int, height: int, cells: int = 2, **_: object) -> Canvas:
    x, y = _coords(width, height)
    cx = np.floor(x * cells).astype(int)
    cy = np.floor(y * cells).astype(int)
    return Canvas.from_mask((cx + cy) % 2 == 1)


@register_pattern("image")
def _image(
    width: int,
    height: int,
    path: str | Path | None = None,
    yes_color: tuple[int, int, int] = YES_COLOR,
    tolerance: int = 1,
    **_: object,
) -> Canvas:
    if path is None:
        raise ValueError("The image pattern requires a `path` option")
    return Canvas.from_image(path, yes_color=tuple(yes_color), tolerance=int(tolerance))


__all__ = ["available_patterns", "get_pattern", "register_pattern"]
