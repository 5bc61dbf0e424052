"""Error kinds raised by the PaintNet numerical core."""

from __future__ import annotations


class PaintNetError(Exception):
    """Base class for PaintNet errors."""


class InvalidTopology(PaintNetError, ValueError):
    """Raised when a layer-size sequence cannot describe a network."""


class DimensionMismatch(PaintNetError, ValueError):
    """Raised when a vector or sample set does not match the network shape."""


class NotReady(PaintNetError, RuntimeError):
    """Raised when training is requested before the trainer is initialised."""


class NumericDivergence(PaintNetError, FloatingPointError):
    """Raised when training leaves a non-finite weight or bias."""


__all__ = [
    "PaintNetError",
    "InvalidTopology",
    "DimensionMismatch",
    "NotReady",
    "NumericDivergence",
]
