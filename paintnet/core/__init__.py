"""Core numerical primitives for PaintNet."""

from . import activations, errors, network, types

__all__ = ["activations", "errors", "network", "types"]
