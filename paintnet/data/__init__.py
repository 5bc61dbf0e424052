"""Painting surface, sample grid and pattern registry."""

from .canvas import NO_COLOR, SAMPLE_COLOR, YES_COLOR, Canvas
from .grid import build_samples, sample_points
from .patterns import available_patterns, get_pattern, register_pattern
from .topology import Topology

__all__ = [
    "Canvas",
    "NO_COLOR",
    "SAMPLE_COLOR",
    "YES_COLOR",
    "Topology",
    "available_patterns",
    "build_samples",
    "get_pattern",
    "register_pattern",
    "sample_points",
]
