"""PaintNet public API."""

from .core import activations  # noqa: F401
from .core import types  # noqa: F401
from .core.errors import (
    DimensionMismatch,
    InvalidTopology,
    NotReady,
    NumericDivergence,
    PaintNetError,
)
from .core.network import Network
from .core.types import SampleSet
from .data import Canvas, Topology, build_samples, get_pattern
from .training.pipelines import load_preset, presets, run_pipeline
from .training.rprop import RpropConfig, Trainer
from .training.session import TrainingSession

__all__ = [
    "Canvas",
    "DimensionMismatch",
    "InvalidTopology",
    "Network",
    "NotReady",
    "NumericDivergence",
    "PaintNetError",
    "RpropConfig",
    "SampleSet",
    "Topology",
    "Trainer",
    "TrainingSession",
    "activations",
    "build_samples",
    "get_pattern",
    "load_preset",
    "presets",
    "run_pipeline",
    "types",
]
