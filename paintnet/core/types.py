"""Core typing contracts for PaintNet."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from .errors import DimensionMismatch

Array = np.ndarray


def _as_rows(values: object, name: str) -> Array:
    try:
        arr = np.array(values, dtype=np.float64)
    except ValueError as exc:
        raise DimensionMismatch(f"{name} rows must all have the same length") from exc
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise DimensionMismatch(f"{name} must be a sequence of vectors, got shape {arr.shape}")
    return arr


@dataclass(frozen=True)
class SampleSet:
    """A labelled training set: one row per sample."""

    inputs: Array
    targets: Array

    def __post_init__(self) -> None:
        inputs = _as_rows(self.inputs, "inputs")
        targets = _as_rows(self.targets, "targets")
        if inputs.shape[0] != targets.shape[0]:
            raise DimensionMismatch(
                f"{inputs.shape[0]} input rows but {targets.shape[0]} target rows"
            )
        if inputs.shape[0] == 0:
            raise DimensionMismatch("Sample set must not be empty")
        object.__setattr__(self, "inputs", inputs)
        object.__setattr__(self, "targets", targets)

    def __len__(self) -> int:
        return int(self.inputs.shape[0])

    @property
    def d_in(self) -> int:
        return int(self.inputs.shape[1])

    @property
    def d_out(self) -> int:
        return int(self.targets.shape[1])


@dataclass(frozen=True)
class ModelDescription:
    """Description of the feed-forward network architecture."""

    layer_dims: List[int]


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :func:`paintnet.training.pipelines.run_pipeline`."""

    iterations: int
    error: float
    metrics_path: str
    manifest_path: str
    summary_path: str = ""
    image_path: str = ""
