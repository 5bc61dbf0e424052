"""Explicit fresh-or-continue training state for the painting demo."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..core.errors import NotReady
from ..core.network import Network
from ..core.types import SampleSet
from ..data.topology import Topology
from .rprop import RpropConfig, Trainer


@dataclass(frozen=True)
class TrainingStatus:
    """What the status display shows after a training call."""

    iteration: int
    error: float

    @property
    def error_percent(self) -> float:
        return self.error * 100.0


class TrainingSession:
    """Own at most one ``(Network, Trainer)`` pair.

    Any edit that invalidates the trained network (painting, topology or grid
    changes) calls :meth:`mark_modified`; the next :meth:`train` call then
    starts from a freshly initialised network instead of continuing.
    """

    def __init__(
        self,
        hidden_layers: Sequence[int] | Topology = (),
        rprop: RpropConfig | None = None,
        seed: int | None = None,
        callbacks: Sequence[object] | None = None,
    ) -> None:
        self.topology = (
            hidden_layers if isinstance(hidden_layers, Topology) else Topology(list(hidden_layers))
        )
        self.rprop = rprop or RpropConfig()
        self.seed = seed
        self.callbacks = list(callbacks or [])
        self.network: Network | None = None
        self.trainer: Trainer | None = None
        self.modified = True
        self._resets = 0

    def mark_modified(self) -> None:
        self.modified = True

    def set_hidden_layers(self, hidden_layers: Sequence[int]) -> None:
        self.topology = Topology(list(hidden_layers))
        self.mark_modified()

    def train(self, samples: SampleSet, iterations: int = 1) -> TrainingStatus:
        """Run ``iterations`` Rprop steps, resetting first when modified."""

        if self.modified or self.trainer is None:
            self._reset(samples)
        self.trainer.step(iterations)
        return self.status()

    def status(self) -> TrainingStatus:
        if self.trainer is None:
            raise NotReady("No training has happened in this session yet")
        return TrainingStatus(iteration=self.trainer.iteration, error=self.trainer.error)

    def _reset(self, samples: SampleSet) -> None:
        sizes = self.topology.layer_sizes(samples.d_in, samples.d_out)
        seed = None if self.seed is None else self.seed + self._resets
        network = Network(sizes, seed=seed)
        trainer = Trainer(
            network,
            samples.inputs,
            samples.targets,
            config=self.rprop,
            callbacks=self.callbacks,
        )
        self.network = network
        self.trainer = trainer
        self.modified = False
        self._resets += 1


__all__ = ["TrainingSession", "TrainingStatus"]
