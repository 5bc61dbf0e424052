"""Rprop training, sessions and run pipelines."""

from .rprop import RpropConfig, Trainer
from .session import TrainingSession, TrainingStatus

__all__ = ["RpropConfig", "Trainer", "TrainingSession", "TrainingStatus"]
