"""Editable list of hidden layer widths."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List

from ..core.errors import InvalidTopology


@dataclass
class Topology:
    """Ordered hidden layer widths with list-box style edit operations.

    Widths never drop below 1.  Moving the first layer up or the last layer
    down is a no-op.
    """

    hidden: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.hidden = [_check_width(size) for size in self.hidden]

    @classmethod
    def parse(cls, text: str) -> "Topology":
        """Parse ``"4,4"`` style text; an empty string means no hidden layers."""

        parts = [part.strip() for part in text.split(",") if part.strip()]
        try:
            return cls([int(part) for part in parts])
        except ValueError as exc:
            raise InvalidTopology(f"Cannot parse hidden layers from {text!r}") from exc

    @property
    def hidden_layers(self) -> List[int]:
        return list(self.hidden)

    def layer_sizes(self, d_in: int = 2, d_out: int = 1) -> List[int]:
        return [int(d_in), *self.hidden, int(d_out)]

    def add(self, size: int = 1) -> None:
        self.hidden.append(_check_width(size))

    def remove(self, index: int) -> None:
        del self.hidden[index]

    def move_up(self, index: int) -> int:
        if index <= 0:
            return index
        self.hidden[index - 1], self.hidden[index] = self.hidden[index], self.hidden[index - 1]
        return index - 1

    def move_down(self, index: int) -> int:
        if index >= len(self.hidden) - 1:
            return index
        self.hidden[index + 1], self.hidden[index] = self.hidden[index], self.hidden[index + 1]
        return index + 1

    def increment(self, index: int) -> None:
        self.hidden[index] += 1

    def decrement(self, index: int) -> None:
        self.hidden[index] = max(1, self.hidden[index] - 1)

    def set(self, index: int, size: int) -> None:
        self.hidden[index] = max(1, int(size))

    def __iter__(self) -> Iterator[int]:
        return iter(self.hidden)

    def __len__(self) -> int:
        return len(self.hidden)


def _check_width(size: int) -> int:
    if isinstance(size, bool) or int(size) != size or size < 1:
        raise InvalidTopology(f"Hidden layer widths must be positive integers, got {size!r}")
    return int(size)


__all__ = ["Topology"]
