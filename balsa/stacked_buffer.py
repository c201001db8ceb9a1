"""A flat buffer holding a sequence of variable-length spans."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import chain
from typing import Iterable, Iterator

import numpy as np

__all__ = [
    "StackedContiguousBuffer",
    "container_of_containers_to_stacked_contiguous_buffer",
]


@dataclass(eq=False)
class StackedContiguousBuffer:
    """Spans stored back to back in ``buffer``; span ``i`` is
    ``buffer[offsets[i]:offsets[i + 1]]``."""

    buffer: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=int))
    offsets: np.ndarray = field(default_factory=lambda: np.zeros(1, dtype=int))

    def __post_init__(self) -> None:
        self.buffer = np.asarray(self.buffer).reshape(-1)
        self.offsets = np.asarray(self.offsets, dtype=int).reshape(-1)
        if self.offsets.size == 0:
            raise ValueError("offsets must hold at least one entry")

    def span_count(self) -> int:
        return int(self.offsets.size) - 1

    def get_span_offsets(self, index: int) -> np.ndarray:
        """The start and end offsets of span ``index``."""
        if not 0 <= index < self.span_count():
            raise IndexError(f"span index {index} out of range for {self.span_count()} spans")
        return self.offsets[index : index + 2]

    def get_span(self, index: int) -> np.ndarray:
        start, end = self.get_span_offsets(index)
        return self.buffer[start:end]

    def __len__(self) -> int:
        return self.span_count()

    def __iter__(self) -> Iterator[np.ndarray]:
        for index in range(self.span_count()):
            yield self.get_span(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StackedContiguousBuffer):
            return NotImplemented
        return np.array_equal(self.offsets, other.offsets) and np.array_equal(
            self.buffer, other.buffer
        )

    __hash__ = None  # type: ignore[assignment]


def container_of_containers_to_stacked_contiguous_buffer(
    container: Iterable[Iterable[int]],
) -> StackedContiguousBuffer:
    """Pack a sequence of integer sequences into one stacked buffer."""
    items = [list(inner) for inner in container]
    offsets = np.concatenate(([0], np.cumsum([len(inner) for inner in items], dtype=int)))
    buffer = np.fromiter(chain.from_iterable(items), dtype=int, count=int(offsets[-1]))
    return StackedContiguousBuffer(buffer=buffer, offsets=offsets)