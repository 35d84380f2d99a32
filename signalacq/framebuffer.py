"""Abstract interfaces for sample frame buffers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class Range:
    """A closed interval of sample values."""

    start: float
    end: float


class FrameBuffer(ABC):
    """Base class for all frame buffers."""

    @abstractmethod
    def size(self) -> int:
        """Return the number of samples in the buffer."""

    @abstractmethod
    def sample(self, i: int) -> float:
        """Return the sample at index ``i``."""

    @abstractmethod
    def limits(self) -> Range:
        """Return the minimum and maximum of the buffer values."""

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[float]:
        for i in range(self.size()):
            yield self.sample(i)


class ResizableBuffer(FrameBuffer):
    """Common base for index and writable frame buffers."""

    @abstractmethod
    def resize(self, n: int) -> None:
        """Resize the buffer to ``n`` samples.

        Resizing to the current size is an error.
        """


class WFrameBuffer(ResizableBuffer):
    """Base class for writable frame buffers."""

    @abstractmethod
    def add_samples(self, samples: Iterable[float]) -> None:
        """Append samples to the buffer."""

    @abstractmethod
    def clear(self) -> None:
        """Reset all data to 0."""


class XFrameBuffer(ResizableBuffer):
    """Base class for X buffers, whose values never decrease."""

    OUT_OF_RANGE = -1

    @abstractmethod
    def find_index(self, value: float) -> int:
        """Return the index for ``value``.

        Values above the maximum or below the minimum give
        ``OUT_OF_RANGE``; a value between two samples gives the smaller
        index, not the closer one.
        """