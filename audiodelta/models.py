"""
audiodelta.models - Signal container, growable sample buffer, channel selector.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np

from audiodelta.exceptions import ArgumentsInvalidError, NotEnoughMemoryError

INITIAL_CAPACITY = 1024


class Channel(IntEnum):
    """Which input channel is routed to the mono output."""

    FIRST = 0
    SECOND = 1


@dataclass(frozen=True)
class Signal:
    """Mono double-precision samples at a fixed sample rate.

    The samples are copied into a read-only array on construction, so
    length and rate stay consistent for the lifetime of the object.
    """

    samples: np.ndarray = field(repr=False)
    sample_rate: int

    def __post_init__(self) -> None:
        if self.sample_rate <= 0:
            raise ArgumentsInvalidError(f"sample rate must be positive, got {self.sample_rate}")
        samples = np.array(self.samples, dtype=np.float64)
        if samples.ndim != 1:
            raise ArgumentsInvalidError(f"signal must be one-dimensional, got shape {samples.shape}")
        samples.flags.writeable = False
        object.__setattr__(self, "samples", samples)

    @property
    def length(self) -> int:
        return int(self.samples.shape[0])

    @property
    def duration_seconds(self) -> float:
        return self.length / self.sample_rate

    def __len__(self) -> int:
        return self.length


class SampleBuffer:
    """Append-only float64 buffer with doubling capacity growth.

    Storage starts at ``initial_capacity`` samples and doubles whenever an
    append would overflow it, keeping appends amortized O(1).
    """

    def __init__(self, initial_capacity: int = INITIAL_CAPACITY) -> None:
        if initial_capacity <= 0:
            raise ArgumentsInvalidError(
                f"initial capacity must be positive, got {initial_capacity}"
            )
        self._data = self._allocate(initial_capacity)
        self._size = 0
        self.grow_count = 0

    @staticmethod
    def _allocate(capacity: int) -> np.ndarray:
        try:
            return np.empty(capacity, dtype=np.float64)
        except MemoryError as e:
            raise NotEnoughMemoryError(f"cannot allocate {capacity} samples") from e

    @property
    def capacity(self) -> int:
        return int(self._data.shape[0])

    def __len__(self) -> int:
        return self._size

    def append(self, chunk: np.ndarray) -> None:
        """Append a 1-D chunk of samples, growing storage as needed."""
        chunk = np.asarray(chunk, dtype=np.float64).ravel()
        count = chunk.shape[0]
        if count == 0:
            return

        required = self._size + count
        if required > self.capacity:
            capacity = self.capacity
            while capacity < required:
                capacity *= 2
            grown = self._allocate(capacity)
            grown[: self._size] = self._data[: self._size]
            self._data = grown
            self.grow_count += 1

        self._data[self._size : required] = chunk
        self._size = required

    def view(self) -> np.ndarray:
        """Filled portion of the buffer (no copy)."""
        return self._data[: self._size]

    def to_signal(self, sample_rate: int) -> Signal:
        """Freeze the filled samples into a Signal, trimming spare capacity."""
        return Signal(self.view(), sample_rate)
