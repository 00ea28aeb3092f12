#!/usr/bin/env python3
"""
Bounded position history for a body.

The trail is a sliding window of at most ``trace_num`` samples stored in a numpy
buffer of ``trace_num * trace_prelocate`` rows. Appending is O(1) until the
buffer fills up; then the live window is shifted back to the start of the buffer
(O(window)) and appending resumes. Renderers read ``(start, end, buffer)`` once
per frame and must treat the buffer as read-only.
"""
from typing import Tuple

import numpy as np

from .constants import TRACE_NUM, TRACE_PRELOCATE
from .errors import ConfigurationError
from .vector_utils import Vec3


class Trail:
    """Sliding window over a pre-sized sample buffer."""

    def __init__(self, first: Vec3, trace_num: int = TRACE_NUM, trace_prelocate: int = TRACE_PRELOCATE):
        if int(trace_num) != trace_num or trace_num < 1:
            raise ConfigurationError(f"trace_num must be a positive integer, got {trace_num!r}")
        if int(trace_prelocate) != trace_prelocate or trace_prelocate < 1:
            raise ConfigurationError(f"trace_prelocate must be a positive integer, got {trace_prelocate!r}")
        self.trace_num = int(trace_num)
        self.trace_prelocate = int(trace_prelocate)
        self._buffer = np.zeros((self.trace_num * self.trace_prelocate, 3), dtype=float)
        self._start = 0
        self._end = 0
        self.reset(first)

    def __len__(self) -> int:
        return self._end - self._start

    @property
    def capacity(self) -> int:
        return self._buffer.shape[0]

    def reset(self, first: Vec3) -> None:
        """Drop all history and seed the window with a single sample."""
        self._start = 0
        self._end = 0
        self.append(first)

    def append(self, point: Vec3) -> None:
        if self._end == self.capacity:
            self._compact()
        self._buffer[self._end] = point
        self._end += 1
        if self._end - self._start > self.trace_num:
            self._start = self._end - self.trace_num

    def _compact(self) -> None:
        # Keep room for the incoming sample so the window stays within trace_num.
        keep = min(self._end - self._start, self.trace_num - 1)
        if keep:
            self._buffer[:keep] = self._buffer[self._end - keep:self._end]
        self._start = 0
        self._end = keep

    def window(self) -> Tuple[int, int, np.ndarray]:
        """Return (start, end, buffer); buffer[start:end] is the live history, oldest first."""
        view = self._buffer.view()
        view.flags.writeable = False
        return self._start, self._end, view

    def points(self) -> np.ndarray:
        """Copy of the live samples, shape (len(self), 3)."""
        return self._buffer[self._start:self._end].copy()

    def latest(self) -> Vec3:
        x, y, z = self._buffer[self._end - 1]
        return Vec3(float(x), float(y), float(z))
