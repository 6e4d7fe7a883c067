"""
Thread-safe iteration-count histogram.
"""

import threading
import numpy as np
from typing import List, Tuple
import logging

logger = logging.getLogger(__name__)


class Histogram:
    """Pixel counts per escape-iteration value, shared between workers."""

    def __init__(self, max_iter: int):
        """
        Initialize an empty histogram with buckets 0..max_iter.

        Args:
            max_iter: Largest iteration count that can be recorded
        """
        if max_iter <= 0:
            raise ValueError("max_iter must be positive")

        self.max_iter = max_iter
        self._counts = np.zeros(max_iter + 1, dtype=np.int64)
        self._lock = threading.Lock()

    def _check_bucket(self, count: int) -> None:
        if not 0 <= count <= self.max_iter:
            raise IndexError(f"Iteration count {count} outside [0, {self.max_iter}]")

    def increment(self, count: int) -> None:
        """Add one pixel to bucket ``count``."""
        self._check_bucket(count)
        with self._lock:
            self._counts[count] += 1

    def accumulate(self, counts: np.ndarray) -> None:
        """
        Merge a worker-local histogram in a single locked step.

        Args:
            counts: Array of length max_iter + 1
        """
        counts = np.asarray(counts)
        if counts.shape != self._counts.shape:
            raise IndexError(f"Expected {self._counts.shape[0]} buckets, got {counts.shape}")
        if counts.size and counts.min() < 0:
            raise ValueError(f"Bucket counts must not be negative, got minimum {counts.min()}")
        with self._lock:
            self._counts += counts

    @property
    def counts(self) -> np.ndarray:
        with self._lock:
            return self._counts.copy()

    def total(self) -> int:
        return int(self.counts.sum())

    def nonzero_items(self) -> List[Tuple[int, int]]:
        """(iterations, pixels) pairs for every populated bucket."""
        counts = self.counts
        return [(int(i), int(counts[i])) for i in np.flatnonzero(counts)]

    def __getitem__(self, count: int) -> int:
        self._check_bucket(count)
        with self._lock:
            return int(self._counts[count])

    def __len__(self) -> int:
        return len(self._counts)
