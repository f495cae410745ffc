from __future__ import annotations

import random
import threading
from typing import Optional


class NoImagesError(LookupError):
    """Raised when an index is requested from an empty image list."""


def _check_size(size: int) -> None:
    if size <= 0:
        raise NoImagesError("No images available")


class RandomSelector:
    """Uniform draw over ``[0, size)``."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def pick(self, size: int) -> int:
        _check_size(size)
        return self._rng.randrange(size)


class RoundRobinSelector:
    """Cyclic index over ``[0, size)`` backed by a shared counter.

    Each call takes the current counter value and advances it by one under
    a lock, so concurrent callers get distinct consecutive slots.
    """

    def __init__(self) -> None:
        self._count = 0
        self._lock = threading.Lock()

    @property
    def served(self) -> int:
        return self._count

    def pick(self, size: int) -> int:
        _check_size(size)
        with self._lock:
            slot = self._count
            self._count += 1
        return slot % size
