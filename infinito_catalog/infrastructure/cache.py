"""Time-boxed in-memory cache.

Holds a single value until its time-to-live elapses. Invalidation is
time-only unless `invalidate()` is called explicitly.
"""

import time
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class TTLCache(Generic[T]):
    """Single-slot cache with a time-to-live.

    Example usage:
        cache = TTLCache[dict](default_ttl=900)
        cache.put(payload)
        cached = cache.get()  # None once 900 seconds have passed
    """

    def __init__(
        self,
        default_ttl: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize an empty cache.

        Args:
            default_ttl: Time-to-live in seconds used when `put` gets none.
            clock: Monotonic time source, injectable for tests.
        """
        self.default_ttl = default_ttl
        self._clock = clock
        self._value: T | None = None
        self._expires_at: float | None = None

    def get(self) -> T | None:
        """Get the cached value, or None if empty or expired."""
        if self._expires_at is None:
            return None
        if self._clock() >= self._expires_at:
            self.invalidate()
            return None
        return self._value

    def put(self, value: T, ttl: float | None = None) -> None:
        """Store a value.

        Args:
            value: Value to cache.
            ttl: Time-to-live in seconds (defaults to `default_ttl`).
        """
        self._value = value
        self._expires_at = self._clock() + (self.default_ttl if ttl is None else ttl)

    def invalidate(self) -> None:
        """Drop the cached value."""
        self._value = None
        self._expires_at = None
