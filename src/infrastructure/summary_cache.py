"""In-process cache for computed fiscal summaries."""

from collections.abc import Callable, Hashable
import threading
import time
from typing import Any, TypeVar

from src.application.ports.summary_cache import SummaryCachePort
from src.infrastructure.logging.logger import get_app_logger

T = TypeVar("T")


class InMemorySummaryCache(SummaryCachePort):
    """Thread-safe summary cache with single-flight recomputation.

    Keys are tuples whose first element is the user id. Each key has its own
    lock so concurrent misses trigger a single computation. Every
    invalidation bumps a per-user generation; a value computed under an older
    generation is returned to its caller but never stored.
    """

    def __init__(
        self,
        ttl_seconds: float = 0,
        logger=None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl_seconds: Entry lifetime; ``0`` keeps entries until invalidated.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Monotonic clock used for expiry.
        """
        self._ttl_seconds = ttl_seconds
        self._logger = logger or get_app_logger()
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[tuple, tuple[Any, tuple[int, int], float]] = {}
        self._key_locks: dict[tuple, threading.Lock] = {}
        self._generations: dict[str, int] = {}
        self._epoch = 0

    def get_or_compute(self, key: tuple[str, Hashable], compute: Callable[[], T]) -> T:
        """Return the cached value for ``key`` or compute and store it.

        Args:
            key: Tuple whose first element is the user id.
            compute: Zero-argument callable producing the value.

        Returns:
            T: Cached or freshly computed value.
        """
        found, value = self._lookup(key)
        if found:
            return value

        with self._lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())
        with key_lock:
            found, value = self._lookup(key)
            if found:
                return value
            with self._lock:
                generation = self._generation(key[0])
            self._logger.debug(f"Summary cache miss for {key!r}")
            value = compute()
            with self._lock:
                if self._generation(key[0]) == generation:
                    self._entries[key] = (value, generation, self._clock())
                else:
                    self._logger.debug(
                        f"Discarding stale summary for {key!r}"
                    )
            return value

    def invalidate_user(self, user_id: str) -> None:
        """Drop every cached value of a user."""
        with self._lock:
            self._generations[user_id] = self._generations.get(user_id, 0) + 1
            stale = [key for key in self._entries if key[0] == user_id]
            for key in stale:
                del self._entries[key]
            for key in [k for k in self._key_locks if k[0] == user_id]:
                del self._key_locks[key]
        self._logger.debug(
            f"Summary cache invalidated {len(stale)} entries for {user_id}"
        )

    def clear(self) -> None:
        """Drop every cached value."""
        with self._lock:
            self._epoch += 1
            self._entries.clear()
            self._key_locks.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _lookup(self, key: tuple) -> tuple[bool, Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False, None
            value, generation, stored_at = entry
            if generation != self._generation(key[0]):
                del self._entries[key]
                return False, None
            if self._ttl_seconds and self._clock() - stored_at >= self._ttl_seconds:
                del self._entries[key]
                return False, None
            return True, value

    def _generation(self, user_id: str) -> tuple[int, int]:
        return (self._epoch, self._generations.get(user_id, 0))


__all__ = ["InMemorySummaryCache"]
