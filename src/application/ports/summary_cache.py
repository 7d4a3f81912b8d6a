"""Port for caching computed fiscal summaries."""

from collections.abc import Callable, Hashable
from typing import Protocol, TypeVar

T = TypeVar("T")


class SummaryCachePort(Protocol):
    """Cache keyed by ``(user_id, ...)`` tuples.

    Implementations must recompute a key at most once under concurrent
    requests and must never serve a value computed before the last
    invalidation of its user.
    """

    def get_or_compute(self, key: tuple[str, Hashable], compute: Callable[[], T]) -> T:
        """Return the cached value for ``key`` or compute and store it.

        Args:
            key: Tuple whose first element is the user id.
            compute: Zero-argument callable producing the value.

        Returns:
            T: Cached or freshly computed value.
        """

    def invalidate_user(self, user_id: str) -> None:
        """Drop every cached value of a user."""

    def clear(self) -> None:
        """Drop every cached value."""


__all__ = ["SummaryCachePort"]
