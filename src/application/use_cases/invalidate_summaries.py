"""Subscriber dropping cached summaries when records change."""

from src.application.ports.record_events import RecordMutation
from src.application.ports.summary_cache import SummaryCachePort
from src.infrastructure.logging.logger import get_app_logger


class InvalidateSummariesOnMutation:
    """Invalidate every cached aggregate of the mutated record's owner."""

    def __init__(self, cache: SummaryCachePort, logger=None) -> None:
        """Initialize the subscriber.

        Args:
            cache: Summary cache shared with the read use cases.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._cache = cache
        self._logger = logger or get_app_logger()

    def __call__(self, mutation: RecordMutation) -> None:
        self._cache.invalidate_user(mutation.user_id)
        self._logger.info(
            f"Cached summaries invalidated for user {mutation.user_id} "
            f"after {mutation.event_type}"
        )


__all__ = ["InvalidateSummariesOnMutation"]
