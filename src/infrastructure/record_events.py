"""In-process publisher for record mutations."""

from datetime import datetime
import threading

from src.application.ports.record_events import (
    RecordMutation,
    RecordMutationPublisherPort,
    RecordMutationSubscriberPort,
)
from src.infrastructure.logging.logger import get_app_logger


class InMemoryRecordMutationPublisher(RecordMutationPublisherPort):
    """Deliver mutations synchronously to registered subscribers.

    The publisher also remembers the last event per user so pollers can tell
    whether their view of the dashboard is stale.
    """

    def __init__(self, logger=None) -> None:
        """Initialize the publisher.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._logger = logger or get_app_logger()
        self._subscribers: list[RecordMutationSubscriberPort] = []
        self._last_events: dict[str, tuple[str, datetime]] = {}
        self._lock = threading.Lock()

    def subscribe(self, subscriber: RecordMutationSubscriberPort) -> None:
        """Register a subscriber."""
        with self._lock:
            self._subscribers.append(subscriber)

    def publish(self, mutation: RecordMutation) -> None:
        """Record the event and deliver it to every subscriber.

        Args:
            mutation: Mutation to deliver.
        """
        with self._lock:
            self._last_events[mutation.user_id] = (
                mutation.event_type,
                mutation.occurred_at,
            )
            subscribers = list(self._subscribers)
        self._logger.info(
            f"Record mutation {mutation.event_type} for user {mutation.user_id}"
        )
        for subscriber in subscribers:
            subscriber(mutation)

    def last_event(self, user_id: str) -> tuple[str, datetime] | None:
        """Return the last event type and timestamp for a user, if any."""
        with self._lock:
            return self._last_events.get(user_id)


__all__ = ["InMemoryRecordMutationPublisher"]
