"""Tests for the in-memory record mutation publisher."""

from unittest.mock import MagicMock

from src.application.ports.record_events import RecordMutation
from src.infrastructure.record_events import InMemoryRecordMutationPublisher


def test_publish_delivers_to_all_subscribers() -> None:
    """Every subscriber receives the mutation in registration order."""
    publisher = InMemoryRecordMutationPublisher(logger=MagicMock())
    received = []
    publisher.subscribe(lambda mutation: received.append(("a", mutation.event_type)))
    publisher.subscribe(lambda mutation: received.append(("b", mutation.event_type)))

    publisher.publish(RecordMutation(user_id="u1", entity="quote", action="updated"))

    assert received == [("a", "quote-updated"), ("b", "quote-updated")]


def test_last_event_tracks_latest_mutation_per_user() -> None:
    """The publisher remembers the last event type and timestamp per user."""
    publisher = InMemoryRecordMutationPublisher(logger=MagicMock())
    first = RecordMutation(user_id="u1", entity="invoice", action="created")
    second = RecordMutation(user_id="u1", entity="transaction", action="deleted")

    assert publisher.last_event("u1") is None
    publisher.publish(first)
    publisher.publish(second)

    assert publisher.last_event("u1") == ("transaction-deleted", second.occurred_at)
    assert publisher.last_event("u2") is None
