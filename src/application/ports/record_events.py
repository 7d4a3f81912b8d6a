"""Ports for record mutation notifications.

Any create, update or delete of an invoice, transaction, quote or category
must be published so that cached aggregates of the owning user are dropped.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol

MUTATION_ENTITIES = ("invoice", "transaction", "quote", "category")
MUTATION_ACTIONS = ("created", "updated", "deleted")


@dataclass(frozen=True)
class RecordMutation:
    """A change to a record that feeds fiscal aggregates.

    Attributes:
        user_id: Owner of the mutated record.
        entity: One of ``invoice``, ``transaction``, ``quote``, ``category``.
        action: One of ``created``, ``updated``, ``deleted``.
        occurred_at: Timestamp of the mutation (UTC).
    """

    user_id: str
    entity: str
    action: str
    occurred_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def __post_init__(self) -> None:
        if self.entity not in MUTATION_ENTITIES:
            raise ValueError(f"Unknown mutation entity: {self.entity!r}")
        if self.action not in MUTATION_ACTIONS:
            raise ValueError(f"Unknown mutation action: {self.action!r}")

    @property
    def event_type(self) -> str:
        """Event name, e.g. ``invoice-created``."""
        return f"{self.entity}-{self.action}"


class RecordMutationSubscriberPort(Protocol):
    """Receives record mutations."""

    def __call__(self, mutation: RecordMutation) -> None:
        """Handle a mutation."""


class RecordMutationPublisherPort(Protocol):
    """Fans record mutations out to subscribers."""

    def subscribe(self, subscriber: RecordMutationSubscriberPort) -> None:
        """Register a subscriber."""

    def publish(self, mutation: RecordMutation) -> None:
        """Deliver a mutation to every subscriber."""


__all__ = [
    "MUTATION_ENTITIES",
    "MUTATION_ACTIONS",
    "RecordMutation",
    "RecordMutationSubscriberPort",
    "RecordMutationPublisherPort",
]
