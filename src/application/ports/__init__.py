"""Application ports package."""

from .database import DatabaseEnginePort
from .record_events import (
    RecordMutation,
    RecordMutationPublisherPort,
    RecordMutationSubscriberPort,
)
from .records_repository import FiscalRecordsRepositoryPort
from .summary_cache import SummaryCachePort

__all__ = [
    "DatabaseEnginePort",
    "FiscalRecordsRepositoryPort",
    "RecordMutation",
    "RecordMutationPublisherPort",
    "RecordMutationSubscriberPort",
    "SummaryCachePort",
]
