"""
SQLite event store.

Provides durable storage for events. Each event gets an auto-incrementing
surrogate id on insert; callers address events by their event uuid.
"""

from __future__ import annotations

from ledgerstore.models import Event
from ledgerstore.persistence.kinds import EVENT_KIND
from ledgerstore.stores.base import RecordStore


class EventStore(RecordStore[Event]):
    """
    Store for events.

    ``list()`` additionally supports filtering by ``aggregate_uuid``.
    With a cipher configured, events must carry a non-empty payload.
    """

    kind = EVENT_KIND
