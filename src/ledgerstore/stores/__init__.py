"""
Event and command stores.

Both are thin facades over the shared record store engine.
"""

from ledgerstore.stores.base import RecordStore
from ledgerstore.stores.command_store import CommandStore
from ledgerstore.stores.event_store import EventStore

__all__ = [
    "CommandStore",
    "EventStore",
    "RecordStore",
]
