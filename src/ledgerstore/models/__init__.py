"""
Record models for ledgerstore.

This module contains the record types stored by the event and command
stores:
- Event: an immutable fact about an aggregate
- Command: a request that produced events, with its request context
- RequestContext: sender/target metadata of a command
- StoreInfo: diagnostic snapshot returned by ``info()``
"""

from ledgerstore.models.command import Command
from ledgerstore.models.event import Event
from ledgerstore.models.info import StoreInfo
from ledgerstore.models.request_context import RequestContext


def new_uuid() -> str:
    """Generate a unique record identifier using ULID."""
    from ulid import ULID

    return str(ULID())


__all__ = [
    "Command",
    "Event",
    "RequestContext",
    "StoreInfo",
    "new_uuid",
]
