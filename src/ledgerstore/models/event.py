"""
Event record model.

An event is an immutable fact about an aggregate. Its position within the
aggregate's stream is given by ``version``; ``created_at`` is supplied by
the caller and is the default ordering axis of the store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Event:
    """
    An event as seen by callers of the event store.

    The payload travels in two forms:

    - ``data``: the live domain object. The store serializes it on write but
      never reconstructs it on read, because it does not know the concrete
      domain type.
    - ``data_bytes`` / ``data_type``: the serialized payload and its type
      label. These are always populated on read so callers can deserialize
      generically.
    """

    event_uuid: str = ""
    instance_id: int = 0
    tenant_uuid: str = ""
    command_uuid: str = ""
    domain: str = ""
    aggregate_uuid: str = ""
    version: int = 0
    created_at: int = 0
    data_type: str = ""
    data_bytes: bytes = b""
    data: Any = None

    @property
    def uuid(self) -> str:
        """Unique identifier used for all external lookups."""
        return self.event_uuid
