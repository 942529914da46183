"""Command record model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ledgerstore.models.request_context import RequestContext


@dataclass
class Command:
    """
    A command as seen by callers of the command store.

    Payload handling matches :class:`~ledgerstore.models.event.Event`:
    ``data`` is serialized on write, ``data_bytes``/``data_type`` are what
    comes back on read. ``req_ctx`` is restored on read when it was stored.
    """

    command_uuid: str = ""
    instance_id: int = 0
    tenant_uuid: str = ""
    domain: str = ""
    created_at: int = 0
    data_type: str = ""
    data_bytes: bytes = b""
    data: Any = None
    req_ctx: RequestContext | None = None

    @property
    def uuid(self) -> str:
        """Unique identifier used for all external lookups."""
        return self.command_uuid
