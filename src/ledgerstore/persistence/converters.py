"""Row conversion utilities between records and SQLite rows.

Records go to rows as plain dicts keyed by column name; rows come back as
``sqlite3.Row`` (or any mapping) and are turned into records. The payload
travels through the row as raw bytes; the engine stores it as
UTF-8 text, or as hex ciphertext when a cipher is configured.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any

from ledgerstore.errors import EncodingError
from ledgerstore.models import Command, Event, RequestContext


def _json_default(value: Any) -> Any:
    """Fallback encoder for objects the json module doesn't know."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize(value: Any) -> bytes:
    """Serialize a structured value to JSON bytes. ``None`` gives ``b""``."""
    if value is None:
        return b""
    try:
        return json.dumps(value, default=_json_default).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise EncodingError(f"failed to serialize {type_name(value)}", cause=e) from e


def deserialize(data: bytes | str) -> Any:
    """Parse JSON bytes produced by :func:`serialize`."""
    try:
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise EncodingError("failed to deserialize payload", cause=e) from e


def type_name(value: Any) -> str:
    """Payload type label derived from a value's runtime type."""
    return type(value).__name__


def _canonical_payload(data: Any, data_bytes: bytes | str, data_type: str) -> tuple[bytes, str]:
    """Resolve the payload bytes and type name to persist.

    A live ``data`` object wins over ``data_bytes`` and is re-serialized,
    so the stored bytes always match the object's current state.
    """
    payload: bytes | str = data_bytes
    if data is not None:
        payload = serialize(data)
        if not data_type:
            data_type = type_name(data)
    return payload_to_bytes(payload), data_type


def payload_to_text(payload: bytes | str | None) -> str:
    """Decode payload bytes into the TEXT stored in ``data_bytes``."""
    if payload is None:
        return ""
    if isinstance(payload, str):
        return payload
    try:
        return bytes(payload).decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError("payload bytes are not valid UTF-8", cause=e) from e


def payload_to_bytes(payload: bytes | str | None) -> bytes:
    """Normalize a payload read from a row, or given by a caller, to bytes."""
    if payload is None:
        return b""
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return bytes(payload)


def event_to_row(event: Event) -> dict[str, Any]:
    """Convert event to dictionary for storage."""
    data_bytes, data_type = _canonical_payload(event.data, event.data_bytes, event.data_type)
    return {
        "instance_id": event.instance_id,
        "uuid": event.event_uuid,
        "tenant_uuid": event.tenant_uuid,
        "command_uuid": event.command_uuid,
        "domain": event.domain,
        "aggregate_uuid": event.aggregate_uuid,
        "version": event.version,
        "created_at": event.created_at,
        "data_type": data_type,
        "data_bytes": data_bytes,
    }


def row_to_event(row: Mapping[str, Any]) -> Event:
    """Convert database row to Event.

    ``data`` stays unset: turning the payload back into a domain object is
    up to the caller, who knows the concrete type behind ``data_type``.
    """
    return Event(
        event_uuid=row["uuid"] or "",
        instance_id=row["instance_id"] or 0,
        tenant_uuid=row["tenant_uuid"] or "",
        command_uuid=row["command_uuid"] or "",
        domain=row["domain"] or "",
        aggregate_uuid=row["aggregate_uuid"] or "",
        version=row["version"] or 0,
        created_at=row["created_at"] or 0,
        data_type=row["data_type"] or "",
        data_bytes=payload_to_bytes(row["data_bytes"]),
    )


def command_to_row(command: Command) -> dict[str, Any]:
    """Convert command to dictionary for storage."""
    data_bytes, data_type = _canonical_payload(command.data, command.data_bytes, command.data_type)
    return {
        "instance_id": command.instance_id,
        "uuid": command.command_uuid,
        "tenant_uuid": command.tenant_uuid,
        "domain": command.domain,
        "created_at": command.created_at,
        "data_type": data_type,
        "data_bytes": data_bytes,
        "req_ctx": payload_to_text(serialize(command.req_ctx)),
    }


def row_to_command(row: Mapping[str, Any]) -> Command:
    """Convert database row to Command, restoring its request context."""
    req_ctx = None
    req_ctx_text = row["req_ctx"] or ""
    if req_ctx_text:
        req_ctx_data = deserialize(req_ctx_text)
        if not isinstance(req_ctx_data, dict):
            raise EncodingError(f"request context must be a JSON object, got {type_name(req_ctx_data)}")
        try:
            req_ctx = RequestContext.from_dict(req_ctx_data)
        except (TypeError, ValueError) as e:
            raise EncodingError("request context has invalid field values", cause=e) from e

    return Command(
        command_uuid=row["uuid"] or "",
        instance_id=row["instance_id"] or 0,
        tenant_uuid=row["tenant_uuid"] or "",
        domain=row["domain"] or "",
        created_at=row["created_at"] or 0,
        data_type=row["data_type"] or "",
        data_bytes=payload_to_bytes(row["data_bytes"]),
        req_ctx=req_ctx,
    )
