"""
Copy records between stores of the same kind.

Records are read page by page in insertion order (surrogate id) and
written to the destination one at a time, each in its own transaction.
The source decrypts and the destination re-encrypts, so the two stores
may use different ciphers.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, TypeVar

from ledgerstore.errors import ValidationError
from ledgerstore.logging import get_logger
from ledgerstore.persistence.criteria import RecordQuery

if TYPE_CHECKING:
    from ledgerstore.context import CallContext
    from ledgerstore.stores import CommandStore, EventStore, RecordStore

logger = get_logger(__name__)

R = TypeVar("R")

DEFAULT_PAGE_SIZE = 100

MEMORY_PATH = ":memory:"


def _same_database(source: RecordStore[R], destination: RecordStore[R]) -> bool:
    if source is destination:
        return True
    if MEMORY_PATH in (source.path, destination.path):
        return False
    return os.path.realpath(source.path) == os.path.realpath(destination.path)


def _sync(
    source: RecordStore[R],
    destination: RecordStore[R],
    page_size: int,
    ctx: CallContext | None,
) -> int:
    if source.kind is not destination.kind:
        raise ValidationError(f"cannot sync {source.kind.label} store into {destination.kind.label} store")
    if _same_database(source, destination):
        raise ValidationError(f"cannot sync {source.kind.label} store {source.path!r} into itself")
    if page_size <= 0:
        raise ValidationError(f"page_size must be positive, got {page_size}")

    copied = 0
    offset = 0
    while True:
        page, total = source.list(
            RecordQuery(offset=offset, limit=page_size, order_by="id", ascending=True),
            ctx,
        )
        for record in page:
            destination.create(record, ctx)
            copied += 1
        offset += len(page)
        if not page or offset >= total:
            break

    logger.info(
        "store_synced",
        kind=source.kind.label,
        source=source.path,
        destination=destination.path,
        copied=copied,
    )
    return copied


def sync_event_store(
    source: EventStore,
    destination: EventStore,
    page_size: int = DEFAULT_PAGE_SIZE,
    ctx: CallContext | None = None,
) -> int:
    """Copy every event from ``source`` into ``destination``.

    Returns:
        Number of events copied
    """
    return _sync(source, destination, page_size, ctx)


def sync_command_store(
    source: CommandStore,
    destination: CommandStore,
    page_size: int = DEFAULT_PAGE_SIZE,
    ctx: CallContext | None = None,
) -> int:
    """Copy every command from ``source`` into ``destination``.

    Returns:
        Number of commands copied
    """
    return _sync(source, destination, page_size, ctx)

