"""SQLite command store."""

from __future__ import annotations

from ledgerstore.models import Command
from ledgerstore.persistence.kinds import COMMAND_KIND
from ledgerstore.stores.base import RecordStore


class CommandStore(RecordStore[Command]):
    """
    Store for commands.

    The request context of each command is kept in its own column and
    restored on read. Filtering by ``aggregate_uuid`` is rejected because
    commands carry no aggregate.
    """

    kind = COMMAND_KIND
