"""
Record kind descriptors.

A RecordKind tells the engine everything that differs between events and
commands: table, columns, which filters apply, the schema to create and
how to convert records to rows and back. The engine itself is written
once against this descriptor.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ledgerstore.models import Command, Event
from ledgerstore.persistence.converters import (
    command_to_row,
    event_to_row,
    row_to_command,
    row_to_event,
)
from ledgerstore.persistence.schema import COMMANDS_SCHEMA, EVENTS_SCHEMA

R = TypeVar("R")


@dataclass(frozen=True)
class RecordKind(Generic[R]):
    """Per-kind schema descriptor consumed by the record store engine."""

    label: str
    table: str
    columns: tuple[str, ...]
    schema: str
    filter_columns: frozenset[str]
    to_row: Callable[[R], dict[str, Any]]
    from_row: Callable[[Mapping[str, Any]], R]
    uuid_of: Callable[[R], str]

    @property
    def all_columns(self) -> tuple[str, ...]:
        """Surrogate id followed by the writable columns."""
        return ("id", *self.columns)

    @property
    def select_list(self) -> str:
        return ", ".join(self.all_columns)

    def is_column(self, name: str) -> bool:
        return name in self.all_columns

    def supports_filter(self, name: str) -> bool:
        return name in self.filter_columns

    @property
    def insert_sql(self) -> str:
        placeholders = ", ".join(f":{column}" for column in self.columns)
        return f"INSERT INTO {self.table} ({', '.join(self.columns)}) VALUES ({placeholders})"

    @property
    def update_sql(self) -> str:
        assignments = ", ".join(f"{column} = :{column}" for column in self.columns if column != "uuid")
        return f"UPDATE {self.table} SET {assignments} WHERE uuid = :uuid"


EVENT_KIND: RecordKind[Event] = RecordKind(
    label="event",
    table="events",
    columns=(
        "instance_id",
        "uuid",
        "tenant_uuid",
        "command_uuid",
        "domain",
        "aggregate_uuid",
        "version",
        "created_at",
        "data_type",
        "data_bytes",
    ),
    schema=EVENTS_SCHEMA,
    filter_columns=frozenset({"tenant_uuid", "aggregate_uuid", "data_type", "domain", "created_at"}),
    to_row=event_to_row,
    from_row=row_to_event,
    uuid_of=lambda event: event.event_uuid,
)

COMMAND_KIND: RecordKind[Command] = RecordKind(
    label="command",
    table="commands",
    columns=(
        "instance_id",
        "uuid",
        "tenant_uuid",
        "domain",
        "created_at",
        "data_type",
        "data_bytes",
        "req_ctx",
    ),
    schema=COMMANDS_SCHEMA,
    filter_columns=frozenset({"tenant_uuid", "data_type", "domain", "created_at"}),
    to_row=command_to_row,
    from_row=row_to_command,
    uuid_of=lambda command: command.command_uuid,
)
