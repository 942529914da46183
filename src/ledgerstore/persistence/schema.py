"""Database schema for the event and command tables."""

from __future__ import annotations

import sqlite3

# Schema for events table
EVENTS_SCHEMA = """
CREATE TABLE IF NOT EXISTS events (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    instance_id INTEGER,
    uuid TEXT,
    tenant_uuid TEXT,
    command_uuid TEXT,
    domain TEXT,
    aggregate_uuid TEXT,
    version INTEGER,
    created_at INTEGER,
    data_type TEXT,
    data_bytes TEXT
);

CREATE INDEX IF NOT EXISTS events_tenant_index ON events(tenant_uuid ASC);
CREATE INDEX IF NOT EXISTS events_aggregate_uuid_index ON events(aggregate_uuid ASC);
"""

# Schema for commands table
COMMANDS_SCHEMA = """
CREATE TABLE IF NOT EXISTS commands (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    instance_id INTEGER,
    uuid TEXT,
    tenant_uuid TEXT,
    domain TEXT,
    created_at INTEGER,
    data_type TEXT,
    data_bytes TEXT,
    req_ctx TEXT
);

CREATE INDEX IF NOT EXISTS commands_tenant_index ON commands(tenant_uuid ASC);
"""


def create_tables(conn: sqlite3.Connection, schema: str) -> None:
    """Create tables and indexes from ``schema`` if they don't exist.

    Every statement is ``IF NOT EXISTS``, so running this against an
    already migrated database changes nothing.
    """
    for statement in schema.split(";"):
        statement = statement.strip()
        if statement:
            conn.execute(statement)
