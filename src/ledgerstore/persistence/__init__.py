"""
SQLite persistence layer.

Connection handling, schema, query building and the record store engine
shared by the event and command stores.
"""

from ledgerstore.persistence.cipher import Cipher, PayloadCipher
from ledgerstore.persistence.connection import SqliteConnectionPool, connect, parse_sqlite_path
from ledgerstore.persistence.criteria import DEFAULT_LIMIT, RecordQuery, UniqueQuery
from ledgerstore.persistence.engine import RecordStoreEngine
from ledgerstore.persistence.kinds import COMMAND_KIND, EVENT_KIND, RecordKind
from ledgerstore.persistence.sqlite_config import SqliteConfig, get_sqlite_config, reset_sqlite_config

__all__ = [
    "COMMAND_KIND",
    "DEFAULT_LIMIT",
    "EVENT_KIND",
    "Cipher",
    "PayloadCipher",
    "RecordKind",
    "RecordQuery",
    "RecordStoreEngine",
    "SqliteConfig",
    "SqliteConnectionPool",
    "UniqueQuery",
    "connect",
    "get_sqlite_config",
    "parse_sqlite_path",
    "reset_sqlite_config",
]
