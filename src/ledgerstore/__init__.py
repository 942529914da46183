"""
ledgerstore - SQLite-backed event and command stores.

This package provides durable, queryable storage for event-sourced
systems:
- EventStore and CommandStore on top of a single SQLite file each
- Filtered, paginated listing with exact totals
- Optional AES-GCM encryption of payloads at rest
- Read-only mode, functional options and call contexts
- Copying a whole store into another
"""

__version__ = "0.1.0"

from ledgerstore.context import CallContext
from ledgerstore.crypto import AesGcmCipher, generate_key

# Error hierarchy
from ledgerstore.error_codes import ErrorCode, classify_error
from ledgerstore.errors import (
    CipherError,
    ConfigurationError,
    ConnectivityError,
    EncodingError,
    LedgerStoreError,
    OperationCancelledError,
    PermanentError,
    ReadOnlyError,
    StorageError,
    StorageLockedError,
    StoreClosedError,
    TransientError,
    ValidationError,
)
from ledgerstore.logging import configure_logging, get_logger
from ledgerstore.models import Command, Event, RequestContext, StoreInfo, new_uuid
from ledgerstore.options import (
    StoreOption,
    StoreOptions,
    with_attribute,
    with_attributes,
    with_cipher,
    with_read_only,
    with_sqlite_config,
)
from ledgerstore.persistence import Cipher, RecordQuery, SqliteConfig, UniqueQuery
from ledgerstore.stores import CommandStore, EventStore
from ledgerstore.sync import sync_command_store, sync_event_store

__all__ = [
    # Stores
    "CommandStore",
    "EventStore",
    "sync_command_store",
    "sync_event_store",
    # Models
    "Command",
    "Event",
    "RequestContext",
    "StoreInfo",
    "new_uuid",
    # Queries
    "RecordQuery",
    "UniqueQuery",
    # Options and configuration
    "StoreOption",
    "StoreOptions",
    "SqliteConfig",
    "with_attribute",
    "with_attributes",
    "with_cipher",
    "with_read_only",
    "with_sqlite_config",
    # Encryption
    "AesGcmCipher",
    "Cipher",
    "generate_key",
    # Context
    "CallContext",
    # Logging
    "configure_logging",
    "get_logger",
    # Errors
    "CipherError",
    "ConfigurationError",
    "ConnectivityError",
    "EncodingError",
    "ErrorCode",
    "LedgerStoreError",
    "OperationCancelledError",
    "PermanentError",
    "ReadOnlyError",
    "StorageError",
    "StorageLockedError",
    "StoreClosedError",
    "TransientError",
    "ValidationError",
    "classify_error",
]
