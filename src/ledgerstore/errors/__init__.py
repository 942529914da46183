"""ledgerstore error hierarchy.

Import from ``ledgerstore.errors``.
"""

from ledgerstore.errors.base import LedgerStoreBaseException, LedgerStoreError
from ledgerstore.errors.permanent import (
    CipherError,
    ConfigurationError,
    EncodingError,
    PermanentError,
    ReadOnlyError,
    StoreClosedError,
    ValidationError,
)
from ledgerstore.errors.transient import (
    ConnectivityError,
    OperationCancelledError,
    StorageError,
    StorageLockedError,
    TransientError,
)
from ledgerstore.errors.utils import is_permanent, is_transient, translate_sqlite_error

__all__ = [
    "CipherError",
    "ConfigurationError",
    "ConnectivityError",
    "EncodingError",
    "LedgerStoreBaseException",
    "LedgerStoreError",
    "OperationCancelledError",
    "PermanentError",
    "ReadOnlyError",
    "StorageError",
    "StorageLockedError",
    "StoreClosedError",
    "TransientError",
    "ValidationError",
    "is_permanent",
    "is_transient",
    "translate_sqlite_error",
]
