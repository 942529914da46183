"""Error utility functions."""

from __future__ import annotations

import sqlite3

from ledgerstore.errors.base import LedgerStoreError
from ledgerstore.errors.permanent import PermanentError
from ledgerstore.errors.transient import (
    OperationCancelledError,
    StorageError,
    StorageLockedError,
    TransientError,
)

_LOCKED_PATTERNS = ("database is locked", "database table is locked", "busy")


def is_transient(error: Exception) -> bool:
    """Check if an error is transient and may succeed on retry.

    Checks the error itself and its cause chain (__cause__).

    Args:
        error: The exception to check

    Returns:
        True if the error is transient
    """
    if isinstance(error, TransientError):
        return True

    if isinstance(error, PermanentError):
        return False

    if isinstance(error, sqlite3.OperationalError):
        message = str(error).lower()
        if any(pattern in message for pattern in _LOCKED_PATTERNS):
            return True

    cause = getattr(error, "__cause__", None)
    if cause is not None and cause is not error:
        return is_transient(cause)

    return False


def is_permanent(error: Exception) -> bool:
    """Check if an error is permanent and should not be retried.

    Args:
        error: The exception to check

    Returns:
        True if the error is permanent
    """
    if isinstance(error, PermanentError):
        return True

    # Explicit TransientError must never be classified as permanent
    if isinstance(error, TransientError):
        return False

    if isinstance(error, (ValueError, TypeError, sqlite3.IntegrityError, sqlite3.ProgrammingError)):
        return True

    cause = getattr(error, "__cause__", None)
    if cause is not None and cause is not error:
        return is_permanent(cause)

    return False


def translate_sqlite_error(error: sqlite3.Error, message: str) -> LedgerStoreError:
    """Map a raw sqlite3 exception onto the ledgerstore hierarchy.

    Args:
        error: The sqlite3 exception
        message: Human readable description of the failed action

    Returns:
        The matching ledgerstore exception, with ``error`` as its cause.
        The caller is expected to ``raise ... from error``.
    """
    detail = str(error).lower()
    if isinstance(error, sqlite3.OperationalError):
        if any(pattern in detail for pattern in _LOCKED_PATTERNS):
            return StorageLockedError(f"{message}: database is locked", cause=error)
        if "interrupted" in detail:
            return OperationCancelledError(f"{message}: operation cancelled", cause=error)
    return StorageError(message, cause=error)
