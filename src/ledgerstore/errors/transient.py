"""Transient (retryable) errors and storage failures."""

from __future__ import annotations

from ledgerstore.error_codes import ErrorCode
from ledgerstore.errors.base import LedgerStoreError


class TransientError(LedgerStoreError):
    """Retryable errors.

    These errors indicate temporary conditions that may resolve on retry:
    - The database file could not be opened
    - Lock contention outlasted the busy timeout

    The store never retries by itself; callers decide.
    """

    code: int = 101
    default_error_code: ErrorCode = ErrorCode.STORAGE_ERROR

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        cause: Exception | None = None,
        error_code: ErrorCode | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, code=code, cause=cause, error_code=error_code)
        self.retry_after = retry_after


class ConnectivityError(TransientError):
    """Opening the database or applying its settings failed."""

    code: int = 105
    default_error_code: ErrorCode = ErrorCode.CONNECTION_FAILED


class StorageLockedError(TransientError):
    """The database stayed locked past the busy timeout."""

    code: int = 106
    default_error_code: ErrorCode = ErrorCode.STORAGE_LOCKED


class StorageError(LedgerStoreError):
    """Any other SQLite failure (missing table, constraint, I/O)."""

    code: int = 107
    default_error_code: ErrorCode = ErrorCode.STORAGE_ERROR


class OperationCancelledError(LedgerStoreError):
    """The call context was cancelled or its deadline passed."""

    code: int = 108
    default_error_code: ErrorCode = ErrorCode.CANCELLED
