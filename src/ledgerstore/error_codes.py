"""
Structured error codes for ledgerstore.

Provides semantic error classification and exception chain traversal.

Usage:
    from ledgerstore.error_codes import ErrorCode, error_chain, classify_error

    try:
        store.create(event)
    except Exception as e:
        code = classify_error(e)
        if code == ErrorCode.STORAGE_LOCKED:
            # Retry later
            pass
"""

from __future__ import annotations

import sqlite3
from enum import Enum


class ErrorCode(Enum):
    """Semantic error codes for categorizing exceptions.

    Each code maps to a specific category of failure that callers can
    handle programmatically (retry, surface to user, alert).
    """

    # General errors
    UNKNOWN = "UNKNOWN"
    SYSTEM_ERROR = "SYSTEM_ERROR"

    # Configuration errors
    CONFIGURATION_INVALID = "CONFIGURATION_INVALID"

    # Validation errors
    VALIDATION_FAILED = "VALIDATION_FAILED"
    READ_ONLY = "READ_ONLY"

    # Encoding errors
    ENCODING_FAILED = "ENCODING_FAILED"
    CIPHER_FAILED = "CIPHER_FAILED"

    # Storage errors
    CONNECTION_FAILED = "CONNECTION_FAILED"
    STORAGE_LOCKED = "STORAGE_LOCKED"
    STORAGE_ERROR = "STORAGE_ERROR"
    STORE_CLOSED = "STORE_CLOSED"

    # Call context
    CANCELLED = "CANCELLED"


def error_chain(error: Exception) -> list[Exception]:
    """Traverse __cause__ chain, return list from root to leaf.

    Args:
        error: The exception to traverse

    Returns:
        List of exceptions from root cause to the provided exception.
        If no cause chain exists, returns a list with just the error.
    """
    chain: list[Exception] = []
    current: Exception | None = error

    while current is not None:
        chain.append(current)
        cause = getattr(current, "__cause__", None)
        if cause is current:
            # Prevent infinite loops on self-referential causes
            break
        current = cause

    chain.reverse()
    return chain


def find_in_chain(error: Exception, error_type: type) -> Exception | None:
    """Find first error of given type in cause chain."""
    for exc in error_chain(error):
        if isinstance(exc, error_type):
            return exc
    return None


def classify_error(error: Exception) -> ErrorCode:
    """Map any exception to an ErrorCode.

    Uses the explicit ``error_code`` attribute of ledgerstore exceptions
    (on the error or anywhere in its cause chain), then falls back to
    type-based classification of raw sqlite3 errors.
    """
    if hasattr(error, "error_code"):
        return error.error_code  # type: ignore[no-any-return]

    for exc in error_chain(error):
        if hasattr(exc, "error_code"):
            return exc.error_code  # type: ignore[no-any-return]

    if isinstance(error, sqlite3.OperationalError):
        message = str(error).lower()
        if "locked" in message or "busy" in message:
            return ErrorCode.STORAGE_LOCKED
        if "interrupted" in message:
            return ErrorCode.CANCELLED
        return ErrorCode.STORAGE_ERROR

    if isinstance(error, sqlite3.Error):
        return ErrorCode.STORAGE_ERROR

    if isinstance(error, (ValueError, TypeError)):
        return ErrorCode.VALIDATION_FAILED

    return ErrorCode.UNKNOWN
