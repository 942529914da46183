"""Permanent (non-retryable) errors."""

from __future__ import annotations

from ledgerstore.error_codes import ErrorCode
from ledgerstore.errors.base import LedgerStoreError


class PermanentError(LedgerStoreError):
    """Non-retryable errors.

    These errors indicate conditions that will not resolve on retry:
    - Invalid options
    - Missing records or identifiers
    - Writes against a read-only store
    - Payloads that cannot be encoded, decoded or decrypted
    """

    code: int = 102
    default_error_code: ErrorCode = ErrorCode.SYSTEM_ERROR


class ConfigurationError(PermanentError):
    """Invalid configuration.

    Raised when an option cannot be applied or a SQLite setting is invalid.
    Surfaces immediately, before any database work is done.
    """

    code: int = 104
    default_error_code: ErrorCode = ErrorCode.CONFIGURATION_INVALID


class ValidationError(PermanentError):
    """A request was rejected before touching the database."""

    code: int = 110
    default_error_code: ErrorCode = ErrorCode.VALIDATION_FAILED


class ReadOnlyError(ValidationError):
    """A mutating operation was attempted on a read-only store."""

    code: int = 111
    default_error_code: ErrorCode = ErrorCode.READ_ONLY


class EncodingError(PermanentError):
    """Serialization, deserialization or hex decoding failed."""

    code: int = 120
    default_error_code: ErrorCode = ErrorCode.ENCODING_FAILED


class CipherError(EncodingError):
    """The payload cipher is missing, was given an empty payload, or failed."""

    code: int = 121
    default_error_code: ErrorCode = ErrorCode.CIPHER_FAILED


class StoreClosedError(PermanentError):
    """The store has not been initialised, or was closed or reset."""

    code: int = 130
    default_error_code: ErrorCode = ErrorCode.STORE_CLOSED
