"""Root exceptions for ledgerstore.

Every store failure is a :class:`LedgerStoreError` carrying what a caller
branches on: a numeric ``code``, a semantic :class:`ErrorCode`, and the
``cause`` that triggered it (usually a ``sqlite3.Error`` or an exception
from the injected cipher). Subclasses only declare ``code`` and
``default_error_code``.

:class:`LedgerStoreBaseException` sits above it and is never raised by the
stores themselves.
"""

from __future__ import annotations

from typing import Any

from ledgerstore.error_codes import ErrorCode


class LedgerStoreBaseException(Exception):  # noqa: N818 - intentional base exception name
    """Base exception for all ledgerstore errors.

    Attributes:
        code: Numeric error code for programmatic handling
        error_code: Semantic ErrorCode, ``default_error_code`` unless given
        cause: Original exception, kept for diagnostics
    """

    code: int = 0
    default_error_code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        cause: Exception | None = None,
        error_code: ErrorCode | None = None,
    ) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code
        self.cause = cause
        self.error_code = error_code or self.default_error_code

    @property
    def message(self) -> str:
        return super().__str__()

    def log_fields(self) -> dict[str, Any]:
        """Fields for a structured log entry describing this error."""
        fields: dict[str, Any] = {
            "error": self.message,
            "error_type": type(self).__name__,
            "error_code": self.error_code.value,
            "code": self.code,
        }
        if self.cause is not None:
            fields["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return fields

    def __str__(self) -> str:
        parts = [self.message]
        if self.code:
            parts.append(f"(code={self.code})")
        if self.cause:
            parts.append(f"caused by: {self.cause}")
        return " ".join(parts)


class LedgerStoreError(LedgerStoreBaseException):
    """Raised by store operations. Catch this to handle any store failure."""

    code: int = 100
    default_error_code: ErrorCode = ErrorCode.SYSTEM_ERROR
