"""Tests for the error hierarchy, error codes and sqlite error translation."""

import sqlite3

from ledgerstore.error_codes import (
    ErrorCode,
    classify_error,
    error_chain,
    find_in_chain,
)
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
    is_permanent,
    is_transient,
    translate_sqlite_error,
)


class TestErrorChain:
    """Tests for error_chain() function."""

    def test_single_error_returns_list_with_one_item(self) -> None:
        """Single error with no cause returns list with just that error."""
        error = ValueError("test")
        assert error_chain(error) == [error]

    def test_chained_errors_returns_root_to_leaf(self) -> None:
        """Chained errors return list from root cause to leaf."""
        root = sqlite3.OperationalError("database is locked")
        leaf = StorageLockedError("create failed")
        leaf.__cause__ = root
        assert error_chain(leaf) == [root, leaf]

    def test_find_in_chain(self) -> None:
        """Returns first error of matching type in chain."""
        root = sqlite3.OperationalError("disk I/O error")
        leaf = StorageError("write failed")
        leaf.__cause__ = root
        assert find_in_chain(leaf, sqlite3.OperationalError) is root
        assert find_in_chain(leaf, KeyError) is None


class TestErrorCodes:
    """Tests for the codes carried by each exception."""

    def test_numeric_codes(self) -> None:
        assert LedgerStoreError("x").code == 100
        assert ValidationError("x").code == 110
        assert ReadOnlyError("x").code == 111
        assert CipherError("x").code == 121

    def test_semantic_codes(self) -> None:
        assert ConfigurationError("x").error_code == ErrorCode.CONFIGURATION_INVALID
        assert ReadOnlyError("x").error_code == ErrorCode.READ_ONLY
        assert EncodingError("x").error_code == ErrorCode.ENCODING_FAILED
        assert CipherError("x").error_code == ErrorCode.CIPHER_FAILED
        assert ConnectivityError("x").error_code == ErrorCode.CONNECTION_FAILED
        assert StorageLockedError("x").error_code == ErrorCode.STORAGE_LOCKED
        assert StoreClosedError("x").error_code == ErrorCode.STORE_CLOSED
        assert OperationCancelledError("x").error_code == ErrorCode.CANCELLED

    def test_explicit_error_code_wins(self) -> None:
        error = StorageError("x", error_code=ErrorCode.STORAGE_LOCKED)
        assert error.error_code == ErrorCode.STORAGE_LOCKED

    def test_read_only_is_a_validation_error(self) -> None:
        """Read-only violations are validation failures callers can catch together."""
        assert issubclass(ReadOnlyError, ValidationError)
        assert issubclass(CipherError, EncodingError)

    def test_str_includes_code_and_cause(self) -> None:
        error = StorageError("write failed", cause=sqlite3.OperationalError("disk full"))
        assert str(error) == "write failed (code=107) caused by: disk full"


class TestClassifyError:
    """Tests for classify_error()."""

    def test_ledgerstore_errors_use_their_code(self) -> None:
        assert classify_error(ValidationError("x")) == ErrorCode.VALIDATION_FAILED

    def test_raw_sqlite_errors(self) -> None:
        assert classify_error(sqlite3.OperationalError("database is locked")) == ErrorCode.STORAGE_LOCKED
        assert classify_error(sqlite3.OperationalError("interrupted")) == ErrorCode.CANCELLED
        assert classify_error(sqlite3.OperationalError("no such table: x")) == ErrorCode.STORAGE_ERROR
        assert classify_error(sqlite3.IntegrityError("UNIQUE")) == ErrorCode.STORAGE_ERROR

    def test_other_errors(self) -> None:
        assert classify_error(ValueError("x")) == ErrorCode.VALIDATION_FAILED
        assert classify_error(KeyError("x")) == ErrorCode.UNKNOWN


class TestTransience:
    """Tests for is_transient() and is_permanent()."""

    def test_transient(self) -> None:
        assert is_transient(StorageLockedError("x"))
        assert is_transient(ConnectivityError("x"))
        assert is_transient(sqlite3.OperationalError("database is locked"))
        assert not is_transient(ValidationError("x"))

    def test_transient_through_cause(self) -> None:
        error = RuntimeError("wrapper")
        error.__cause__ = sqlite3.OperationalError("database table is locked")
        assert is_transient(error)

    def test_permanent(self) -> None:
        assert is_permanent(ConfigurationError("x"))
        assert is_permanent(ValueError("x"))
        assert not is_permanent(TransientError("x"))
        assert not is_permanent(RuntimeError("x"))

    def test_retry_after(self) -> None:
        assert TransientError("x", retry_after=1.5).retry_after == 1.5
        assert isinstance(StorageLockedError("x"), TransientError)
        assert not isinstance(StorageLockedError("x"), PermanentError)


class TestTranslateSqliteError:
    """Tests for translate_sqlite_error()."""

    def test_locked(self) -> None:
        cause = sqlite3.OperationalError("database is locked")
        error = translate_sqlite_error(cause, "create failed")
        assert isinstance(error, StorageLockedError)
        assert error.cause is cause

    def test_interrupted(self) -> None:
        error = translate_sqlite_error(sqlite3.OperationalError("interrupted"), "list failed")
        assert isinstance(error, OperationCancelledError)

    def test_everything_else(self) -> None:
        error = translate_sqlite_error(sqlite3.IntegrityError("NOT NULL"), "create failed")
        assert type(error) is StorageError
        assert "create failed" in str(error)


class TestLogFields:
    """Tests for the structured fields errors contribute to log entries."""

    def test_fields_without_cause(self) -> None:
        error = ReadOnlyError("instance is readonly")
        assert error.log_fields() == {
            "error": "instance is readonly",
            "error_type": "ReadOnlyError",
            "error_code": "READ_ONLY",
            "code": 111,
        }

    def test_cause_is_described(self) -> None:
        error = translate_sqlite_error(sqlite3.OperationalError("database is locked"), "create failed")
        fields = error.log_fields()
        assert fields["error"] == "create failed: database is locked"
        assert fields["error_code"] == "STORAGE_LOCKED"
        assert fields["cause"] == "OperationalError: database is locked"

    def test_explicit_error_code_is_logged(self) -> None:
        error = StorageError("x", error_code=ErrorCode.CANCELLED)
        assert error.log_fields()["error_code"] == "CANCELLED"
