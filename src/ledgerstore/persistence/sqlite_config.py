"""SQLite configuration for durable record storage.

This module provides the PRAGMA settings applied to every connection the
stores open. The defaults favour durability over throughput: a rollback
journal, full synchronous flushes, foreign keys on, and a busy timeout so
contending callers block and retry instead of failing immediately.

Environment Variables:
    LEDGERSTORE_SQLITE_JOURNAL_MODE: Journal mode (DELETE/TRUNCATE/PERSIST/WAL)
    LEDGERSTORE_SQLITE_SYNCHRONOUS: Synchronous setting (OFF/NORMAL/FULL/EXTRA)
    LEDGERSTORE_SQLITE_BUSY_TIMEOUT_MS: Busy timeout in milliseconds
    LEDGERSTORE_SQLITE_FOREIGN_KEYS: Enforce foreign keys (1/0, true/false)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from ledgerstore.errors import ConfigurationError

JOURNAL_MODES = frozenset({"DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF"})
SYNCHRONOUS_MODES = frozenset({"OFF", "NORMAL", "FULL", "EXTRA"})

DEFAULT_BUSY_TIMEOUT_MS = 5000


@dataclass
class SqliteConfig:
    """Configuration for SQLite connections.

    Attributes:
        journal_mode: Rollback journal mode
        synchronous: Sync mode (OFF, NORMAL, FULL or EXTRA)
        foreign_keys: Whether foreign key constraints are enforced
        busy_timeout_ms: How long to wait on a locked database
    """

    journal_mode: str = "DELETE"
    synchronous: str = "FULL"
    foreign_keys: bool = True
    busy_timeout_ms: int = DEFAULT_BUSY_TIMEOUT_MS

    @classmethod
    def from_env(cls) -> SqliteConfig:
        """Load configuration from environment variables.

        Returns:
            SqliteConfig with values from environment or defaults

        Raises:
            ConfigurationError: If a variable holds an unparseable value
        """
        config = cls(
            journal_mode=os.getenv("LEDGERSTORE_SQLITE_JOURNAL_MODE", "DELETE").upper(),
            synchronous=os.getenv("LEDGERSTORE_SQLITE_SYNCHRONOUS", "FULL").upper(),
            foreign_keys=_parse_bool_env("LEDGERSTORE_SQLITE_FOREIGN_KEYS", True),
            busy_timeout_ms=_parse_int_env("LEDGERSTORE_SQLITE_BUSY_TIMEOUT_MS", DEFAULT_BUSY_TIMEOUT_MS),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Check that every setting is one SQLite accepts.

        Raises:
            ConfigurationError: On the first invalid setting
        """
        if self.journal_mode.upper() not in JOURNAL_MODES:
            raise ConfigurationError(f"invalid journal_mode: {self.journal_mode!r}")
        if self.synchronous.upper() not in SYNCHRONOUS_MODES:
            raise ConfigurationError(f"invalid synchronous mode: {self.synchronous!r}")
        if self.busy_timeout_ms < 0:
            raise ConfigurationError(f"busy_timeout_ms must be >= 0, got {self.busy_timeout_ms}")

    @property
    def busy_timeout_seconds(self) -> float:
        return self.busy_timeout_ms / 1000.0

    def get_pragma_statements(self) -> list[str]:
        """Generate PRAGMA statements for this configuration.

        Values are validated first, so nothing caller-controlled reaches
        the statement text unchecked.

        Returns:
            List of PRAGMA SQL statements to execute
        """
        self.validate()
        return [
            f"PRAGMA journal_mode = {self.journal_mode.upper()}",
            f"PRAGMA synchronous = {self.synchronous.upper()}",
            f"PRAGMA foreign_keys = {'ON' if self.foreign_keys else 'OFF'}",
            f"PRAGMA busy_timeout = {int(self.busy_timeout_ms)}",
        ]


def _parse_int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None


def _parse_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in ("1", "true", "yes", "on"):
        return True
    if normalized in ("0", "false", "no", "off"):
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


_default_sqlite_config: SqliteConfig | None = None


def get_sqlite_config() -> SqliteConfig:
    """Get the default SqliteConfig, loading from environment on first call.

    Returns:
        The singleton SqliteConfig instance
    """
    global _default_sqlite_config
    if _default_sqlite_config is None:
        _default_sqlite_config = SqliteConfig.from_env()
    return _default_sqlite_config


def reset_sqlite_config() -> None:
    """Reset the sqlite config singleton. Useful for testing."""
    global _default_sqlite_config
    _default_sqlite_config = None
