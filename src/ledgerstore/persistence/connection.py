"""
Single-connection pool for SQLite databases.

SQLite does not tolerate concurrent physical connections from the same
process well: even one writer plus several readers produced lock failures
under load. Every opened store therefore owns a pool pinned to exactly one
connection. Concurrent callers queue on the pool's lock and are served one
at a time on that connection; no second connection is ever opened.

Usage:
    pool = connect("./events.db")
    with pool.connection() as conn:
        conn.execute("SELECT 1")

    with pool.transaction() as conn:
        conn.execute("INSERT ...", params)
    # Commits on success, rolls back on exception
"""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from ledgerstore.errors import (
    ConnectivityError,
    OperationCancelledError,
    StoreClosedError,
)
from ledgerstore.logging import get_logger
from ledgerstore.persistence.sqlite_config import SqliteConfig, get_sqlite_config

if TYPE_CHECKING:
    from ledgerstore.context import CallContext

logger = get_logger(__name__)

# SQLite VM instructions between cancellation checks
PROGRESS_INTERVAL = 1000

# Seconds between cancellation checks while queued for the connection
_CHECKOUT_POLL_SECONDS = 0.05


def parse_sqlite_path(connection_string: str) -> str:
    """Parse SQLite connection string to extract database path."""
    if connection_string.startswith("sqlite:///"):
        return connection_string[10:]
    elif connection_string.startswith("sqlite://"):
        return connection_string[9:]
    return connection_string


class SqliteConnectionPool:
    """
    Connection pool limited to a single physical SQLite connection.

    The connection is opened explicitly with :meth:`open` and configured
    with the PRAGMAs of the given :class:`SqliteConfig`. Checkouts are
    serialized by a lock, so the connection is shared across threads but
    never used by two of them at once.
    """

    max_size = 1

    def __init__(self, path: str, config: SqliteConfig | None = None) -> None:
        self.path = parse_sqlite_path(path)
        self.config = config or get_sqlite_config()
        self._lock = threading.Lock()
        self._conn: sqlite3.Connection | None = None

    @property
    def closed(self) -> bool:
        return self._conn is None

    def open(self) -> None:
        """Open the connection and apply the configured PRAGMAs.

        Opening an already open pool is a no-op.

        Raises:
            ConfigurationError: If the SQLite settings are invalid
            ConnectivityError: If the file cannot be opened or a PRAGMA fails
        """
        pragmas = self.config.get_pragma_statements()

        with self._lock:
            if self._conn is not None:
                return

            try:
                conn = sqlite3.connect(
                    self.path,
                    timeout=self.config.busy_timeout_seconds,
                    check_same_thread=False,
                    isolation_level=None,
                )
            except sqlite3.Error as e:
                raise ConnectivityError(f"failed to open sqlite database {self.path!r}", cause=e) from e

            conn.row_factory = sqlite3.Row
            try:
                for statement in pragmas:
                    conn.execute(statement)
            except sqlite3.Error as e:
                conn.close()
                raise ConnectivityError(f"failed to configure sqlite database {self.path!r}", cause=e) from e

            self._conn = conn

        logger.debug("sqlite_connection_opened", path=self.path, pragmas=pragmas)

    def close(self) -> None:
        """Close the connection. Waits for the current checkout to finish."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.debug("sqlite_connection_closed", path=self.path)

    def describe(self) -> str:
        """Connection-identifying string for diagnostics."""
        return self.path

    def _acquire(self, ctx: CallContext | None) -> None:
        if ctx is None:
            self._lock.acquire()
            return

        while True:
            ctx.check("connection checkout")
            wait = _CHECKOUT_POLL_SECONDS
            remaining = ctx.remaining()
            if remaining is not None:
                wait = min(wait, remaining)
            if self._lock.acquire(timeout=wait):
                return
            if ctx.done:
                raise OperationCancelledError("gave up waiting for the sqlite connection")

    @contextmanager
    def connection(self, ctx: CallContext | None = None) -> Iterator[sqlite3.Connection]:
        """Check out the single connection.

        While checked out, a progress handler interrupts the running
        statement as soon as ``ctx`` is cancelled or past its deadline.

        Raises:
            StoreClosedError: If the pool is not open
            OperationCancelledError: If ``ctx`` is done before checkout
        """
        self._acquire(ctx)
        try:
            conn = self._conn
            if conn is None:
                raise StoreClosedError(f"sqlite connection to {self.path!r} is not open")

            if ctx is None:
                yield conn
                return

            conn.set_progress_handler(lambda: 1 if ctx.done else 0, PROGRESS_INTERVAL)
            try:
                yield conn
            finally:
                conn.set_progress_handler(None, 0)
        finally:
            self._lock.release()

    @contextmanager
    def transaction(self, ctx: CallContext | None = None) -> Iterator[sqlite3.Connection]:
        """Check out the connection inside an immediate write transaction.

        Commits when the block exits normally. Any exception rolls the
        transaction back before it propagates, so no partial write is ever
        visible.
        """
        with self.connection(ctx) as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
                conn.execute("COMMIT")
            except BaseException:
                # Never let cancellation interrupt the rollback itself
                conn.set_progress_handler(None, 0)
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise


def connect(path: str, config: SqliteConfig | None = None) -> SqliteConnectionPool:
    """Open (or create) the database at ``path``.

    Args:
        path: Filesystem path or ``sqlite:///`` connection string
        config: SQLite settings; defaults to :func:`get_sqlite_config`

    Returns:
        An open single-connection pool
    """
    pool = SqliteConnectionPool(path, config)
    pool.open()
    return pool
