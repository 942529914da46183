"""
SQLite record store engine.

One engine class serves both record kinds; everything kind-specific comes
from the RecordKind descriptor it is constructed with.

Features:
- Single shared connection per store (see persistence.connection)
- Every write in its own immediate transaction, all-or-nothing
- Parameterized queries throughout
- Optional payload encryption through PayloadCipher
"""

from __future__ import annotations

import glob
import os
import sqlite3
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ledgerstore.errors import (
    LedgerStoreError,
    ReadOnlyError,
    StoreClosedError,
    ValidationError,
    translate_sqlite_error,
)
from ledgerstore.logging import store_logger
from ledgerstore.models import StoreInfo
from ledgerstore.persistence.cipher import PayloadCipher
from ledgerstore.persistence.connection import SqliteConnectionPool, parse_sqlite_path
from ledgerstore.persistence.converters import payload_to_text
from ledgerstore.persistence.criteria import RecordQuery, UniqueQuery
from ledgerstore.persistence.queries import (
    count_sql,
    list_sql,
    select_by_uuid_sql,
    unique_count_sql,
    unique_list_sql,
)
from ledgerstore.persistence.schema import create_tables

if TYPE_CHECKING:
    from ledgerstore.context import CallContext
    from ledgerstore.options import StoreOptions
    from ledgerstore.persistence.kinds import RecordKind

R = TypeVar("R")

STORE_TYPE = "sqlite"


class RecordStoreEngine(Generic[R]):
    """
    Create/get/list/update/delete engine for one record kind.

    The engine does not own its options: the facade passes them in and may
    replace them on re-initialisation.
    """

    def __init__(self, kind: RecordKind[R], path: str, options: StoreOptions) -> None:
        self.kind = kind
        self.path = parse_sqlite_path(path)
        self.options = options
        self._pool: SqliteConnectionPool | None = None
        self._logger = store_logger(kind.label, self.path)

    def __str__(self) -> str:
        return f"{STORE_TYPE} - {self.path}"

    # ========== Lifecycle ==========

    def open(self) -> None:
        """Connect and, unless read-only, create the schema.

        Raises:
            ConfigurationError: Invalid SQLite settings
            ConnectivityError: The file could not be opened or configured
            StorageError: Schema creation failed
        """
        if self._pool is None or self._pool.closed:
            pool = SqliteConnectionPool(self.path, self.options.sqlite)
            pool.open()
            self._pool = pool

        if not self.options.read_only:
            self.migrate()

        self._logger.info("store_opened", read_only=self.options.read_only, encrypted=self._cipher.enabled)

    def migrate(self) -> None:
        """Create the kind's table and indexes if they don't exist."""
        try:
            with self._get_pool().transaction() as conn:
                create_tables(conn, self.kind.schema)
        except sqlite3.Error as e:
            raise translate_sqlite_error(e, f"'{self}' failed to migrate {self.kind.table}") from e
        self._logger.debug("schema_migrated", table=self.kind.table)

    def close(self) -> None:
        if self._pool is not None:
            self._pool.close()
            self._pool = None
            self._logger.info("store_closed")

    @property
    def is_open(self) -> bool:
        return self._pool is not None and not self._pool.closed

    def _get_pool(self) -> SqliteConnectionPool:
        if self._pool is None:
            raise StoreClosedError(f"'{self}' is not initialised")
        return self._pool

    @property
    def _cipher(self) -> PayloadCipher:
        return PayloadCipher(self.options.cipher, str(self))

    # ========== Guards ==========

    def _check_writable(self, action: str) -> None:
        if self.options.read_only:
            raise ReadOnlyError(f"'{self}' failed to {action} - instance is readonly")

    def _check_record(self, record: R | None, action: str) -> R:
        label = self.kind.label
        if record is None:
            raise ValidationError(f"'{self}' failed to {action} {label} - {label} is nil")
        if not self.kind.uuid_of(record):
            raise ValidationError(f"'{self}' failed to {action} {label} - {label} uuid is invalid")
        return record

    def _log_swallowed(self, event: str, error: sqlite3.Error | LedgerStoreError, action: str) -> None:
        if isinstance(error, sqlite3.Error):
            error = translate_sqlite_error(error, f"'{self}' failed to {action}")
        self._logger.warning(event, **error.log_fields())

    def _prepare_row(self, record: R) -> dict[str, Any]:
        row = self.kind.to_row(record)
        if self.options.cipher is not None:
            self._cipher.encrypt_row(row)
        else:
            row["data_bytes"] = payload_to_text(row["data_bytes"])
        return row

    def _load_record(self, row: sqlite3.Row) -> R:
        data = dict(row)
        if self.options.cipher is not None:
            self._cipher.decrypt_row(data)
        return self.kind.from_row(data)

    # ========== Writes ==========

    def create(self, record: R | None, ctx: CallContext | None = None) -> None:
        """Insert one record in its own transaction."""
        self._check_writable(f"create {self.kind.label}")
        record = self._check_record(record, "create")
        row = self._prepare_row(record)

        try:
            with self._get_pool().transaction(ctx) as conn:
                cursor = conn.cursor()
                cursor.execute(self.kind.insert_sql, row)
                cursor.close()
        except sqlite3.Error as e:
            raise translate_sqlite_error(e, f"'{self}' failed to create {self.kind.label}") from e

        self._logger.debug("record_created", uuid=row["uuid"])

    def update(self, record: R | None, ctx: CallContext | None = None) -> int:
        """Replace every field of the row with the record's uuid.

        Returns:
            Number of rows changed; 0 when no row has that uuid
        """
        self._check_writable(f"update {self.kind.label}")
        record = self._check_record(record, "update")
        row = self._prepare_row(record)

        try:
            with self._get_pool().transaction(ctx) as conn:
                cursor = conn.cursor()
                cursor.execute(self.kind.update_sql, row)
                affected = cursor.rowcount
                cursor.close()
        except sqlite3.Error as e:
            raise translate_sqlite_error(e, f"'{self}' failed to update {self.kind.label}") from e

        if affected == 0:
            self._logger.debug("update_matched_no_rows", uuid=row["uuid"])
        else:
            self._logger.debug("record_updated", uuid=row["uuid"])
        return affected

    def delete(self, uuid: str, ctx: CallContext | None = None) -> int:
        """Delete the row with ``uuid``. Deleting a missing uuid is not an error.

        Returns:
            Number of rows removed
        """
        label = self.kind.label
        self._check_writable(f"delete {label}")
        if not uuid:
            raise ValidationError(f"'{self}' failed to delete {label} - {label} uuid {uuid!r} is invalid")

        try:
            with self._get_pool().transaction(ctx) as conn:
                cursor = conn.execute(f"DELETE FROM {self.kind.table} WHERE uuid = ?", (uuid,))
                affected = cursor.rowcount
        except sqlite3.Error as e:
            raise translate_sqlite_error(e, f"'{self}' failed to delete {label}") from e

        self._logger.debug("record_deleted", uuid=uuid, affected=affected)
        return affected

    def reset(self) -> None:
        """Close the store and delete every file prefixed by its path.

        This removes the database file along with any journal or WAL
        sidecars. The store must be initialised again before further use.
        """
        self._check_writable("reset")
        self.close()

        removed = []
        for filename in glob.glob(glob.escape(self.path) + "*"):
            os.remove(filename)
            removed.append(filename)

        self._logger.info("store_reset", files_removed=len(removed))

    # ========== Reads ==========

    def get(self, uuid: str | None = None, ctx: CallContext | None = None) -> R | None:
        """Fetch one record by uuid, or None when nothing matches.

        Without a uuid an unspecified row is returned; which one is not
        defined and may change between calls.
        """
        sql, params = select_by_uuid_sql(self.kind, uuid)
        try:
            with self._get_pool().connection(ctx) as conn:
                row = conn.execute(sql, params).fetchone()
        except sqlite3.Error as e:
            raise translate_sqlite_error(e, f"'{self}' failed to get {self.kind.label}") from e

        if row is None:
            return None
        return self._load_record(row)

    def list(self, query: RecordQuery | None = None, ctx: CallContext | None = None) -> tuple[list[R], int]:
        """List one page of records matching ``query``.

        Returns:
            The page and the total number of matches ignoring pagination
        """
        query = query or RecordQuery()
        page_sql, page_params = list_sql(self.kind, query)
        total_sql, total_params = count_sql(self.kind, query)

        try:
            with self._get_pool().connection(ctx) as conn:
                total = conn.execute(total_sql, total_params).fetchone()[0]
                rows = conn.execute(page_sql, page_params).fetchall()
        except sqlite3.Error as e:
            raise translate_sqlite_error(e, f"'{self}' failed to list {self.kind.table}") from e

        return [self._load_record(row) for row in rows], int(total or 0)

    def unique_list(self, query: UniqueQuery | None = None, ctx: CallContext | None = None) -> tuple[list[Any], int]:
        """Distinct values of one column.

        Returns:
            One page of values and the number of distinct values ignoring
            pagination
        """
        query = query or UniqueQuery()
        values_sql, values_params = unique_list_sql(self.kind, query)
        total_sql, total_params = unique_count_sql(self.kind, query)

        try:
            with self._get_pool().connection(ctx) as conn:
                values = [row[0] for row in conn.execute(values_sql, values_params).fetchall()]
                total = conn.execute(total_sql, total_params).fetchone()[0]
        except sqlite3.Error as e:
            raise translate_sqlite_error(e, f"'{self}' failed to list unique {query.db_field}") from e

        return values, int(total or 0)

    def total(self, ctx: CallContext | None = None) -> int:
        """Count all rows. Any failure yields 0."""
        try:
            with self._get_pool().connection(ctx) as conn:
                row = conn.execute(f"SELECT COUNT(id) FROM {self.kind.table}").fetchone()
        except (sqlite3.Error, LedgerStoreError) as e:
            self._log_swallowed("total_failed", e, f"count {self.kind.label}s")
            return 0
        return int(row[0] or 0)

    def info(self, ctx: CallContext | None = None) -> StoreInfo:
        """Diagnostic snapshot. Any failure yields zero counts."""
        num_items = 0
        last_created_at = 0
        try:
            with self._get_pool().connection(ctx) as conn:
                row = conn.execute(
                    f"SELECT COUNT(uuid), COALESCE(MAX(created_at), 0) FROM {self.kind.table}"
                ).fetchone()
            num_items, last_created_at = int(row[0] or 0), int(row[1] or 0)
        except (sqlite3.Error, LedgerStoreError) as e:
            self._log_swallowed("info_failed", e, "collect info")

        return StoreInfo(
            store_type=STORE_TYPE,
            kind=self.kind.label,
            num_items=num_items,
            last_item_created_at=last_created_at,
            connection_info=self._pool.describe() if self._pool is not None else self.path,
        )
