"""
SQL construction for record queries.

Predicate, ordering and pagination fragments are built independently and
concatenated into one statement. Every caller-supplied value is bound as a
parameter. Column names cannot be bound, so they are checked against the
record kind's column list before they reach the statement text.
"""

from __future__ import annotations

from typing import Any

from ledgerstore.errors import ValidationError
from ledgerstore.persistence.criteria import RecordQuery, UniqueQuery
from ledgerstore.persistence.kinds import RecordKind


def _require_column(kind: RecordKind[Any], column: str) -> str:
    if not kind.is_column(column):
        raise ValidationError(f"unknown {kind.label} column: {column!r}")
    return column


def build_where(kind: RecordKind[Any], query: RecordQuery) -> tuple[str, list[Any]]:
    """Build the WHERE fragment for ``list()``.

    Returns:
        Fragment (empty, or starting with a space) and its parameters
    """
    clauses: list[str] = []
    params: list[Any] = []

    if query.tenant_uuid:
        clauses.append("tenant_uuid = ?")
        params.append(query.tenant_uuid)

    if query.aggregate_uuid:
        if not kind.supports_filter("aggregate_uuid"):
            raise ValidationError(f"{kind.label} records cannot be filtered by aggregate_uuid")
        clauses.append("aggregate_uuid = ?")
        params.append(query.aggregate_uuid)

    if query.data_type:
        clauses.append("data_type = ?")
        params.append(query.data_type)

    if query.domains:
        placeholders = ", ".join("?" * len(query.domains))
        clauses.append(f"domain IN ({placeholders})")
        params.extend(query.domains)

    if query.before is not None:
        clauses.append("created_at < ?")
        params.append(query.before)

    if query.after is not None:
        clauses.append("created_at > ?")
        params.append(query.after)

    if not clauses:
        return "", []
    return " WHERE " + " AND ".join(clauses), params


def build_unique_where(query: UniqueQuery) -> tuple[str, list[Any]]:
    """Build the WHERE fragment for ``unique_list()``."""
    clauses: list[str] = []
    params: list[Any] = []

    if query.tenant_uuid:
        clauses.append("tenant_uuid = ?")
        params.append(query.tenant_uuid)

    if query.domain:
        clauses.append("domain = ?")
        params.append(query.domain)

    if not clauses:
        return "", []
    return " WHERE " + " AND ".join(clauses), params


def build_order_by(
    kind: RecordKind[Any],
    column: str,
    ascending: bool,
    tiebreak: bool = False,
) -> str:
    """Build the ORDER BY fragment.

    With ``tiebreak``, rows with equal sort keys are ordered by surrogate
    id in the same direction, which keeps page boundaries stable.
    """
    if not column:
        return ""
    _require_column(kind, column)
    direction = "ASC" if ascending else "DESC"
    fragment = f" ORDER BY {column} {direction}"
    if tiebreak and column != "id":
        fragment += f", id {direction}"
    return fragment


def build_pagination(limit: int, offset: int) -> tuple[str, list[Any]]:
    """Build LIMIT/OFFSET. Negative values drop the respective clause."""
    if limit >= 0 and offset >= 0:
        return " LIMIT ? OFFSET ?", [limit, offset]
    if limit >= 0:
        return " LIMIT ?", [limit]
    if offset >= 0:
        # SQLite only accepts OFFSET after a LIMIT; -1 means unbounded
        return " LIMIT -1 OFFSET ?", [offset]
    return "", []


def select_by_uuid_sql(kind: RecordKind[Any], uuid: str | None) -> tuple[str, list[Any]]:
    """Statement for ``get()``. Without a uuid any single row may come back."""
    if uuid:
        return f"SELECT {kind.select_list} FROM {kind.table} WHERE uuid = ? LIMIT 1", [uuid]
    return f"SELECT {kind.select_list} FROM {kind.table} LIMIT 1", []


def list_sql(kind: RecordKind[Any], query: RecordQuery) -> tuple[str, list[Any]]:
    """Statement returning one page of ``list()`` results."""
    where, params = build_where(kind, query)
    order_by = build_order_by(kind, query.order_by, query.ascending, tiebreak=True)
    pagination, page_params = build_pagination(query.limit, query.offset)
    sql = f"SELECT {kind.select_list} FROM {kind.table}{where}{order_by}{pagination}"
    return sql, params + page_params


def count_sql(kind: RecordKind[Any], query: RecordQuery) -> tuple[str, list[Any]]:
    """Statement counting every match of ``query``, ignoring pagination."""
    where, params = build_where(kind, query)
    return f"SELECT COUNT(id) FROM {kind.table}{where}", params


def unique_list_sql(kind: RecordKind[Any], query: UniqueQuery) -> tuple[str, list[Any]]:
    """Statement returning one page of distinct values of ``query.db_field``."""
    column = _require_column(kind, query.db_field)
    where, params = build_unique_where(query)
    order_by = build_order_by(kind, column, query.ascending)
    pagination, page_params = build_pagination(query.limit, query.offset)
    sql = f"SELECT DISTINCT {column} FROM {kind.table}{where}{order_by}{pagination}"
    return sql, params + page_params


def unique_count_sql(kind: RecordKind[Any], query: UniqueQuery) -> tuple[str, list[Any]]:
    """Statement counting distinct values of ``query.db_field``."""
    column = _require_column(kind, query.db_field)
    where, params = build_unique_where(query)
    return f"SELECT COUNT(DISTINCT {column}) FROM {kind.table}{where}", params
