"""Query criteria for listing records."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LIMIT = 100


@dataclass
class RecordQuery:
    """
    Criteria for ``list()``.

    Unset (None or empty) filters are not applied; set filters are combined
    with AND. ``before``/``after`` are strict bounds on ``created_at``.
    A negative ``limit`` or ``offset`` drops that clause. An empty
    ``order_by`` drops ordering altogether.
    """

    tenant_uuid: str | None = None
    aggregate_uuid: str | None = None  # events only
    data_type: str | None = None
    domains: list[str] | None = None
    before: int | None = None
    after: int | None = None
    offset: int = 0
    limit: int = DEFAULT_LIMIT
    order_by: str = "created_at"
    ascending: bool = True


@dataclass
class UniqueQuery:
    """Criteria for ``unique_list()``: distinct values of one column."""

    db_field: str = "tenant_uuid"
    tenant_uuid: str | None = None
    domain: str | None = None
    offset: int = 0
    limit: int = DEFAULT_LIMIT
    ascending: bool = True
