"""
Shared store facade.

EventStore and CommandStore differ only in the record kind they serve.
This base holds their configuration, owns the engine and delegates every
operation to it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from ledgerstore.options import StoreOption, StoreOptions, apply_options
from ledgerstore.persistence.engine import RecordStoreEngine

if TYPE_CHECKING:
    from ledgerstore.context import CallContext
    from ledgerstore.models import StoreInfo
    from ledgerstore.persistence.criteria import RecordQuery, UniqueQuery
    from ledgerstore.persistence.kinds import RecordKind

R = TypeVar("R")


class RecordStore(Generic[R]):
    """
    Public store for one record kind, backed by a SQLite file.

    Options given to the constructor are applied immediately; ``init()``
    may apply more before it connects. Nothing touches the database until
    ``init()`` is called.

    Usage:
        store = EventStore("./events.db", with_attribute("owner", "billing"))
        store.init()
        store.create(event)
        events, total = store.list(RecordQuery(tenant_uuid="t1"))
        store.close()
    """

    kind: ClassVar[RecordKind[Any]]

    def __init__(self, path: str, *options: StoreOption) -> None:
        self._options = apply_options(StoreOptions(), *options)
        self._engine: RecordStoreEngine[R] = RecordStoreEngine(self.kind, path, self._options)

    def __str__(self) -> str:
        return str(self._engine)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"

    def __enter__(self) -> RecordStore[R]:
        if not self._engine.is_open:
            self.init()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def path(self) -> str:
        return self._engine.path

    @property
    def options(self) -> StoreOptions:
        return self._options

    def init(self, *options: StoreOption) -> None:
        """Apply ``options``, connect, and create the schema unless read-only.

        Raises:
            ConfigurationError: An option could not be applied
            ConnectivityError: The database could not be opened
        """
        self._options = apply_options(self._options, *options)
        self._engine.options = self._options
        self._engine.open()

    def close(self) -> None:
        self._engine.close()

    def create(self, record: R | None, ctx: CallContext | None = None) -> None:
        self._engine.create(record, ctx)

    def get(self, uuid: str | None = None, ctx: CallContext | None = None) -> R | None:
        return self._engine.get(uuid, ctx)

    def list(self, query: RecordQuery | None = None, ctx: CallContext | None = None) -> tuple[list[R], int]:
        return self._engine.list(query, ctx)

    def update(self, record: R | None, ctx: CallContext | None = None) -> int:
        return self._engine.update(record, ctx)

    def delete(self, uuid: str, ctx: CallContext | None = None) -> int:
        return self._engine.delete(uuid, ctx)

    def total(self, ctx: CallContext | None = None) -> int:
        return self._engine.total(ctx)

    def unique_list(self, query: UniqueQuery | None = None, ctx: CallContext | None = None) -> tuple[list[Any], int]:
        return self._engine.unique_list(query, ctx)

    def info(self, ctx: CallContext | None = None) -> StoreInfo:
        return self._engine.info(ctx)

    def reset(self) -> None:
        self._engine.reset()
