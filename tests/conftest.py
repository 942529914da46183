"""Shared pytest fixtures for the event and command store tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from ledgerstore.crypto import AesGcmCipher, generate_key
from ledgerstore.models import Command, Event, RequestContext, new_uuid
from ledgerstore.persistence.sqlite_config import reset_sqlite_config
from ledgerstore.stores import CommandStore, EventStore


@pytest.fixture(autouse=True)
def reset_sqlite_config_singleton() -> Generator[None, None, None]:
    """Reset the process-wide SQLite config between tests for isolation."""
    reset_sqlite_config()
    yield
    reset_sqlite_config()


# =============================================================================
# Record Factories
# =============================================================================


def make_event(
    tenant_uuid: str = "tenant-1",
    aggregate_uuid: str = "aggregate-1",
    domain: str = "billing",
    data_type: str = "InvoiceIssued",
    created_at: int = 1000,
    version: int = 1,
    payload: bytes = b'{"amount": 10}',
) -> Event:
    """Build an event with a fresh uuid."""
    return Event(
        event_uuid=new_uuid(),
        instance_id=1,
        tenant_uuid=tenant_uuid,
        command_uuid=new_uuid(),
        domain=domain,
        aggregate_uuid=aggregate_uuid,
        version=version,
        created_at=created_at,
        data_type=data_type,
        data_bytes=payload,
    )


def make_command(
    tenant_uuid: str = "tenant-1",
    domain: str = "billing",
    data_type: str = "IssueInvoice",
    created_at: int = 1000,
    payload: bytes = b'{"amount": 10}',
    req_ctx: RequestContext | None = None,
) -> Command:
    """Build a command with a fresh uuid."""
    return Command(
        command_uuid=new_uuid(),
        instance_id=1,
        tenant_uuid=tenant_uuid,
        domain=domain,
        created_at=created_at,
        data_type=data_type,
        data_bytes=payload,
        req_ctx=req_ctx,
    )


# =============================================================================
# Stores
# =============================================================================


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    return str(tmp_path / "ledger.db")


@pytest.fixture
def event_store(tmp_path: Path) -> Generator[EventStore, None, None]:
    """Initialised event store on a fresh file."""
    store = EventStore(str(tmp_path / "events.db"))
    store.init()
    yield store
    store.close()


@pytest.fixture
def command_store(tmp_path: Path) -> Generator[CommandStore, None, None]:
    """Initialised command store on a fresh file."""
    store = CommandStore(str(tmp_path / "commands.db"))
    store.init()
    yield store
    store.close()


@pytest.fixture
def cipher() -> AesGcmCipher:
    return AesGcmCipher(generate_key())
