"""
Store options.

Options are small callables applied left-to-right to a StoreOptions
instance. An option that cannot be applied raises ConfigurationError,
which stops the remaining options from running.

Usage:
    store = EventStore(
        "./events.db",
        with_cipher(AesGcmCipher(key)),
        with_attribute("owner", "billing"),
    )
    store.init()
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ledgerstore.errors import ConfigurationError
from ledgerstore.persistence.cipher import Cipher
from ledgerstore.persistence.sqlite_config import SqliteConfig

StoreOption = Callable[["StoreOptions"], None]


@dataclass
class StoreOptions:
    """Configuration held by an event or command store.

    Attributes:
        read_only: Reject every mutating operation and skip schema creation
        cipher: Encrypts payloads at rest when set
        attributes: Opaque caller key/value bag, never interpreted
        sqlite: Connection settings; None means the process default
    """

    read_only: bool = False
    cipher: Cipher | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    sqlite: SqliteConfig | None = None

    def get_attribute(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)


def apply_options(options: StoreOptions, *opts: StoreOption) -> StoreOptions:
    """Apply ``opts`` in order and return the resulting options.

    The options are applied to a copy; ``options`` itself is left
    untouched, so a failing option leaves no half-applied state behind.

    Raises:
        ConfigurationError: From the first option that fails
    """
    result = copy.copy(options)
    result.attributes = dict(options.attributes)
    for opt in opts:
        if not callable(opt):
            raise ConfigurationError(f"invalid store option: {opt!r}")
        opt(result)
    return result


def with_read_only(read_only: bool = True) -> StoreOption:
    """Open the store read-only."""

    def apply(options: StoreOptions) -> None:
        options.read_only = bool(read_only)

    return apply


def with_cipher(cipher: Cipher) -> StoreOption:
    """Encrypt payloads at rest with ``cipher``."""

    def apply(options: StoreOptions) -> None:
        if cipher is None:
            raise ConfigurationError("cipher must not be None")
        if not isinstance(cipher, Cipher):
            raise ConfigurationError(f"{type(cipher).__name__} does not provide encrypt/decrypt")
        options.cipher = cipher

    return apply


def with_attribute(key: str, value: Any) -> StoreOption:
    """Attach one opaque attribute to the store."""

    def apply(options: StoreOptions) -> None:
        if not key:
            raise ConfigurationError("attribute key must not be empty")
        options.attributes[key] = value

    return apply


def with_attributes(attributes: Mapping[str, Any]) -> StoreOption:
    """Attach several opaque attributes to the store."""

    def apply(options: StoreOptions) -> None:
        for key, value in attributes.items():
            with_attribute(key, value)(options)

    return apply


def with_sqlite_config(config: SqliteConfig) -> StoreOption:
    """Use explicit SQLite settings instead of the process default."""

    def apply(options: StoreOptions) -> None:
        config.validate()
        options.sqlite = config

    return apply
