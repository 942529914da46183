"""Diagnostic snapshot of a store."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StoreInfo:
    """What ``info()`` reports. Not meant for control flow."""

    store_type: str = "sqlite"
    kind: str = ""
    num_items: int = 0
    last_item_created_at: int = 0
    connection_info: str = ""
