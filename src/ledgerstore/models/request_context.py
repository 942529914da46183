"""Request context attached to commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class RequestContext:
    """Who sent a command and what it targets.

    Unlike the domain payload, the store knows this shape and restores it
    eagerly when reading commands back.
    """

    sender_tenant_uuid: str = ""
    sender_identity_uuid: str = ""
    sender_session_uuid: str = ""
    target_tenant_uuid: str = ""
    target_workspace_uuid: str = ""
    target_aggregate_uuid: str = ""
    target_aggregate_version: int = 0
    attributes: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sender_tenant_uuid": self.sender_tenant_uuid,
            "sender_identity_uuid": self.sender_identity_uuid,
            "sender_session_uuid": self.sender_session_uuid,
            "target_tenant_uuid": self.target_tenant_uuid,
            "target_workspace_uuid": self.target_workspace_uuid,
            "target_aggregate_uuid": self.target_aggregate_uuid,
            "target_aggregate_version": self.target_aggregate_version,
            "attributes": dict(self.attributes),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RequestContext:
        """Build from a dict, ignoring keys this version does not know."""
        return cls(
            sender_tenant_uuid=data.get("sender_tenant_uuid") or "",
            sender_identity_uuid=data.get("sender_identity_uuid") or "",
            sender_session_uuid=data.get("sender_session_uuid") or "",
            target_tenant_uuid=data.get("target_tenant_uuid") or "",
            target_workspace_uuid=data.get("target_workspace_uuid") or "",
            target_aggregate_uuid=data.get("target_aggregate_uuid") or "",
            target_aggregate_version=int(data.get("target_aggregate_version") or 0),
            attributes=dict(data.get("attributes") or {}),
        )
