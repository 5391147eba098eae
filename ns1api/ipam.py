"""IPAM addresses."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AddrStatus(str, Enum):
    """Status of an address; the API defaults to ``planned``."""

    PLANNED = "planned"
    ASSIGNED = "assigned"


def _status(raw: Any) -> AddrStatus | str:
    try:
        return AddrStatus(raw)
    except ValueError:
        return raw


@dataclass
class Address:
    """An IPAM address or network prefix."""

    id: int = 0
    desc: str = ""
    prefix: str = ""
    name: str = ""
    network: int = 0
    status: AddrStatus | str = ""
    inherited_tags: str = ""
    total: str = ""
    children: int = 0
    free: str = ""
    used: str = ""
    kvps: dict = field(default_factory=dict)
    tags: dict = field(default_factory=dict)
    dhcp_scoped: bool = False
    parent: int = 0

    def to_dict(self) -> dict:
        out: dict = {"id": self.id}
        if self.desc:
            out["desc"] = self.desc
        out["prefix"] = self.prefix
        if self.name:
            out["name"] = self.name
        if self.network:
            out["network_id"] = self.network
        if self.status:
            out["status"] = (
                self.status.value if isinstance(self.status, AddrStatus) else self.status
            )
        if self.inherited_tags:
            out["inherited_tags"] = self.inherited_tags
        out["total_addresses"] = self.total
        out["children"] = self.children
        out["free_addresses"] = self.free
        out["used_addresses"] = self.used
        if self.kvps:
            out["kvps"] = dict(self.kvps)
        out["tags"] = dict(self.tags)
        out["dhcp_scoped"] = self.dhcp_scoped
        out["parent_id"] = self.parent
        return out

    @classmethod
    def from_dict(cls, data: Mapping) -> "Address":
        if not isinstance(data, Mapping):
            raise TypeError(f"Address must be decoded from a mapping, got {type(data).__name__}")

        def get(key: str, default: Any) -> Any:
            value = data.get(key)
            return default if value is None else value

        status = data.get("status")
        return cls(
            id=get("id", 0),
            desc=get("desc", ""),
            prefix=get("prefix", ""),
            name=get("name", ""),
            network=get("network_id", 0),
            status="" if status is None else _status(status),
            inherited_tags=get("inherited_tags", ""),
            total=get("total_addresses", ""),
            children=get("children", 0),
            free=get("free_addresses", ""),
            used=get("used_addresses", ""),
            kvps=dict(get("kvps", {})),
            tags=dict(get("tags", {})),
            dhcp_scoped=get("dhcp_scoped", False),
            parent=get("parent_id", 0),
        )