"""Data sources, feeds, destinations and regions."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ns1api.meta import Meta


def _require_mapping(data: Any, what: str) -> Mapping:
    if not isinstance(data, Mapping):
        raise TypeError(f"{what} must be decoded from a mapping, got {type(data).__name__}")
    return data


def _str(data: Mapping, key: str) -> str:
    value = data.get(key)
    return "" if value is None else value


def _meta(raw: Any) -> Meta:
    return Meta() if raw is None else Meta.from_dict(raw)


@dataclass
class Destination:
    """The record a feed or source delivers data to.

    ``dest_type`` is the level at which the data applies: ``answer``,
    ``region`` or ``record``.
    """

    id: str = ""
    record_id: str = ""
    dest_type: str = ""
    source_id: str = ""

    def to_dict(self) -> dict:
        return {"destid": self.id, "record": self.record_id, "desttype": self.dest_type}

    @classmethod
    def from_dict(cls, data: Mapping) -> "Destination":
        data = _require_mapping(data, "Destination")
        return cls(
            id=_str(data, "destid"),
            record_id=_str(data, "record"),
            dest_type=_str(data, "desttype"),
        )


def new_destination() -> Destination:
    """Return an empty feed destination."""
    return Destination()


@dataclass
class Feed:
    """A data feed belonging to a data source."""

    id: str = ""
    name: str = ""
    config: dict = field(default_factory=dict)
    data: Meta = field(default_factory=Meta)
    source_id: str = ""

    def to_dict(self) -> dict:
        out: dict = {}
        if self.id:
            out["id"] = self.id
        out["name"] = self.name
        if self.config:
            out["config"] = dict(self.config)
        out["data"] = self.data.to_dict()
        out["SourceID"] = self.source_id
        return out

    @classmethod
    def from_dict(cls, data: Mapping) -> "Feed":
        data = _require_mapping(data, "Feed")
        return cls(
            id=_str(data, "id"),
            name=_str(data, "name"),
            config=dict(data.get("config") or {}),
            data=_meta(data.get("data")),
            source_id=_str(data, "SourceID"),
        )


def new_feed(name: str, config: dict) -> Feed:
    """Return a data feed with the given name and config."""
    return Feed(name=name, config=config)


@dataclass
class Region:
    """A named grouping of metadata inside a record."""

    meta: Meta = field(default_factory=Meta)

    def to_dict(self) -> dict:
        return {"meta": self.meta.to_dict()}

    @classmethod
    def from_dict(cls, data: Mapping) -> "Region":
        data = _require_mapping(data, "Region")
        return cls(meta=_meta(data.get("meta")))


Regions = dict


@dataclass
class Source:
    """A data source that feeds publish through."""

    id: str = ""
    name: str = ""
    source_type: str = ""
    config: dict = field(default_factory=dict)
    status: str = ""
    feeds: list = field(default_factory=list)

    def to_dict(self) -> dict:
        out: dict = {}
        if self.id:
            out["id"] = self.id
        out["name"] = self.name
        out["sourcetype"] = self.source_type
        if self.config:
            out["config"] = dict(self.config)
        if self.status:
            out["status"] = self.status
        if self.feeds:
            out["feeds"] = [feed.to_dict() for feed in self.feeds]
        return out

    @classmethod
    def from_dict(cls, data: Mapping) -> "Source":
        data = _require_mapping(data, "Source")
        return cls(
            id=_str(data, "id"),
            name=_str(data, "name"),
            source_type=_str(data, "sourcetype"),
            config=dict(data.get("config") or {}),
            status=_str(data, "status"),
            feeds=[Feed.from_dict(item) for item in data.get("feeds") or []],
        )


def new_source(name: str, source_type: str) -> Source:
    """Return a source with the given name and type, no config and no feeds."""
    return Source(name=name, source_type=source_type, config={}, feeds=[])