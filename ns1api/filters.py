"""Filters that make up a record's filter chain."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass
class Filter:
    """One step of a record's filter chain."""

    filter_type: str = ""
    disabled: bool = False
    config: dict = field(default_factory=dict)

    def enable(self) -> None:
        self.disabled = False

    def disable(self) -> None:
        self.disabled = True

    def to_dict(self) -> dict:
        out: dict = {"filter": self.filter_type}
        if self.disabled:
            out["disabled"] = True
        out["config"] = dict(self.config)
        return out

    @classmethod
    def from_dict(cls, data: Mapping) -> "Filter":
        if not isinstance(data, Mapping):
            raise TypeError(f"Filter must be decoded from a mapping, got {type(data).__name__}")
        return cls(
            filter_type=data.get("filter") or "",
            disabled=bool(data.get("disabled") or False),
            config=dict(data.get("config") or {}),
        )


def new_sel_first_n(n: int) -> Filter:
    """Keep only the first ``n`` answers."""
    return Filter("select_first_n", config={"N": n})


def new_shuffle() -> Filter:
    """Sort the answers randomly."""
    return Filter("shuffle")


def new_sel_first_region() -> Filter:
    """Keep only the answers in the same region as the first answer."""
    return Filter("select_first_n")


def new_sticky_region(by_network: bool) -> Filter:
    """Order regions per requester, grouping answers by region."""
    return Filter("sticky_region", config={"sticky_by_network": by_network})


def new_geofence_country(rm_no_loc: bool) -> Filter:
    """Keep answers in the requester's country, state or province."""
    return Filter("geofence_country", config={"remove_no_location": rm_no_loc})


def new_geofence_regional(rm_no_geo: bool) -> Filter:
    """Keep answers in the requester's geographical region."""
    return Filter("geofence_regional", config={"remove_no_georegion": rm_no_geo})


def new_geotarget_country() -> Filter:
    """Sort answers by distance by country, US state or Canadian province."""
    return Filter("geotarget_country")


def new_geotarget_latlong() -> Filter:
    """Sort answers by distance using latitude and longitude."""
    return Filter("geotarget_latlong")


def new_geotarget_regional() -> Filter:
    """Sort answers by distance by geographical region."""
    return Filter("geotarget_regional")


def new_sticky(by_network: bool) -> Filter:
    """Order answers uniquely per requester."""
    return Filter("sticky", config={"sticky_by_network": by_network})


def new_weighted_sticky(by_network: bool) -> Filter:
    """Shuffle answers per requester, based on weight."""
    return Filter("weighted_sticky", config={"sticky_by_network": by_network})


def new_ipv4_prefix_shuffle(n: int) -> Filter:
    """Pick ``n`` random IPv4 addresses from each answer's prefix list."""
    return Filter("ipv4_prefix_shuffle", config={"N": n})


def new_netfence_asn(rm_no_asn: bool) -> Filter:
    """Keep answers whose ASN list holds the requester's ASN."""
    return Filter("netfence_asn", config={"remove_no_asn": rm_no_asn})


def new_netfence_prefix(rm_no_ip_prefix: bool) -> Filter:
    """Keep answers whose prefix list holds the requester's IP."""
    return Filter("netfence_prefix", config={"remove_no_ip_prefixes": rm_no_ip_prefix})


def new_up() -> Filter:
    """Drop answers whose ``up`` metadata is not true."""
    return Filter("up")


def new_priority() -> Filter:
    """Fail over between prioritized answer tiers."""
    return Filter("priority")


def new_shed_load(metric: str) -> Filter:
    """Shed traffic from answers based on the given load metric."""
    return Filter("shed_load", config={"metric": metric})


def new_weighted_shuffle() -> Filter:
    """Shuffle answers randomly based on their weight."""
    return Filter("weighted_shuffle")