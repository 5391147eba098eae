"""Metadata tables attached to zones, records, regions and answers.

Metadata key/value pairs are used by a record's filter chain. Every value
may also be a :class:`FeedPtr`, meaning a data feed supplies it.
"""

from __future__ import annotations

import ipaddress
import json
import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Optional

from ns1api.strcase import to_camel

GEOREGIONS = frozenset(
    {"US-EAST", "US-CENTRAL", "US-WEST", "EUROPE", "ASIAPAC", "SOUTH-AMERICA", "AFRICA"}
)

_NOTE_MAX_BYTES = 256


class MetaValidationError(ValueError):
    """A problem found in one metadata field."""


@dataclass(frozen=True)
class FeedPtr:
    """A metadata value supplied by the data feed with the given id."""

    feed_id: str = ""

    def to_dict(self) -> dict:
        return {"feed": self.feed_id} if self.feed_id else {}

    @classmethod
    def from_dict(cls, data: dict) -> "FeedPtr":
        feed = data.get("feed")
        if feed is not None and not isinstance(feed, str):
            raise TypeError(f"feed id must be a string, got {type(feed).__name__}")
        return cls(feed or "")


@dataclass
class PulsarMeta:
    """A Pulsar telemetry job reference; used for validation."""

    job_id: str = ""
    bias: str = ""
    a5m_cutoff: float = 0.0


def _json_default(value: Any) -> Any:
    if isinstance(value, FeedPtr):
        return value.to_dict()
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


def _marshal(value: Any) -> str:
    text = json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        default=_json_default,
    )
    for char, escaped in (
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("&", "\\u0026"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(char, escaped)
    return text


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _loads(text: str) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def _folded(mapping: dict, name: str) -> Any:
    if name in mapping:
        return mapping[name]
    for key, value in mapping.items():
        if isinstance(key, str) and key.lower() == name:
            return value
    return None


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def _describe(value: Any) -> str:
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def format_interface(value: Any) -> str:
    """Return the string form of a metadata value."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (list, tuple)):
        parts = []
        for item in value:
            if isinstance(item, dict):
                return _marshal(list(value))
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, float):
                parts.append(_format_float(item))
            elif isinstance(item, int) and not isinstance(item, bool):
                parts.append(str(item))
        return ",".join(parts)
    if isinstance(value, dict):
        feed = value.get("feed")
        if isinstance(feed, str):
            return _marshal(FeedPtr(feed).to_dict())
        return _marshal(value)
    if isinstance(value, FeedPtr):
        return _marshal(value.to_dict())
    raise TypeError(
        f"expected value to be convertible to a string, got: {value!r}, {type(value).__name__}"
    )


_FLOAT_SYNTAX = re.compile(
    r"(?:[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?)|nan)",
    re.IGNORECASE,
)


def _parse_float(s: str) -> Optional[float]:
    if not _FLOAT_SYNTAX.fullmatch(s):
        return None
    number = float(s)
    if math.isinf(number) and "inf" not in s.lower():
        return None
    return number


def _try_feed_ptr(s: str) -> Optional[FeedPtr]:
    try:
        decoded = _loads(s)
    except ValueError:
        return None
    if decoded is None:
        return FeedPtr()
    if not isinstance(decoded, dict):
        return None
    feed = _folded(decoded, "feed")
    if feed is None:
        return FeedPtr()
    if isinstance(feed, str):
        return FeedPtr(feed)
    return None


def _is_integral(number: float) -> bool:
    if math.isnan(number) or math.isinf(number):
        return False
    return -(2**63) <= number < 2**63 and number.is_integer()


def parse_type(s: str) -> Any:
    """Parse a string into a sorted list, FeedPtr, int, float or the string itself."""
    pieces = s.split(",")
    if len(pieces) > 1:
        return sorted(pieces)

    feed_ptr = _try_feed_ptr(s)
    if feed_ptr is not None:
        return feed_ptr

    number = _parse_float(s)
    if number is not None:
        return int(number) if _is_integral(number) else number

    return s


def geo_key_string() -> str:
    """Return all valid georegions, sorted and comma separated."""
    return ",".join(sorted(GEOREGIONS))


def _kind(value: Any) -> str:
    if value is None:
        return "invalid"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float64"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "slice"
    if isinstance(value, dict):
        return "map"
    return "struct"


_Check = Callable[[Any, str], Optional[str]]


def _positive(label: str) -> _Check:
    def check(value: Any, kind: str) -> Optional[str]:
        if kind == "int":
            number = value
        elif kind == "float64":
            if math.isnan(value):
                number = 0
            elif math.isinf(value):
                number = -1 if value < 0 else 1
            else:
                number = math.trunc(value)
        else:
            return None
        if number < 0:
            return f"{label} must be a positive number, was {_describe(value)}"
        return None

    return check


def _lat_long(value: Any, kind: str) -> Optional[str]:
    if kind == "float64" and (value < -180.0 or value > 180.0):
        return f"latitude/longitude values must be between -180.0 and 180.0, got {value:f}"
    return None


def _is_cidr(text: str) -> bool:
    address, slash, prefix = text.partition("/")
    if not slash or "%" in address or not prefix.isascii() or not prefix.isdigit():
        return False
    try:
        parsed = ipaddress.ip_address(address)
    except ValueError:
        return False
    return int(prefix) <= parsed.max_prefixlen


def _cidr(value: Any, kind: str) -> Optional[str]:
    if kind == "string" and not _is_cidr(value):
        return f"invalid CIDR address: {value}"
    if kind == "slice":
        for item in value:
            if not isinstance(item, str) or not _is_cidr(item):
                return f"{item} is not a valid CIDR block"
    return None


def _items(value: Any, kind: str) -> list:
    if kind == "string":
        return [value]
    if kind == "slice":
        return list(value)
    return []


def _georegion(value: Any, kind: str) -> Optional[str]:
    for item in _items(value, kind):
        if not isinstance(item, str) or item not in GEOREGIONS:
            return f"georegion must be one or more of {geo_key_string()}, found {item}"
    return None


def _country_state_province(value: Any, kind: str) -> Optional[str]:
    for item in _items(value, kind):
        if not isinstance(item, str) or len(item.encode("utf-8")) != 2:
            return (
                "country/state/province codes must be 2 digits as specified "
                f"in ISO3166/ISO3166-2, got: {item}"
            )
    return None


def _note_length(value: Any, kind: str) -> Optional[str]:
    if kind == "string":
        size = len(value.encode("utf-8"))
        if size > _NOTE_MAX_BYTES:
            return f"note length must be less than 256 characters, was {size}"
    return None


def _optional_str(item: dict, name: str) -> str:
    value = _folded(item, name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string")
    return value


def _decode_pulsars(text: str) -> list[PulsarMeta]:
    decoded = _loads(text)
    if decoded is None:
        return []
    if not isinstance(decoded, list):
        raise ValueError("pulsar metadata must be a list")
    pulsars = []
    for item in decoded:
        if not isinstance(item, dict):
            raise ValueError("pulsar entries must be objects")
        cutoff = _folded(item, "a5m_cutoff")
        if cutoff is None:
            cutoff = 0.0
        elif isinstance(cutoff, bool) or not isinstance(cutoff, (int, float)):
            raise ValueError("a5m_cutoff must be a number")
        pulsars.append(
            PulsarMeta(
                job_id=_optional_str(item, "job_id"),
                bias=_optional_str(item, "bias"),
                a5m_cutoff=float(cutoff),
            )
        )
    return pulsars


def _pulsar(value: Any, kind: str) -> Optional[str]:
    if kind == "slice":
        try:
            text = json.dumps(list(value), allow_nan=False, default=_json_default)
        except (TypeError, ValueError):
            return f"pulsar: unexpected value: `{value}`"
    elif kind == "string":
        text = value
    else:
        return None
    try:
        pulsars = _decode_pulsars(text)
    except ValueError:
        return f"pulsar: invalid value: `{value}`"
    if any(not pulsar.job_id for pulsar in pulsars):
        return "pulsar Job ID is required"
    return None


@dataclass(frozen=True)
class _FieldSpec:
    attr: str
    key: str
    go_name: str
    kinds: tuple[str, ...]
    checks: tuple[_Check, ...] = ()


_FIELDS: tuple[_FieldSpec, ...] = (
    _FieldSpec("up", "up", "Up", ("bool",)),
    _FieldSpec("connections", "connections", "Connections", ("int",), (_positive("connections"),)),
    _FieldSpec("requests", "requests", "Requests", ("int",), (_positive("requests"),)),
    _FieldSpec("load_avg", "loadavg", "LoadAvg", ("float64", "int"), (_positive("loadavg"),)),
    _FieldSpec("pulsar", "pulsar", "Pulsar", ("string", "slice"), (_pulsar,)),
    _FieldSpec("latitude", "latitude", "Latitude", ("float64", "int"), (_lat_long,)),
    _FieldSpec("longitude", "longitude", "Longitude", ("float64", "int"), (_lat_long,)),
    _FieldSpec("georegion", "georegion", "Georegion", ("string", "slice"), (_georegion,)),
    _FieldSpec("country", "country", "Country", ("string", "slice"), (_country_state_province,)),
    _FieldSpec("us_state", "us_state", "USState", ("string", "slice"), (_country_state_province,)),
    _FieldSpec(
        "ca_province", "ca_province", "CAProvince", ("string", "slice"), (_country_state_province,)
    ),
    _FieldSpec("note", "note", "Note", ("string",), (_note_length,)),
    _FieldSpec("ip_prefixes", "ip_prefixes", "IPPrefixes", ("string", "slice"), (_cidr,)),
    _FieldSpec("asn", "asn", "ASN", ("string", "slice")),
    _FieldSpec("priority", "priority", "Priority", ("int",), (_positive("priority"),)),
    _FieldSpec("weight", "weight", "Weight", ("float64", "int"), (_positive("weight"),)),
    _FieldSpec("cost", "cost", "Cost", ("float64", "int"), (_positive("cost"),)),
    _FieldSpec("low_watermark", "low_watermark", "LowWatermark", ("int",)),
    _FieldSpec("high_watermark", "high_watermark", "HighWatermark", ("int",)),
    _FieldSpec("subdivisions", "subdivisions", "Subdivisions", ("string", "map")),
)

_BY_GO_NAME = {spec.go_name: spec for spec in _FIELDS}

_CAMEL_RENAMES = {
    "UsState": "USState",
    "Loadavg": "LoadAvg",
    "CaProvince": "CAProvince",
    "IpPrefixes": "IPPrefixes",
    "Asn": "ASN",
}


def _plain(value: Any) -> Any:
    if isinstance(value, FeedPtr):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    return value


@dataclass
class Meta:
    """An entity's metadata table; unset values are ``None``."""

    up: Any = None
    connections: Any = None
    requests: Any = None
    load_avg: Any = None
    pulsar: Any = None
    latitude: Any = None
    longitude: Any = None
    georegion: Any = None
    country: Any = None
    us_state: Any = None
    ca_province: Any = None
    note: Any = None
    ip_prefixes: Any = None
    asn: Any = None
    priority: Any = None
    weight: Any = None
    cost: Any = None
    low_watermark: Any = None
    high_watermark: Any = None
    subdivisions: Any = None

    def _present(self):
        for spec in _FIELDS:
            value = getattr(self, spec.attr)
            if value is not None:
                yield spec, value

    def string_map(self) -> dict[str, str]:
        """Return every set field, keyed by its API name, as a string."""
        return {spec.key: format_interface(value) for spec, value in self._present()}

    def validate(self) -> list[MetaValidationError]:
        """Check every set field and return the problems found."""
        errors: list[MetaValidationError] = []
        for spec, value in self._present():
            kind = _kind(value)
            if kind == "struct":
                if not isinstance(value, FeedPtr):
                    errors.append(
                        MetaValidationError(
                            "if a meta field is a struct, it must be a FeedPtr, "
                            f"got: {type(value).__name__}"
                        )
                    )
                continue
            if kind not in spec.kinds:
                errors.append(
                    MetaValidationError(
                        f"found type mismatch for meta field '{spec.key}'. "
                        f"expected [{' '.join(spec.kinds)}], got: {kind}"
                    )
                )
            for check in spec.checks:
                message = check(value, kind)
                if message:
                    errors.append(MetaValidationError(message))
        return errors

    def to_dict(self) -> dict:
        return {spec.key: _plain(value) for spec, value in self._present()}

    @classmethod
    def from_dict(cls, data: dict) -> "Meta":
        return cls(**{spec.attr: data[spec.key] for spec in _FIELDS if spec.key in data})


def _require_str(key: Any, value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"value for meta key {key!r} must be a string, got {type(value).__name__}")
    return value


def meta_from_map(m: dict) -> Meta:
    """Build a Meta from a mapping of string values; unknown keys are ignored."""
    meta = Meta()
    for key, value in m.items():
        name = to_camel(key)
        name = _CAMEL_RENAMES.get(name, name)
        spec = _BY_GO_NAME.get(name)
        if spec is None:
            continue

        if name == "Subdivisions":
            if isinstance(value, str):
                try:
                    decoded = _loads(value)
                except ValueError:
                    decoded = None
                meta.subdivisions = decoded if isinstance(decoded, dict) else None
            elif isinstance(value, dict):
                meta.subdivisions = value
            continue

        text = _require_str(key, value)
        if name == "Up":
            lowered = text.lower()
            if text == "1" or lowered == "true":
                meta.up = True
            elif text == "0" or lowered == "false":
                meta.up = False
            else:
                meta.up = parse_type(text)
        elif name == "ASN":
            meta.asn = text if "," not in text else parse_type(text)
        elif name == "Pulsar":
            try:
                decoded = _loads(text)
            except ValueError:
                continue
            if isinstance(decoded, list) and all(isinstance(item, dict) for item in decoded):
                meta.pulsar = decoded
        elif name == "Note":
            meta.note = text
        else:
            setattr(meta, spec.attr, parse_type(text))
    return meta