"""Monitoring jobs, their status history, and notification lists."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any


def _mapping(data: Any, what: str) -> Mapping:
    if not isinstance(data, Mapping):
        raise TypeError(f"{what} must be decoded from a mapping, got {type(data).__name__}")
    return data


def _get(data: Mapping, key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None else value


@dataclass
class Status:
    """The status of a job in one region, and since when it has held."""

    since: int = 0
    status: str = ""

    def to_dict(self) -> dict:
        return {"since": self.since, "status": self.status}

    @classmethod
    def from_dict(cls, data: Mapping) -> "Status":
        data = _mapping(data, "Status")
        return cls(since=_get(data, "since", 0), status=_get(data, "status", ""))


@dataclass
class Rule:
    """A rule that decides when a job counts as failed."""

    key: str = ""
    value: Any = None
    comparison: str = ""

    def to_dict(self) -> dict:
        return {"key": self.key, "value": self.value, "comparison": self.comparison}

    @classmethod
    def from_dict(cls, data: Mapping) -> "Rule":
        data = _mapping(data, "Rule")
        return cls(
            key=_get(data, "key", ""),
            value=data.get("value"),
            comparison=_get(data, "comparison", ""),
        )


@dataclass
class Result:
    """One result that a job type reports."""

    comparators: list = field(default_factory=list)
    metric: bool = False
    validator: str = ""
    short_desc: str = ""
    result_type: str = ""
    desc: str = ""

    def to_dict(self) -> dict:
        return {
            "comparators": list(self.comparators),
            "metric": self.metric,
            "validator": self.validator,
            "shortdesc": self.short_desc,
            "type": self.result_type,
            "desc": self.desc,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "Result":
        data = _mapping(data, "Result")
        return cls(
            comparators=list(_get(data, "comparators", [])),
            metric=_get(data, "metric", False),
            validator=_get(data, "validator", ""),
            short_desc=_get(data, "shortdesc", ""),
            result_type=_get(data, "type", ""),
            desc=_get(data, "desc", ""),
        )


@dataclass
class StatusLog:
    """One entry of a job's status history; ``until`` is 0 while it lasts."""

    job: str = ""
    region: str = ""
    status: str = ""
    since: int = 0
    until: int = 0

    def to_dict(self) -> dict:
        return {
            "job": self.job,
            "region": self.region,
            "status": self.status,
            "since": self.since,
            "until": self.until,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "StatusLog":
        data = _mapping(data, "StatusLog")
        return cls(
            job=_get(data, "job", ""),
            region=_get(data, "region", ""),
            status=_get(data, "status", ""),
            since=_get(data, "since", 0),
            until=_get(data, "until", 0),
        )


@dataclass
class Job:
    """A monitoring job.

    ``job_type`` is one of ``http``, ``dns``, ``tcp`` or ``ping``; ``policy``
    is ``quorum``, ``all`` or ``one``; times are in seconds.
    """

    id: str = ""
    notify_list_id: str = ""
    job_type: str = ""
    config: dict = field(default_factory=dict)
    status: dict = field(default_factory=dict)
    rules: list = field(default_factory=list)
    regions: list = field(default_factory=list)
    active: bool = False
    frequency: int = 0
    policy: str = ""
    region_scope: str = ""
    notes: str = ""
    name: str = ""
    notify_repeat: int = 0
    rapid_recheck: bool = False
    notify_delay: int = 0
    notify_regional: bool = False
    mute: bool = False
    notify_failback: bool = False

    def activate(self) -> None:
        self.active = True

    def deactivate(self) -> None:
        self.active = False

    def to_dict(self) -> dict:
        out: dict = {}
        if self.id:
            out["id"] = self.id
        out["notify_list"] = self.notify_list_id
        out["job_type"] = self.job_type
        out["config"] = dict(self.config)
        if self.status:
            out["status"] = {
                region: status.to_dict() for region, status in sorted(self.status.items())
            }
        if self.rules:
            out["rules"] = [rule.to_dict() for rule in self.rules]
        out["regions"] = list(self.regions)
        out["active"] = self.active
        out["frequency"] = self.frequency
        out["policy"] = self.policy
        out["region_scope"] = self.region_scope
        if self.notes:
            out["notes"] = self.notes
        out["name"] = self.name
        out["notify_repeat"] = self.notify_repeat
        out["rapid_recheck"] = self.rapid_recheck
        out["notify_delay"] = self.notify_delay
        out["notify_regional"] = self.notify_regional
        out["mute"] = self.mute
        out["notify_failback"] = self.notify_failback
        return out

    @classmethod
    def from_dict(cls, data: Mapping) -> "Job":
        data = _mapping(data, "Job")
        status = _get(data, "status", {})
        return cls(
            id=_get(data, "id", ""),
            notify_list_id=_get(data, "notify_list", ""),
            job_type=_get(data, "job_type", ""),
            config=dict(_get(data, "config", {})),
            status={region: Status.from_dict(raw) for region, raw in status.items()},
            rules=[Rule.from_dict(item) for item in _get(data, "rules", [])],
            regions=list(_get(data, "regions", [])),
            active=_get(data, "active", False),
            frequency=_get(data, "frequency", 0),
            policy=_get(data, "policy", ""),
            region_scope=_get(data, "region_scope", ""),
            notes=_get(data, "notes", ""),
            name=_get(data, "name", ""),
            notify_repeat=_get(data, "notify_repeat", 0),
            rapid_recheck=_get(data, "rapid_recheck", False),
            notify_delay=_get(data, "notify_delay", 0),
            notify_regional=_get(data, "notify_regional", False),
            mute=_get(data, "mute", False),
            notify_failback=_get(data, "notify_failback", False),
        )


def new_http_config(
    url: str, method: str, user_agent: str, auth: str, connect_timeout: int
) -> dict:
    """Return the config of an HTTP job; ``connect_timeout`` is in seconds."""
    return {
        "url": url,
        "method": method,
        "user_agent": user_agent,
        "authorization": auth,
        "connect_timeout": connect_timeout,
    }


def new_http_v3_config(
    url: str,
    method: str,
    user_agent: str,
    auth: str,
    connect_timeout: int,
    idle_timeout: timedelta | int,
    require_ipv4: bool,
    virtual_host: str,
    tls_skip_verify: bool,
    follow_redirect: bool,
) -> dict:
    """Return the config of an HTTP job with the v3 fields.

    ``idle_timeout`` is a timedelta or a whole number of nanoseconds.
    """
    if isinstance(idle_timeout, timedelta):
        idle_timeout = (
            (idle_timeout.days * 86_400 + idle_timeout.seconds) * 1_000_000_000
            + idle_timeout.microseconds * 1_000
        )
    return {
        "url": url,
        "method": method,
        "user_agent": user_agent,
        "authorization": auth,
        "connect_timeout": connect_timeout,
        "idle_timeout": idle_timeout,
        "require_ipv4": require_ipv4,
        "virtual_host": virtual_host,
        "tls_skip_verify": tls_skip_verify,
        "follow_redirect": follow_redirect,
    }


def new_dns_config(
    host: str, domain: str, port: int, record_type: str, response_timeout: int
) -> dict:
    """Return the config of a DNS job; ``response_timeout`` is in milliseconds."""
    return {
        "host": host,
        "domain": domain,
        "port": port,
        "type": record_type,
        "response_timeout": response_timeout,
    }


def new_tcp_config(
    host: str, port: int, connect_timeout: int, response_timeout: int, send: str, ssl: bool
) -> dict:
    """Return the config of a TCP job."""
    return {
        "host": host,
        "port": port,
        "connect_timeout": connect_timeout,
        "response_timeout": response_timeout,
        "send": send,
        "ssl": ssl,
    }


def new_ping_config(host: str, timeout: int, count: int, interval: int) -> dict:
    """Return the config of a ping job; times are in milliseconds."""
    return {"host": host, "timeout": timeout, "count": count, "interval": interval}


@dataclass
class Notification:
    """An endpoint that alerts are sent to."""

    notification_type: str = ""
    config: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        out: dict = {}
        if self.notification_type:
            out["type"] = self.notification_type
        if self.config:
            out["config"] = dict(self.config)
        return out

    @classmethod
    def from_dict(cls, data: Mapping) -> "Notification":
        data = _mapping(data, "Notification")
        return cls(
            notification_type=_get(data, "type", ""),
            config=dict(_get(data, "config", {})),
        )


@dataclass
class NotifyList:
    """A named list of notification endpoints."""

    id: str = ""
    name: str = ""
    notifications: list = field(default_factory=list)

    def to_dict(self) -> dict:
        out: dict = {}
        if self.id:
            out["id"] = self.id
        if self.name:
            out["name"] = self.name
        if self.notifications:
            out["notify_list"] = [item.to_dict() for item in self.notifications]
        return out

    @classmethod
    def from_dict(cls, data: Mapping) -> "NotifyList":
        data = _mapping(data, "NotifyList")
        return cls(
            id=_get(data, "id", ""),
            name=_get(data, "name", ""),
            notifications=[
                Notification.from_dict(item) for item in _get(data, "notify_list", [])
            ],
        )


def new_notify_list(name: str, *args: Notification) -> NotifyList:
    """Return a notify list that alerts through the given notifications."""
    return NotifyList(name=name, notifications=list(args))


def new_user_notification(username: str) -> Notification:
    return Notification("user", {"user": username})


def new_email_notification(email: str) -> Notification:
    return Notification("email", {"email": email})


def new_feed_notification(source_id: str) -> Notification:
    return Notification("datafeed", {"sourceid": source_id})


def new_web_notification(url: str) -> Notification:
    return Notification("webhook", {"url": url})


def new_pager_duty_notification(key: str) -> Notification:
    return Notification("pagerduty", {"service_key": key})


def new_hip_chat_notification(token: str, room: str) -> Notification:
    return Notification("hipchat", {"token": token, "room": room})


def new_slack_notification(url: str, username: str, channel: str) -> Notification:
    return Notification("slack", {"url": url, "username": username, "channel": channel})