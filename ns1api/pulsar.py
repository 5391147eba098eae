"""Pulsar applications and jobs."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional


def _mapping(data: Any, what: str) -> Mapping:
    if not isinstance(data, Mapping):
        raise TypeError(f"{what} must be decoded from a mapping, got {type(data).__name__}")
    return data


def _get(data: Mapping, key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None else value


def _put_present(out: dict, key: str, value: Any) -> None:
    if value is not None:
        out[key] = value


@dataclass
class DefaultConfig:
    """Default measurement settings of an application."""

    http: bool = False
    https: bool = False
    request_timeout_millis: int = 0
    job_timeout_millis: int = 0
    use_xhr: bool = False
    static_values: bool = False

    def to_dict(self) -> dict:
        return {
            "http": self.http,
            "https": self.https,
            "request_timeout_millis": self.request_timeout_millis,
            "job_timeout_millis": self.job_timeout_millis,
            "use_xhr": self.use_xhr,
            "static_values": self.static_values,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "DefaultConfig":
        data = _mapping(data, "DefaultConfig")
        return cls(
            http=_get(data, "http", False),
            https=_get(data, "https", False),
            request_timeout_millis=_get(data, "request_timeout_millis", 0),
            job_timeout_millis=_get(data, "job_timeout_millis", 0),
            use_xhr=_get(data, "use_xhr", False),
            static_values=_get(data, "static_values", False),
        )


@dataclass
class Application:
    """A Pulsar application."""

    id: str = ""
    name: str = ""
    active: bool = False
    browser_wait_millis: int = 0
    jobs_per_transaction: int = 0
    default_config: DefaultConfig = field(default_factory=DefaultConfig)

    def to_dict(self) -> dict:
        out: dict = {}
        if self.id:
            out["appid"] = self.id
        out["name"] = self.name
        out["active"] = self.active
        out["browser_wait_millis"] = self.browser_wait_millis
        out["jobs_per_transaction"] = self.jobs_per_transaction
        out["default_config"] = self.default_config.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: Mapping) -> "Application":
        data = _mapping(data, "Application")
        default_config = data.get("default_config")
        return cls(
            id=_get(data, "appid", ""),
            name=_get(data, "name", ""),
            active=_get(data, "active", False),
            browser_wait_millis=_get(data, "browser_wait_millis", 0),
            jobs_per_transaction=_get(data, "jobs_per_transaction", 0),
            default_config=(
                DefaultConfig()
                if default_config is None
                else DefaultConfig.from_dict(default_config)
            ),
        )


def new_application(name: str) -> Application:
    """Return an application with the given name."""
    return Application(name=name)


@dataclass
class Weights:
    """Weight of one metric in a blended job."""

    name: str = ""
    weight: int = 0
    default_value: float = 0.0
    maximize: bool = False

    def to_dict(self) -> dict:
        out: dict = {}
        if self.name:
            out["name"] = self.name
        out["weight"] = self.weight
        out["default_value"] = self.default_value
        out["maximize"] = self.maximize
        return out

    @classmethod
    def from_dict(cls, data: Mapping) -> "Weights":
        data = _mapping(data, "Weights")
        return cls(
            name=_get(data, "name", ""),
            weight=_get(data, "weight", 0),
            default_value=_get(data, "default_value", 0.0),
            maximize=_get(data, "maximize", False),
        )


@dataclass
class BlendMetricWeights:
    """Metric weights of a blended job."""

    timestamp: int = 0
    weights: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "weights": [weight.to_dict() for weight in self.weights],
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "BlendMetricWeights":
        data = _mapping(data, "BlendMetricWeights")
        return cls(
            timestamp=_get(data, "timestamp", 0),
            weights=[Weights.from_dict(item) for item in _get(data, "weights", [])],
        )


@dataclass
class JobConfig:
    """Configuration of a Pulsar job."""

    host: Optional[str] = None
    url_path: Optional[str] = None
    http: Optional[bool] = None
    https: Optional[bool] = None
    request_timeout_millis: Optional[int] = None
    job_timeout_millis: Optional[int] = None
    use_xhr: Optional[bool] = None
    static_values: Optional[bool] = None
    blend_metric_weights: Optional[BlendMetricWeights] = None

    def to_dict(self) -> dict:
        out: dict = {"host": self.host, "url_path": self.url_path}
        _put_present(out, "http", self.http)
        _put_present(out, "https", self.https)
        _put_present(out, "request_timeout_millis", self.request_timeout_millis)
        _put_present(out, "job_timeout_millis", self.job_timeout_millis)
        _put_present(out, "use_xhr", self.use_xhr)
        _put_present(out, "static_values", self.static_values)
        if self.blend_metric_weights is not None:
            out["blend_metric_weights"] = self.blend_metric_weights.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: Mapping) -> "JobConfig":
        data = _mapping(data, "JobConfig")
        blend = data.get("blend_metric_weights")
        return cls(
            host=data.get("host"),
            url_path=data.get("url_path"),
            http=data.get("http"),
            https=data.get("https"),
            request_timeout_millis=data.get("request_timeout_millis"),
            job_timeout_millis=data.get("job_timeout_millis"),
            use_xhr=data.get("use_xhr"),
            static_values=data.get("static_values"),
            blend_metric_weights=None if blend is None else BlendMetricWeights.from_dict(blend),
        )


@dataclass
class PulsarJob:
    """A Pulsar job belonging to an application."""

    customer: int = 0
    type_id: str = ""
    name: str = ""
    community: bool = False
    job_id: str = ""
    app_id: str = ""
    active: bool = False
    shared: bool = False
    config: Optional[JobConfig] = None

    def to_dict(self) -> dict:
        out: dict = {}
        if self.customer:
            out["customer"] = self.customer
        out["typeid"] = self.type_id
        out["name"] = self.name
        if self.community:
            out["community"] = True
        if self.job_id:
            out["jobid"] = self.job_id
        out["appid"] = self.app_id
        out["active"] = self.active
        out["shared"] = self.shared
        if self.config is not None:
            out["config"] = self.config.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: Mapping) -> "PulsarJob":
        data = _mapping(data, "PulsarJob")
        config = data.get("config")
        return cls(
            customer=_get(data, "customer", 0),
            type_id=_get(data, "typeid", ""),
            name=_get(data, "name", ""),
            community=_get(data, "community", False),
            job_id=_get(data, "jobid", ""),
            app_id=_get(data, "appid", ""),
            active=_get(data, "active", False),
            shared=_get(data, "shared", False),
            config=None if config is None else JobConfig.from_dict(config),
        )


def new_js_pulsar_job(name: str, app_id: str, host: str, url_path: str) -> PulsarJob:
    """Return a JavaScript (latency) job measuring ``host`` at ``url_path``."""
    return PulsarJob(
        name=name,
        type_id="latency",
        app_id=app_id,
        config=JobConfig(host=host, url_path=url_path),
    )


def new_bb_pulsar_job(name: str, app_id: str) -> PulsarJob:
    """Return a Bulk Beacon (custom) job."""
    return PulsarJob(name=name, type_id="custom", app_id=app_id)