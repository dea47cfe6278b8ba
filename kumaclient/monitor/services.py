"""Service monitors: groups, databases, push endpoints and real browsers."""

from __future__ import annotations

from dataclasses import dataclass, field

from .base import MonitorBase, _dumps, format_fields
from .http_monitors import (
    _attr,
    _decode_details,
    _decode_status_codes,
    _encode_details,
    _encode_status_codes,
    _load,
)
from .probes import _probe_json


@dataclass
class GroupMonitor:
    """A monitor grouping other monitors; it has no settings of its own."""

    base: MonitorBase = field(default_factory=MonitorBase)

    @classmethod
    def from_json(cls, data: str | bytes) -> GroupMonitor:
        base, _ = _load(data)
        return cls(base=base)

    def to_json(self) -> str:
        document = self.base.common_fields(self.type())
        # The server expects these to be arrays rather than null.
        document["accepted_statuscodes"] = []
        document["conditions"] = []
        return _dumps(document)

    def type(self) -> str:
        return "group"

    def __str__(self) -> str:
        return f"{format_fields(self.base, False)}, type: {self.type()}"


@dataclass
class PostgresDetails:
    """Settings of a PostgreSQL query check."""

    database_connection_string: str = _attr("databaseConnectionString", str, "")
    database_query: str = _attr("databaseQuery", str, "")

    def type(self) -> str:
        return "postgres"


@dataclass
class PostgresMonitor:
    """A monitor running a query against a PostgreSQL database."""

    base: MonitorBase = field(default_factory=MonitorBase)
    postgres: PostgresDetails = field(default_factory=PostgresDetails)

    @classmethod
    def from_json(cls, data: str | bytes) -> PostgresMonitor:
        base, document = _load(data)
        return cls(base=base, postgres=_decode_details(PostgresDetails, document))

    def to_json(self) -> str:
        return _probe_json(self.base, self.postgres)

    def type(self) -> str:
        return self.postgres.type()

    def __str__(self) -> str:
        return f"{format_fields(self.base, False)}, {format_fields(self.postgres, True)}"


@dataclass
class PushDetails:
    """Settings of a push monitor, which waits for clients to report in."""

    push_token: str = _attr("pushToken", str, "")

    def type(self) -> str:
        return "push"


@dataclass
class PushMonitor:
    """A monitor that is kept up by incoming push calls."""

    base: MonitorBase = field(default_factory=MonitorBase)
    push: PushDetails = field(default_factory=PushDetails)

    @classmethod
    def from_json(cls, data: str | bytes) -> PushMonitor:
        base, document = _load(data)
        return cls(base=base, push=_decode_details(PushDetails, document))

    def to_json(self) -> str:
        return _probe_json(self.base, self.push)

    def type(self) -> str:
        return self.push.type()

    def __str__(self) -> str:
        return f"{format_fields(self.base, False)}, {format_fields(self.push, True)}"


@dataclass
class RealBrowserDetails:
    """Settings of a page load in a real browser."""

    url: str = _attr("url", str, "")
    timeout: int = _attr("timeout", int, 0)
    ignore_tls: bool = _attr("ignoreTls", bool, False)
    max_redirects: int = _attr("maxredirects", int, 0)
    accepted_status_codes: list[str] | None = _attr(
        "accepted_statuscodes",
        list,
        None,
        decode=_decode_status_codes,
        encode=_encode_status_codes,
    )
    remote_browser: int | None = _attr("remote_browser", int, None)

    def type(self) -> str:
        return "real-browser"


@dataclass
class RealBrowserMonitor:
    """A monitor loading a page in a real (possibly remote) browser."""

    base: MonitorBase = field(default_factory=MonitorBase)
    real_browser: RealBrowserDetails = field(default_factory=RealBrowserDetails)

    @classmethod
    def from_json(cls, data: str | bytes) -> RealBrowserMonitor:
        base, document = _load(data)
        return cls(base=base, real_browser=_decode_details(RealBrowserDetails, document))

    def to_json(self) -> str:
        document = self.base.common_fields(self.type())
        document.update(_encode_details(self.real_browser))
        document["proxyId"] = self.base.proxy_id
        document["conditions"] = []
        return _dumps(document)

    def type(self) -> str:
        return self.real_browser.type()

    def __str__(self) -> str:
        return f"{format_fields(self.base, False)}, {format_fields(self.real_browser, True)}"


@dataclass
class RedisDetails:
    """Settings of a Redis connection check."""

    connection_string: str = _attr("databaseConnectionString", str, "")
    ignore_tls: bool = _attr("ignoreTls", bool, False)

    def type(self) -> str:
        return "redis"


@dataclass
class RedisMonitor:
    """A monitor connecting to a Redis server."""

    base: MonitorBase = field(default_factory=MonitorBase)
    redis: RedisDetails = field(default_factory=RedisDetails)

    @classmethod
    def from_json(cls, data: str | bytes) -> RedisMonitor:
        base, document = _load(data)
        return cls(base=base, redis=_decode_details(RedisDetails, document))

    def to_json(self) -> str:
        return _probe_json(self.base, self.redis)

    def type(self) -> str:
        return self.redis.type()

    def __str__(self) -> str:
        return f"{format_fields(self.base, False)}, {format_fields(self.redis, True)}"