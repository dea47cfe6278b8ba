"""Proxy server records as exchanged with the monitoring server."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, fields
from datetime import datetime, timedelta, timezone
from typing import Any

_DATE_PATTERN = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})([T ])(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})?"
)

_ZERO_TIME = "0001-01-01 00:00:00 +0000 UTC"

_PASSWORD_KEY = "password"


def _json(key: str, **options: Any) -> Any:
    """Declare a dataclass field together with its JSON name."""
    return field(metadata={"json": key}, **options)


def _get(data: dict[str, Any], key: str, kind: type) -> Any:
    """Fetch a typed field, treating a missing or null value as the kind's zero value."""
    value = data.get(key)
    if value is None:
        return kind()
    if isinstance(value, bool) != (kind is bool) or not isinstance(value, kind):
        raise ValueError(
            f"field {key!r}: expected {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _load_object(data: str | bytes) -> dict[str, Any]:
    if isinstance(data, (bytes, bytearray)):
        data = data.decode("utf-8")
    try:
        value = json.loads(data)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc
    if not isinstance(value, dict):
        raise ValueError("expected a JSON object")
    return value


def _parse_created_date(text: str) -> datetime:
    """Parse RFC 3339 or the zone-less ``YYYY-MM-DD[T ]HH:MM:SS`` forms (as UTC)."""
    match = _DATE_PATTERN.fullmatch(text)
    if match is None or (match.group(9) is not None and match.group(4) != "T"):
        raise ValueError(f"cannot parse created date {text!r}")
    year, month, day, _, hour, minute, second, fraction, zone = match.groups()
    micro = int((fraction or "0")[:6].ljust(6, "0"))
    if zone is None or zone == "Z":
        tz = timezone.utc
    else:
        sign = 1 if zone[0] == "+" else -1
        tz = timezone(sign * timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6])))
    try:
        return datetime(
            int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tzinfo=tz
        )
    except ValueError as exc:
        raise ValueError(f"cannot parse created date {text!r}: {exc}") from exc


def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=timezone.utc)


def _offset_parts(moment: datetime) -> tuple[str, int, int]:
    offset = moment.utcoffset() or timedelta(0)
    total = int(offset.total_seconds()) // 60
    sign = "-" if total < 0 else "+"
    hours, minutes = divmod(abs(total), 60)
    return sign, hours, minutes


def _clock(moment: datetime, separator: str) -> str:
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}{separator}"
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )


def _format_rfc3339(moment: datetime) -> str:
    moment = _aware(moment)
    sign, hours, minutes = _offset_parts(moment)
    zone = "Z" if hours == minutes == 0 else f"{sign}{hours:02d}:{minutes:02d}"
    return _clock(moment, "T") + zone


def _format_display_time(moment: datetime | None) -> str:
    if moment is None:
        return _ZERO_TIME
    moment = _aware(moment)
    fraction = f".{moment.microsecond:06d}".rstrip("0") if moment.microsecond else ""
    sign, hours, minutes = _offset_parts(moment)
    offset = f"{sign}{hours:02d}{minutes:02d}"
    name = "UTC" if hours == minutes == 0 else offset
    return f"{_clock(moment, ' ')}{fraction} {offset} {name}"


@dataclass
class Proxy:
    """A proxy as stored on the server; flags travel as 0/1 integers."""

    id: int = _json("id", default=0)
    user_id: int = _json("userId", default=0)
    protocol: str = _json("protocol", default_factory=str)
    host: str = _json("host", default_factory=str)
    port: int = _json("port", default=0)
    auth: bool = _json("auth", default=False)
    username: str = _json("username", default_factory=str)
    password: str = _json(_PASSWORD_KEY, default_factory=str)
    active: bool = _json("active", default=False)
    default: bool = _json("default", default=False)
    created_date: datetime | None = _json("-", default=None)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Proxy:
        if not isinstance(data, dict):
            raise ValueError("proxy data must be a mapping")
        created = _get(data, "createdDate", str)
        return cls(
            id=_get(data, "id", int),
            user_id=_get(data, "userId", int),
            protocol=_get(data, "protocol", str),
            host=_get(data, "host", str),
            port=_get(data, "port", int),
            auth=_get(data, "auth", int) != 0,
            username=_get(data, "username", str),
            password=_get(data, _PASSWORD_KEY, str),
            active=_get(data, "active", int) != 0,
            default=_get(data, "default", int) != 0,
            created_date=_parse_created_date(created) if created else None,
        )

    @classmethod
    def from_json(cls, data: str | bytes) -> Proxy:
        return cls.from_dict(_load_object(data))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "protocol": self.protocol,
            "host": self.host,
            "port": self.port,
            "auth": int(self.auth),
            "username": self.username,
            _PASSWORD_KEY: self.password,
            "active": int(self.active),
            "default": int(self.default),
            "createdDate": _format_rfc3339(self.created_date) if self.created_date else "",
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    def __str__(self) -> str:
        parts = []
        for spec in fields(self):
            value = getattr(self, spec.name)
            if spec.name == _PASSWORD_KEY and value:
                text = '"***"'
            elif spec.name == "created_date":
                text = _format_display_time(value)
            elif isinstance(value, str):
                text = json.dumps(value, ensure_ascii=False)
            elif isinstance(value, bool):
                text = "true" if value else "false"
            else:
                text = str(value)
            parts.append(f"{spec.metadata['json']}: {text}")
        return ", ".join(parts)


@dataclass
class ProxyConfig:
    """Settings for creating or updating a proxy."""

    id: int = 0
    protocol: str = ""
    host: str = ""
    port: int = 0
    auth: bool = False
    username: str = ""
    password: str = field(default_factory=str)
    active: bool = False
    default: bool = False
    apply_existing: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProxyConfig:
        if not isinstance(data, dict):
            raise ValueError("proxy config data must be a mapping")
        return cls(
            id=_get(data, "id", int),
            protocol=_get(data, "protocol", str),
            host=_get(data, "host", str),
            port=_get(data, "port", int),
            auth=_get(data, "auth", bool),
            username=_get(data, "username", str),
            password=_get(data, _PASSWORD_KEY, str),
            active=_get(data, "active", bool),
            default=_get(data, "default", bool),
            apply_existing=_get(data, "applyExisting", bool),
        )

    @classmethod
    def from_json(cls, data: str | bytes) -> ProxyConfig:
        return cls.from_dict(_load_object(data))

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.id:
            result["id"] = self.id
        result.update(protocol=self.protocol, host=self.host, port=self.port, auth=self.auth)
        if self.username:
            result["username"] = self.username
        if self.password:
            result[_PASSWORD_KEY] = self.password
        result.update(active=self.active, default=self.default, applyExisting=self.apply_existing)
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)