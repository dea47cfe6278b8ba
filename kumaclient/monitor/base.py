"""Monitor base record shared by every monitor kind."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, fields
from typing import Any, Mapping

_INT_PATTERN = re.compile(r"[+-]?\d+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class MonitorError(ValueError):
    """Raised when monitor data cannot be decoded or encoded."""


def _typed(data: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) != (kind is bool) or not isinstance(value, kind):
        raise MonitorError(
            f"attribute {key!r}: expected {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _parse_int64(text: str) -> int:
    if not _INT_PATTERN.fullmatch(text):
        raise MonitorError(f"notification ID is not int64: {text!r}")
    number = int(text)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise MonitorError(f"notification ID is not int64: {text!r} out of range")
    return number


def _plain(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_plain(item) for item in value) + "]"
    if isinstance(value, Mapping):
        items = " ".join(f"{key}:{_plain(value[key])}" for key in sorted(value))
        return f"map[{items}]"
    return str(value)


def format_fields(obj: Any, with_type: bool) -> str:
    """Render a dataclass's public fields as ``name: value`` pairs."""
    parts = []
    if with_type:
        type_of = getattr(obj, "type", None)
        if callable(type_of):
            parts.append(f"type: {type_of()}")
    for spec in fields(obj):
        if spec.name.startswith("_"):
            continue
        name = spec.metadata.get("json", "")
        if name in ("", "-"):
            name = spec.metadata.get("label", spec.name)
        value = getattr(obj, spec.name)
        if value is None:
            text = spec.metadata.get("nil", "<nil>")
        elif isinstance(value, str):
            text = json.dumps(value, ensure_ascii=False)
        else:
            text = _plain(value)
        parts.append(f"{name}: {text}")
    return ", ".join(parts)


def _dumps(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


@dataclass
class MonitorBase:
    """Attributes common to all monitors, keeping the raw server document."""

    id: int = field(default=0, metadata={"json": "id"})
    name: str = field(default="", metadata={"json": "name"})
    description: str | None = field(default=None, metadata={"json": "description"})
    path_name: str = field(default="", metadata={"json": "pathName"})
    parent: int | None = field(default=None, metadata={"json": "parent"})
    proxy_id: int | None = field(default=None, metadata={"json": "proxyId"})
    interval: int = field(default=0, metadata={"json": "interval"})
    retry_interval: int = field(default=0, metadata={"json": "retryInterval"})
    resend_interval: int = field(default=0, metadata={"json": "resendInterval"})
    max_retries: int = field(default=0, metadata={"json": "maxretries"})
    upside_down: bool = field(default=False, metadata={"json": "upsideDown"})
    notification_ids: list[int] | None = field(
        default=None, metadata={"json": "-", "label": "NotificationIDs", "nil": "[]"}
    )
    tags: list[dict[str, Any]] | None = field(
        default=None, metadata={"json": "tags", "nil": "[]"}
    )
    is_active: bool = field(default=False, metadata={"json": "active"})

    _internal_type: str = field(default="", init=False, repr=False, compare=False)
    _raw: str | None = field(default=None, init=False, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MonitorBase:
        if not isinstance(data, Mapping):
            raise MonitorError("monitor data must be a mapping")

        id_flags = data.get("notificationIDList")
        if id_flags is None:
            id_flags = {}
        if not isinstance(id_flags, Mapping):
            raise MonitorError("attribute 'notificationIDList' must be an object")
        notification_ids = []
        for key in sorted(id_flags):
            flag = id_flags[key]
            if flag is not None and not isinstance(flag, bool):
                raise MonitorError("attribute 'notificationIDList' values must be booleans")
            notification_ids.append(_parse_int64(key))

        tags = data.get("tags")
        if tags is not None and not isinstance(tags, list):
            raise MonitorError("attribute 'tags' must be a list")

        monitor = cls(
            id=_typed(data, "id", int, 0),
            name=_typed(data, "name", str, ""),
            description=_typed(data, "description", str, None),
            path_name=_typed(data, "pathName", str, ""),
            parent=_typed(data, "parent", int, None),
            proxy_id=_typed(data, "proxyId", int, None),
            interval=_typed(data, "interval", int, 0),
            retry_interval=_typed(data, "retryInterval", int, 0),
            resend_interval=_typed(data, "resendInterval", int, 0),
            max_retries=_typed(data, "maxretries", int, 0),
            upside_down=_typed(data, "upsideDown", bool, False),
            notification_ids=notification_ids or None,
            tags=list(tags) if tags else None,
            is_active=_typed(data, "active", bool, False),
        )
        monitor._internal_type = _typed(data, "type", str, "")
        monitor._raw = _dumps(dict(data))
        return monitor

    @classmethod
    def from_json(cls, data: str | bytes) -> MonitorBase:
        text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MonitorError(f"invalid monitor: {exc}") from exc
        if not isinstance(decoded, dict):
            raise MonitorError("invalid monitor, expected a JSON object")
        monitor = cls.from_dict(decoded)
        monitor._raw = text
        return monitor

    def common_fields(self, type_name: str) -> dict[str, Any]:
        """The attributes every monitor sends to the server; the server sets pathName."""
        return {
            "id": self.id,
            "type": type_name,
            "name": self.name,
            "description": self.description,
            "parent": self.parent,
            "interval": self.interval,
            "retryInterval": self.retry_interval,
            "resendInterval": self.resend_interval,
            "maxretries": self.max_retries,
            "upsideDown": self.upside_down,
            "active": self.is_active,
            "notificationIDList": {str(item): True for item in self.notification_ids or ()},
        }

    def to_json(self) -> str:
        if self._raw is None or not self._internal_type:
            raise MonitorError("not unmarshaled monitor, unable to marshal")
        try:
            document = json.loads(self._raw)
        except json.JSONDecodeError as exc:
            raise MonitorError(f"invalid internal state for raw, failed to unmarshal: {exc}") from exc
        document.update(self.common_fields(self._internal_type))
        document["proxyId"] = self.proxy_id
        return _dumps(document)

    def as_type(self, target: type) -> Any:
        """Decode the original document as ``target`` (a class with ``from_json``)."""
        name = getattr(target, "__name__", repr(target))
        if self._raw is None:
            raise MonitorError(f"not unmarshaled monitor, cannot convert to {name}")
        try:
            return target.from_json(self._raw)
        except (ValueError, TypeError) as exc:
            raise MonitorError(f"failed to unmarshal monitor to {name}: {exc}") from exc

    def type(self) -> str:
        return self._internal_type

    def __str__(self) -> str:
        return format_fields(self, True)