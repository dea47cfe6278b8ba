"""Notification base record and helpers shared by notification providers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from typing import Any, Mapping


class NotificationError(ValueError):
    """Raised when notification data cannot be decoded or encoded."""


def _load_json(data: str | bytes, what: str) -> Any:
    if isinstance(data, (bytes, bytearray)):
        data = data.decode("utf-8")
    try:
        return json.loads(data)
    except json.JSONDecodeError as exc:
        raise NotificationError(f"invalid {what}: {exc}") from exc


def _typed(data: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) != (kind is bool) or not isinstance(value, kind):
        raise NotificationError(
            f"attribute {key!r}: expected {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _plain_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_plain_value(item) for item in value) + "]"
    if isinstance(value, Mapping):
        items = " ".join(f"{key}:{_plain_value(value[key])}" for key in sorted(value))
        return f"map[{items}]"
    return str(value)


def _format_value(value: Any) -> str:
    """Render a value for display: strings quoted, everything else plain."""
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return _plain_value(value)


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
        name = spec.metadata.get("json", spec.name)
        parts.append(f"{name}: {_format_value(getattr(obj, spec.name))}")
    return ", ".join(parts)


@dataclass
class NotificationBase:
    """Common notification attributes, keeping the raw server document."""

    id: int = field(default=0, metadata={"json": "id"})
    name: str = field(default="", metadata={"json": "name"})
    is_active: bool = field(default=False, metadata={"json": "active"})
    is_default: bool = field(default=False, metadata={"json": "isDefault"})
    apply_existing: bool = field(default=False, metadata={"json": "applyExisting"})
    user_id: int = field(default=0, metadata={"json": "userId"})

    _type_from_config: str = field(default="", init=False, repr=False, compare=False)
    _config_str: str = field(default="", init=False, repr=False, compare=False)
    _raw: str | None = field(default=None, init=False, repr=False, compare=False)

    @classmethod
    def from_json(cls, data: str | bytes) -> NotificationBase:
        text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
        raw = _load_json(text, "notification")
        if not isinstance(raw, dict):
            raise NotificationError("invalid notification, expected a JSON object")

        config_str = _typed(raw, "config", str, "")
        config = _load_json(config_str, "notification config")
        if not isinstance(config, dict):
            raise NotificationError("invalid notification, config is not a JSON object")

        if "type" not in config:
            raise NotificationError('invalid notification, attribute "type" missing')
        type_name = config["type"]
        if not isinstance(type_name, str):
            raise NotificationError('invalid notification, attribute "type" is not string')

        apply_existing = False
        if "applyExisting" in config:
            apply_existing = config["applyExisting"]
            if not isinstance(apply_existing, bool):
                raise NotificationError(
                    'invalid notification, attribute "applyExisting" is not bool'
                )

        base = cls(
            id=_typed(raw, "id", int, 0),
            name=_typed(raw, "name", str, ""),
            is_active=_typed(raw, "active", bool, False),
            is_default=_typed(raw, "isDefault", bool, False),
            apply_existing=apply_existing,
            user_id=_typed(raw, "userId", int, 0),
        )
        base._type_from_config = type_name
        base._config_str = config_str
        base._raw = text
        return base

    def to_json(self) -> str:
        if not self._config_str:
            raise NotificationError("not unmarshaled notification, unable to marshal")
        details = _load_json(self._config_str, "internal config")
        if not isinstance(details, dict):
            raise NotificationError("invalid internal state for config")
        type_name = details.get("type")
        return merge_to_json(self, details, type_name if isinstance(type_name, str) else "")

    def as_type(self, target: type) -> Any:
        """Decode the original document as ``target`` (a class with ``from_json``)."""
        name = getattr(target, "__name__", repr(target))
        if self._raw is None:
            raise NotificationError(f"not unmarshaled notification, cannot convert to {name}")
        try:
            return target.from_json(self._raw)
        except (ValueError, TypeError) as exc:
            raise NotificationError(f"failed to unmarshal notification to {name}: {exc}") from exc

    def type(self) -> str:
        return self._type_from_config

    def __str__(self) -> str:
        return format_fields(self, True)


def merge_to_json(base: NotificationBase, details: Mapping[str, Any] | None, type_name: str) -> str:
    """Combine base attributes and provider details into the server's flat JSON form."""
    merged: dict[str, Any] = {
        "id": base.id,
        "name": base.name,
        "active": base.is_active,
        "isDefault": base.is_default,
        "applyExisting": base.apply_existing,
        "userId": base.user_id,
        "type": base._type_from_config,
    }
    if details:
        merged.update(details)
    merged["type"] = type_name
    return json.dumps(merged, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def split_config(data: str | bytes) -> tuple[NotificationBase, dict[str, Any]]:
    """Decode a notification document into its base and its decoded config object."""
    base = NotificationBase.from_json(data)
    config = json.loads(base._config_str)
    return base, config