"""Notification of any provider type, keeping its settings as a plain mapping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .core import (
    NotificationBase,
    NotificationError,
    _format_value,
    format_fields,
    merge_to_json,
    split_config,
)

_BASE_KEYS = frozenset({"id", "name", "active", "isDefault", "applyExisting", "userId", "type"})


@dataclass
class GenericNotification:
    """A notification whose provider settings are held untyped."""

    base: NotificationBase = field(default_factory=NotificationBase)
    details: dict[str, Any] = field(default_factory=dict)
    type_name: str = ""

    @classmethod
    def from_json(cls, data: str | bytes) -> GenericNotification:
        base, config = split_config(data)
        if "type" not in config:
            raise NotificationError("notification does not have type attribute")
        type_name = config["type"]
        if not isinstance(type_name, str):
            raise NotificationError("type attribute is not a string")
        details = {key: value for key, value in config.items() if key not in _BASE_KEYS}
        return cls(base=base, details=details, type_name=type_name)

    def to_json(self) -> str:
        details = dict(self.details)
        details["type"] = self.type_name
        return merge_to_json(self.base, details, self.type_name)

    def type(self) -> str:
        return self.type_name

    def __str__(self) -> str:
        parts = [f"type: {_format_value(self.type_name)}"]
        parts.extend(
            f"{key}: {_format_value(self.details[key])}"
            for key in sorted(self.details)
            if key != "type"
        )
        return f"{format_fields(self.base, False)}, {', '.join(parts)}"