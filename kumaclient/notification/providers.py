"""Typed notification providers: ntfy, Slack, Teams and webhooks."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from typing import Any, Callable, ClassVar, Mapping

from .core import (
    NotificationBase,
    NotificationError,
    format_fields,
    merge_to_json,
    split_config,
)

_KIND_DEFAULT = object()

_NTFY_ACCESS_ATTR = "ntfyaccesstoken"
_NTFY_PHRASE_ATTR = "ntfypassword"


def _attr(key: str, kind: type, default: Any = _KIND_DEFAULT, **extra: Any) -> Any:
    """Declare a detail attribute with its JSON name and expected kind."""
    if default is _KIND_DEFAULT:
        default = kind()
    return field(default=default, metadata={"json": key, "kind": kind, **extra})


def decode_headers(value: Any) -> dict[str, str]:
    """Decode the JSON-encoded string of extra webhook headers into a mapping."""
    if value is None or value == "":
        return {}
    if not isinstance(value, str):
        raise NotificationError("webhookAdditionalHeaders must be a JSON-encoded string")
    try:
        headers = json.loads(value)
    except json.JSONDecodeError as exc:
        raise NotificationError(f"invalid webhookAdditionalHeaders: {exc}") from exc
    if headers is None:
        return {}
    if not isinstance(headers, dict) or not all(
        isinstance(item, str) for item in headers.values()
    ):
        raise NotificationError("webhookAdditionalHeaders must map names to strings")
    return dict(headers)


def encode_headers(headers: Mapping[str, str] | None) -> str | None:
    """Encode extra webhook headers as the JSON string the server expects."""
    if headers is None:
        return None
    return json.dumps(dict(headers), sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _decode_details(details_type: type, config: Mapping[str, Any]) -> Any:
    values: dict[str, Any] = {}
    for spec in fields(details_type):
        key = spec.metadata["json"]
        if key not in config:
            continue
        raw = config[key]
        decode: Callable[[Any], Any] | None = spec.metadata.get("decode")
        if decode is not None:
            values[spec.name] = decode(raw)
            continue
        if raw is None:
            continue
        kind = spec.metadata["kind"]
        if isinstance(raw, bool) != (kind is bool) or not isinstance(raw, kind):
            raise NotificationError(
                f"attribute {key!r}: expected {kind.__name__}, got {type(raw).__name__}"
            )
        values[spec.name] = raw
    return details_type(**values)


def _encode_details(details: Any) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for spec in fields(details):
        value = getattr(details, spec.name)
        if spec.metadata.get("omitempty") and not value:
            continue
        encode = spec.metadata.get("encode")
        result[spec.metadata["json"]] = encode(value) if encode is not None else value
    return result


class _Provider:
    """Shared behaviour of notifications made of a base and typed details."""

    details_type: ClassVar[type]
    base: NotificationBase
    details: Any

    @classmethod
    def from_json(cls, data: str | bytes) -> Any:
        base, config = split_config(data)
        return cls(base=base, details=_decode_details(cls.details_type, config))

    def to_json(self) -> str:
        return merge_to_json(self.base, _encode_details(self.details), self.details.type())

    def type(self) -> str:
        return self.details.type()

    def __str__(self) -> str:
        return f"{format_fields(self.base, False)}, {format_fields(self.details, True)}"


@dataclass
class NtfyDetails:
    """Settings of an ntfy notification."""

    access_token: str = _attr(_NTFY_ACCESS_ATTR, str)
    authentication_method: str = _attr("ntfyAuthenticationMethod", str)
    icon: str = _attr("ntfyIcon", str)
    password: str = _attr(_NTFY_PHRASE_ATTR, str)
    priority: int = _attr("ntfyPriority", int)
    server_url: str = _attr("ntfyserverurl", str)
    topic: str = _attr("ntfytopic", str)
    username: str = _attr("ntfyusername", str)

    def type(self) -> str:
        return "ntfy"


@dataclass
class Ntfy(_Provider):
    """An ntfy notification."""

    details_type: ClassVar[type] = NtfyDetails
    base: NotificationBase = field(default_factory=NotificationBase)
    details: NtfyDetails = field(default_factory=NtfyDetails)

    @classmethod
    def from_json(cls, data: str | bytes) -> Ntfy:
        return super().from_json(data)

    def to_json(self) -> str:
        return super().to_json()

    def __str__(self) -> str:
        return super().__str__()


@dataclass
class SlackDetails:
    """Settings of a Slack notification."""

    webhook_url: str = _attr("slackwebhookURL", str)
    username: str = _attr("slackusername", str)
    icon_emoji: str = _attr("slackiconemo", str)
    channel: str = _attr("slackchannel", str)
    rich_message: bool = _attr("slackrichmessage", bool)
    channel_notify: bool = _attr("slackchannelnotify", bool)

    def type(self) -> str:
        return "slack"


@dataclass
class Slack(_Provider):
    """A Slack notification."""

    details_type: ClassVar[type] = SlackDetails
    base: NotificationBase = field(default_factory=NotificationBase)
    details: SlackDetails = field(default_factory=SlackDetails)

    @classmethod
    def from_json(cls, data: str | bytes) -> Slack:
        return super().from_json(data)

    def to_json(self) -> str:
        return super().to_json()

    def __str__(self) -> str:
        return super().__str__()


@dataclass
class TeamsDetails:
    """Settings of a Microsoft Teams notification."""

    webhook_url: str = _attr("webhookUrl", str)

    def type(self) -> str:
        return "teams"


@dataclass
class Teams(_Provider):
    """A Microsoft Teams notification."""

    details_type: ClassVar[type] = TeamsDetails
    base: NotificationBase = field(default_factory=NotificationBase)
    details: TeamsDetails = field(default_factory=TeamsDetails)

    @classmethod
    def from_json(cls, data: str | bytes) -> Teams:
        return super().from_json(data)

    def to_json(self) -> str:
        return super().to_json()

    def __str__(self) -> str:
        return super().__str__()


@dataclass
class WebhookDetails:
    """Settings of a webhook notification ('json', 'form-data' or 'custom' body)."""

    webhook_url: str = _attr("webhookURL", str)
    webhook_content_type: str = _attr("webhookContentType", str)
    webhook_custom_body: str = _attr("webhookCustomBody", str, omitempty=True)
    webhook_additional_headers: dict[str, str] = field(
        default_factory=dict,
        metadata={
            "json": "webhookAdditionalHeaders",
            "kind": dict,
            "decode": decode_headers,
            "encode": encode_headers,
            "omitempty": True,
        },
    )

    def type(self) -> str:
        return "webhook"


@dataclass
class Webhook(_Provider):
    """A webhook notification."""

    details_type: ClassVar[type] = WebhookDetails
    base: NotificationBase = field(default_factory=NotificationBase)
    details: WebhookDetails = field(default_factory=WebhookDetails)

    @classmethod
    def from_json(cls, data: str | bytes) -> Webhook:
        return super().from_json(data)

    def to_json(self) -> str:
        return super().to_json()

    def __str__(self) -> str:
        return super().__str__()