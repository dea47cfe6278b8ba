"""HTTP(S) monitors: plain status checks, JSON queries and keyword matches."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Mapping

from .base import MonitorBase, MonitorError, _dumps, _typed, format_fields

_KIND_DEFAULT = object()

_BASIC_PHRASE_FIELD = "basic_auth_pass"
_OAUTH_ENDPOINT_FIELD = "oauth_token_url"
_OAUTH_CLIENT_PHRASE_FIELD = "oauth_client_secret"


class AuthMethod(str, Enum):
    """Authentication method used by HTTP monitors."""

    NONE = ""
    BASIC = "basic"
    NTLM = "ntlm"
    MTLS = "mtls"
    OAUTH2_CC = "oauth2-cc"


def _decode_auth_method(value: Any) -> AuthMethod | str:
    if not isinstance(value, str):
        raise MonitorError(f"attribute 'authMethod': expected str, got {type(value).__name__}")
    try:
        return AuthMethod(value)
    except ValueError:
        return value


def _encode_auth_method(value: AuthMethod | str) -> str:
    return value.value if isinstance(value, AuthMethod) else str(value)


def _decode_status_codes(value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise MonitorError("attribute 'accepted_statuscodes' must be a list of strings")
    return list(value)


def _encode_status_codes(value: list[str] | None) -> list[str] | None:
    return None if value is None else list(value)


def _attr(key: str, kind: type, default: Any = _KIND_DEFAULT, **extra: Any) -> Any:
    """Declare a detail attribute with its JSON name and expected kind."""
    if default is _KIND_DEFAULT:
        default = kind()
    return field(default=default, metadata={"json": key, "kind": kind, **extra})


def _decode_details(details_type: type, document: Mapping[str, Any]) -> Any:
    values: dict[str, Any] = {}
    for spec in fields(details_type):
        key = spec.metadata["json"]
        raw = document.get(key)
        if raw is None:
            continue
        decode: Callable[[Any], Any] | None = spec.metadata.get("decode")
        if decode is not None:
            values[spec.name] = decode(raw)
        else:
            values[spec.name] = _typed(document, key, spec.metadata["kind"], None)
    return details_type(**values)


def _encode_details(details: Any) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for spec in fields(details):
        value = getattr(details, spec.name)
        encode = spec.metadata.get("encode")
        result[spec.metadata["json"]] = encode(value) if encode is not None else value
    return result


def _load(data: str | bytes) -> tuple[MonitorBase, dict[str, Any]]:
    base = MonitorBase.from_json(data)
    return base, json.loads(base._raw or "{}")


@dataclass
class HTTPDetails:
    """Settings of an HTTP request made by a monitor."""

    url: str = _attr("url", str, "")
    timeout: int = _attr("timeout", int, 0)
    expiry_notification: bool = _attr("expiryNotification", bool, False)
    ignore_tls: bool = _attr("ignoreTls", bool, False)
    max_redirects: int = _attr("maxredirects", int, 0)
    accepted_status_codes: list[str] | None = _attr(
        "accepted_statuscodes",
        list,
        None,
        decode=_decode_status_codes,
        encode=_encode_status_codes,
    )
    method: str = _attr("method", str, "")
    http_body_encoding: str = _attr("httpBodyEncoding", str, "")
    body: str = _attr("body", str, "")
    headers: str = _attr("headers", str, "")
    auth_method: AuthMethod | str = _attr(
        "authMethod",
        str,
        AuthMethod.NONE,
        decode=_decode_auth_method,
        encode=_encode_auth_method,
    )
    basic_auth_user: str = _attr("basic_auth_user", str, "")
    basic_auth_pass: str = _attr(_BASIC_PHRASE_FIELD, str)
    auth_domain: str = _attr("authDomain", str, "")
    auth_workstation: str = _attr("authWorkstation", str, "")
    tls_cert: str = _attr("tlsCert", str, "")
    tls_key: str = _attr("tlsKey", str, "")
    tls_ca: str = _attr("tlsCa", str, "")
    oauth_auth_method: str = _attr("oauth_auth_method", str, "")
    oauth_token_url: str = _attr(_OAUTH_ENDPOINT_FIELD, str)
    oauth_client_id: str = _attr("oauth_client_id", str, "")
    oauth_client_secret: str = _attr(_OAUTH_CLIENT_PHRASE_FIELD, str)
    oauth_scopes: str = _attr("oauth_scopes", str, "")

    def type(self) -> str:
        return "http"


@dataclass
class HTTPJSONQueryDetails:
    """Settings of a JSON query evaluated against an HTTP response."""

    json_path: str = _attr("jsonPath", str, "")
    expected_value: str = _attr("expectedValue", str, "")
    json_path_operator: str = _attr("jsonPathOperator", str, "")

    def type(self) -> str:
        return "json-query"


@dataclass
class HTTPKeywordDetails:
    """Settings of a keyword searched for in an HTTP response."""

    keyword: str = _attr("keyword", str, "")
    invert_keyword: bool = _attr("invertKeyword", bool, False)

    def type(self) -> str:
        return "keyword"


def _http_document(base: MonitorBase, http: HTTPDetails, type_name: str) -> dict[str, Any]:
    document = base.common_fields(type_name)
    document.update(_encode_details(http))
    document["proxyId"] = base.proxy_id
    return document


@dataclass
class HTTPMonitor:
    """A monitor checking the status of an HTTP(S) endpoint."""

    base: MonitorBase = field(default_factory=MonitorBase)
    http: HTTPDetails = field(default_factory=HTTPDetails)

    @classmethod
    def from_json(cls, data: str | bytes) -> HTTPMonitor:
        base, document = _load(data)
        return cls(base=base, http=_decode_details(HTTPDetails, document))

    def to_json(self) -> str:
        document = _http_document(self.base, self.http, self.type())
        document["conditions"] = []
        return _dumps(document)

    def type(self) -> str:
        return self.http.type()

    def __str__(self) -> str:
        return f"{format_fields(self.base, False)}, {format_fields(self.http, True)}"


@dataclass
class HTTPJSONQueryMonitor:
    """A monitor evaluating a JSON query on an HTTP(S) response."""

    base: MonitorBase = field(default_factory=MonitorBase)
    http: HTTPDetails = field(default_factory=HTTPDetails)
    json_query: HTTPJSONQueryDetails = field(default_factory=HTTPJSONQueryDetails)

    @classmethod
    def from_json(cls, data: str | bytes) -> HTTPJSONQueryMonitor:
        base, document = _load(data)
        return cls(
            base=base,
            http=_decode_details(HTTPDetails, document),
            json_query=_decode_details(HTTPJSONQueryDetails, document),
        )

    def to_json(self) -> str:
        document = _http_document(self.base, self.http, self.type())
        document.update(_encode_details(self.json_query))
        document["conditions"] = []
        return _dumps(document)

    def type(self) -> str:
        return self.json_query.type()

    def __str__(self) -> str:
        return (
            f"{format_fields(self.base, False)}, {format_fields(self.http, True)}, "
            f"{format_fields(self.json_query, True)}"
        )


@dataclass
class HTTPKeywordMonitor:
    """A monitor searching an HTTP(S) response for a keyword."""

    base: MonitorBase = field(default_factory=MonitorBase)
    http: HTTPDetails = field(default_factory=HTTPDetails)
    keyword: HTTPKeywordDetails = field(default_factory=HTTPKeywordDetails)

    @classmethod
    def from_json(cls, data: str | bytes) -> HTTPKeywordMonitor:
        base, document = _load(data)
        return cls(
            base=base,
            http=_decode_details(HTTPDetails, document),
            keyword=_decode_details(HTTPKeywordDetails, document),
        )

    def to_json(self) -> str:
        document = _http_document(self.base, self.http, self.type())
        document.update(_encode_details(self.keyword))
        document["conditions"] = []
        return _dumps(document)

    def type(self) -> str:
        return self.keyword.type()

    def __str__(self) -> str:
        return (
            f"{format_fields(self.base, False)}, {format_fields(self.http, True)}, "
            f"{format_fields(self.keyword, True)}"
        )