"""Network probe monitors: DNS lookups, ping, TCP ports and gRPC keyword checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .base import MonitorBase, MonitorError, _dumps, format_fields
from .http_monitors import _attr, _decode_details, _encode_details, _load


class DNSResolveType(str, Enum):
    """DNS record type a DNS monitor resolves."""

    A = "A"
    AAAA = "AAAA"
    CAA = "CAA"
    CNAME = "CNAME"
    MX = "MX"
    NS = "NS"
    PTR = "PTR"
    SOA = "SOA"
    SRV = "SRV"
    TXT = "TXT"


def _decode_resolve_type(value: Any) -> DNSResolveType | str:
    if not isinstance(value, str):
        raise MonitorError(
            f"attribute 'dns_resolve_type': expected str, got {type(value).__name__}"
        )
    try:
        return DNSResolveType(value)
    except ValueError:
        return value


def _encode_resolve_type(value: DNSResolveType | str) -> str:
    return value.value if isinstance(value, DNSResolveType) else str(value)


def _probe_json(base: MonitorBase, details: Any) -> str:
    """Build the document sent to the server for a probe monitor."""
    document = base.common_fields(details.type())
    document.update(_encode_details(details))
    # The server expects these to be arrays rather than null.
    document["accepted_statuscodes"] = []
    document["conditions"] = []
    return _dumps(document)


@dataclass
class DNSDetails:
    """Settings of a DNS lookup."""

    hostname: str = _attr("hostname", str, "")
    resolver_server: str = _attr("dns_resolve_server", str, "")
    resolve_type: DNSResolveType | str = _attr(
        "dns_resolve_type",
        str,
        "",
        decode=_decode_resolve_type,
        encode=_encode_resolve_type,
    )
    port: int = _attr("port", int, 0)

    def type(self) -> str:
        return "dns"


@dataclass
class DNSMonitor:
    """A monitor resolving a DNS record."""

    base: MonitorBase = field(default_factory=MonitorBase)
    dns: DNSDetails = field(default_factory=DNSDetails)

    @classmethod
    def from_json(cls, data: str | bytes) -> DNSMonitor:
        base, document = _load(data)
        return cls(base=base, dns=_decode_details(DNSDetails, document))

    def to_json(self) -> str:
        return _probe_json(self.base, self.dns)

    def type(self) -> str:
        return self.dns.type()

    def __str__(self) -> str:
        return f"{format_fields(self.base, False)}, {format_fields(self.dns, True)}"


@dataclass
class PingDetails:
    """Settings of an ICMP ping."""

    hostname: str = _attr("hostname", str, "")
    packet_size: int = _attr("packetSize", int, 0)

    def type(self) -> str:
        return "ping"


@dataclass
class PingMonitor:
    """A monitor pinging a host."""

    base: MonitorBase = field(default_factory=MonitorBase)
    ping: PingDetails = field(default_factory=PingDetails)

    @classmethod
    def from_json(cls, data: str | bytes) -> PingMonitor:
        base, document = _load(data)
        return cls(base=base, ping=_decode_details(PingDetails, document))

    def to_json(self) -> str:
        return _probe_json(self.base, self.ping)

    def type(self) -> str:
        return self.ping.type()

    def __str__(self) -> str:
        return f"{format_fields(self.base, False)}, {format_fields(self.ping, True)}"


@dataclass
class TCPPortDetails:
    """Settings of a TCP port check."""

    hostname: str = _attr("hostname", str, "")
    port: int = _attr("port", int, 0)

    def type(self) -> str:
        return "port"


@dataclass
class TCPPortMonitor:
    """A monitor checking that a TCP port accepts connections."""

    base: MonitorBase = field(default_factory=MonitorBase)
    tcp_port: TCPPortDetails = field(default_factory=TCPPortDetails)

    @classmethod
    def from_json(cls, data: str | bytes) -> TCPPortMonitor:
        base, document = _load(data)
        return cls(base=base, tcp_port=_decode_details(TCPPortDetails, document))

    def to_json(self) -> str:
        return _probe_json(self.base, self.tcp_port)

    def type(self) -> str:
        return self.tcp_port.type()

    def __str__(self) -> str:
        return f"{format_fields(self.base, False)}, {format_fields(self.tcp_port, True)}"


@dataclass
class GrpcKeywordDetails:
    """Settings of a gRPC call whose response is searched for a keyword."""

    grpc_url: str = _attr("grpcUrl", str, "")
    grpc_protobuf: str = _attr("grpcProtobuf", str, "")
    grpc_service_name: str = _attr("grpcServiceName", str, "")
    grpc_method: str = _attr("grpcMethod", str, "")
    grpc_enable_tls: bool = _attr("grpcEnableTls", bool, False)
    grpc_body: str = _attr("grpcBody", str, "")
    keyword: str = _attr("keyword", str, "")
    invert_keyword: bool = _attr("invertKeyword", bool, False)

    def type(self) -> str:
        return "grpc-keyword"


@dataclass
class GrpcKeywordMonitor:
    """A monitor calling a gRPC method and matching a keyword in the reply."""

    base: MonitorBase = field(default_factory=MonitorBase)
    grpc: GrpcKeywordDetails = field(default_factory=GrpcKeywordDetails)

    @classmethod
    def from_json(cls, data: str | bytes) -> GrpcKeywordMonitor:
        base, document = _load(data)
        return cls(base=base, grpc=_decode_details(GrpcKeywordDetails, document))

    def to_json(self) -> str:
        return _probe_json(self.base, self.grpc)

    def type(self) -> str:
        return self.grpc.type()

    def __str__(self) -> str:
        return f"{format_fields(self.base, False)}, {format_fields(self.grpc, True)}"