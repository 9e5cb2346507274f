"""
Data models for the routing table snapshot.

A route's destination and gateway are both written as an "entity", which can be:
- default   (the catch-all route)
- a CIDR    (an IPv4/IPv6 network, or a single host as a full-length prefix)
- a link    (link#N style interface markers)
- a MAC     (hardware address of a resolved neighbor)
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]
IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class Protocol(str, Enum):
    """Address family of a netstat section."""
    V4 = "v4"     # Internet:
    V6 = "v6"     # Internet6:


class RoutingFlag(str, Enum):
    """Single-letter route flags as printed in the netstat Flags column."""
    PROTO1 = "1"
    PROTO2 = "2"
    PROTO3 = "3"
    BLACKHOLE = "B"
    BROADCAST = "b"
    CLONING = "C"
    PR_CLONING = "c"
    DYNAMIC = "D"
    GATEWAY = "G"
    HOST = "H"
    IF_SCOPE = "I"
    IF_REF = "i"
    LL_INFO = "L"
    MODIFIED = "M"
    MULTICAST = "m"
    REJECT = "R"
    ROUTER = "r"
    STATIC = "S"
    UP = "U"
    WAS_CLONED = "W"
    X_RESOLVE = "X"
    PROXY = "Y"
    GLOBAL = "g"
    UNKNOWN = "unknown"


_FLAGS_BY_CHAR: dict[str, RoutingFlag] = {
    f.value: f for f in RoutingFlag if f is not RoutingFlag.UNKNOWN
}


def decode_flag(char: str) -> RoutingFlag:
    """Map one flag character to its RoutingFlag. Unrecognized letters become UNKNOWN."""
    return _FLAGS_BY_CHAR.get(char, RoutingFlag.UNKNOWN)


# --- Entities ---

@dataclass(frozen=True)
class DefaultEntity:
    """The `default` route marker."""

    def __str__(self) -> str:
        return "default"


@dataclass(frozen=True)
class CidrEntity:
    """An IPv4/IPv6 network. Hosts are stored as /32 or /128 networks."""
    network: IPNetwork

    def __post_init__(self):
        if not isinstance(self.network, (ipaddress.IPv4Network, ipaddress.IPv6Network)):
            raise TypeError(f"CidrEntity needs an IPv4Network or IPv6Network, got {self.network!r}")

    @classmethod
    def host(cls, address: IPAddress) -> "CidrEntity":
        return cls(ipaddress.ip_network(address))

    @property
    def prefix_length(self) -> int:
        return self.network.prefixlen

    @property
    def protocol(self) -> Protocol:
        return Protocol.V4 if self.network.version == 4 else Protocol.V6

    @property
    def is_host(self) -> bool:
        return self.network.prefixlen == self.network.max_prefixlen

    @property
    def address(self) -> IPAddress:
        return self.network.network_address

    def contains(self, address: IPAddress) -> bool:
        return address.version == self.network.version and address in self.network

    def __str__(self) -> str:
        if self.is_host:
            return str(self.address)
        return str(self.network)


@dataclass(frozen=True)
class LinkEntity:
    """A link-layer destination, e.g. `link#6`."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class MacEntity:
    """A 6-byte hardware address."""
    address: bytes

    def __post_init__(self):
        if len(self.address) != 6:
            raise ValueError(f"MAC address must be 6 bytes, got {len(self.address)}")

    def __str__(self) -> str:
        return ":".join(f"{b:02x}" for b in self.address)


Entity = Union[DefaultEntity, CidrEntity, LinkEntity, MacEntity]

DEFAULT = DefaultEntity()


@dataclass(frozen=True)
class Destination:
    """An entity plus the optional `%zone` it was written with."""
    entity: Entity
    zone: Optional[str] = None  # parsed, not used when matching

    def __str__(self) -> str:
        if self.zone:
            return f"{self.entity}%{self.zone}"
        return str(self.entity)
