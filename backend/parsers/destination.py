"""
Parse the Destination/Gateway columns of `netstat -rn` output.

The same column can hold very different things:
- default
- 10.1/16, fe80::%lo0/64          → network (optionally with a zone)
- 192.168.1.1, 127, 169.254      → IPv4 host, possibly in inet_addr(3) shorthand
- ::1, fe80::1%lo0               → IPv6 host
- link#6                         → link-layer marker
- a0:63:91:e5:5e:f7, 1.0.5e.0.0.1 → MAC address (bridges print dots)
"""

from __future__ import annotations

import ipaddress
import re

from errors import (
    DestinationParseError,
    IPv4ComponentCountError,
    IPv4ComponentError,
    MacAddressParseError,
)
from models import DEFAULT, CidrEntity, Destination, Entity, LinkEntity, MacEntity

_BYTE_RE = re.compile(r'^[0-9]+$')
_HEX_BYTE_RE = re.compile(r'^[0-9A-Fa-f]{1,2}$')
_MAC_SEP_RE = re.compile(r'[:-]')


def parse_destination(token: str) -> Destination:
    """Parse one Destination or Gateway field."""
    if token.startswith("link"):
        return Destination(entity=LinkEntity(token))

    if "%" not in token:
        return Destination(entity=parse_simple_destination(token))

    # Zone ID, e.g. fe80::1%lo0 or fe80::%utun0/64
    addr, zone_etc = token.split("%", 1)
    network = _parse_network(addr)
    zone, sep, bits = zone_etc.partition("/")
    if sep:
        # Drop the zone and run the address/bits through the regular parser
        entity = parse_simple_destination(f"{addr}/{bits}")
        return Destination(entity=entity, zone=zone)
    return Destination(entity=CidrEntity(network), zone=zone)


def parse_simple_destination(token: str) -> Entity:
    """Parse a destination that has no link prefix and no zone."""
    if token == "default":
        return DEFAULT

    if "/" in token:
        return CidrEntity(_parse_network(_expand_short_network(token)))

    # IPv4 host
    if "." in token:
        try:
            return parse_ipv4_shorthand(token)
        except (IPv4ComponentError, IPv4ComponentCountError):
            # Bridge broadcast addresses sometimes contain a dot-delimited MAC address
            return MacEntity(parse_mac_address(token.replace(".", ":"), token))

    # IPv6 host
    if ":" in token:
        try:
            return CidrEntity.host(ipaddress.IPv6Address(token))
        except ValueError:
            return MacEntity(parse_mac_address(token))

    # Bare numbers
    return parse_ipv4_shorthand(token)


def parse_ipv4_shorthand(token: str) -> CidrEntity:
    """
    Parse an IPv4 host the way inet_addr(3) does.

    Besides the dotted quad, netstat prints shortened forms where the last
    component fills the low-order byte:
      a     → 0.0.0.a
      a.b   → a.0.0.b
      a.b.c → a.b.0.c
    """
    try:
        return CidrEntity.host(ipaddress.IPv4Address(token))
    except ValueError:
        pass

    parts = []
    for part in token.split("."):
        if not _BYTE_RE.match(part):
            raise IPv4ComponentError(token, f"invalid digit in {part!r}")
        value = int(part)
        if value > 255:
            raise IPv4ComponentError(token, f"{part} does not fit in a byte")
        parts.append(value)

    if len(parts) == 3:
        octets = (parts[0], parts[1], 0, parts[2])
    elif len(parts) == 2:
        octets = (parts[0], 0, 0, parts[1])
    elif len(parts) == 1:
        octets = (0, 0, 0, parts[0])
    else:
        raise IPv4ComponentCountError(len(parts), token)

    return CidrEntity.host(ipaddress.IPv4Address(bytes(octets)))


def parse_mac_address(text: str, token: str | None = None) -> bytes:
    """Parse six hex groups separated by ':' or '-'. Groups may drop the leading zero."""
    token = token or text
    groups = _MAC_SEP_RE.split(text)
    if len(groups) != 6:
        raise MacAddressParseError(token, f"expected 6 groups, found {len(groups)}")
    for group in groups:
        if not _HEX_BYTE_RE.match(group):
            raise MacAddressParseError(token, f"invalid hex byte {group!r}")
    return bytes(int(g, 16) for g in groups)


def _parse_network(text: str):
    try:
        return ipaddress.ip_network(text)
    except ValueError as e:
        raise DestinationParseError(text, e) from e


def _expand_short_network(token: str) -> str:
    """netstat drops trailing zero octets from IPv4 networks: 224.0.0/4 → 224.0.0.0/4."""
    addr, _, bits = token.partition("/")
    if ":" in addr or not addr:
        return token
    parts = addr.split(".")
    if len(parts) >= 4:
        return token
    return ".".join(parts + ["0"] * (4 - len(parts))) + "/" + bits
