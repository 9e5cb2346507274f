"""Parse complete `netstat -rn` output (macOS/Darwin) into a RoutingTable."""

from __future__ import annotations

import logging
import re
from datetime import timedelta
from typing import Optional

from collectors import RouteEntry
from errors import (
    EntryBeforeProtocolError,
    ExpirationParseError,
    MissingDestinationError,
    MissingGatewayError,
    MissingHeadersError,
    MissingInterfaceError,
    RouteEntryParseError,
    RouteLineError,
)
from models import CidrEntity, DefaultEntity, Protocol, RoutingFlag, decode_flag
from parsers.destination import parse_destination
from routing_table import RoutingTable

logger = logging.getLogger(__name__)

SECTION_MARKERS: dict[str, Protocol] = {
    "Internet:": Protocol.V4,
    "Internet6:": Protocol.V6,
}
BANNER_PREFIX = "Routing table"

_SECONDS_RE = re.compile(r'^[0-9]+$')


def parse_flags(field: str) -> frozenset[RoutingFlag]:
    return frozenset(decode_flag(c) for c in field)


def parse_expire(field: str) -> Optional[timedelta]:
    """`!` means the entry never expires, otherwise it's a count of seconds."""
    if field == "!":
        return None
    if not _SECONDS_RE.match(field):
        raise ExpirationParseError(field, "not an unsigned integer")
    try:
        return timedelta(seconds=int(field))
    except OverflowError as e:
        raise ExpirationParseError(field, str(e)) from e


def parse_route_line(line: str, headers: list[str], protocol: Protocol) -> RouteEntry:
    """
    Parse one data row, pairing its fields with the active column headers.

    Columns we don't know about are skipped. Rows shorter than the header
    line (e.g. no Expire value) just leave those columns unset.
    """
    destination = None
    gateway = None
    interface = None
    flags: frozenset[RoutingFlag] = frozenset()
    expires = None

    for header, value in zip(headers, line.split()):
        if header == "Destination":
            destination = parse_destination(value)
        elif header == "Gateway":
            gateway = parse_destination(value)
        elif header == "Flags":
            flags = parse_flags(value)
        elif header == "Netif":
            interface = value
        elif header == "Expire":
            expires = parse_expire(value)

    if destination is None:
        raise MissingDestinationError()
    if gateway is None:
        raise MissingGatewayError()
    if interface is None:
        raise MissingInterfaceError()

    return RouteEntry(
        protocol=protocol,
        destination=destination,
        gateway=gateway,
        interface=interface,
        flags=flags,
        expires=expires,
    )


def parse_netstat(output: str) -> RoutingTable:
    """
    Build a RoutingTable from complete netstat output.

    Any bad line aborts the whole parse. The default gateway index is
    filled in the same pass as the route list.
    """
    # Only \n and \r\n end a line; other control characters stay inside the row
    lines = [ln[:-1] if ln.endswith("\r") else ln for ln in output.split("\n")]
    routes: list[RouteEntry] = []
    default_gateways: dict[str, list] = {}
    protocol: Optional[Protocol] = None
    headers: list[str] = []

    i = 0
    while i < len(lines):
        line = lines[i].strip()
        i += 1
        if not line or line.startswith(BANNER_PREFIX):
            continue

        if line in SECTION_MARKERS:
            protocol = SECTION_MARKERS[line]
            # Next line holds the column headers
            if i >= len(lines) or lines[i].strip() in SECTION_MARKERS:
                raise MissingHeadersError(line)
            headers = lines[i].split()
            i += 1
            continue

        if protocol is None:
            raise EntryBeforeProtocolError(line)

        try:
            route = parse_route_line(line, headers, protocol)
        except RouteEntryParseError as e:
            raise RouteLineError(i, line, e) from e

        gw = route.gateway.entity
        if isinstance(route.destination.entity, DefaultEntity) and isinstance(gw, CidrEntity) and gw.is_host:
            default_gateways.setdefault(route.interface, []).append(gw.address)
        routes.append(route)

    logger.debug("Parsed %d routes, default gateways on %d interfaces", len(routes), len(default_gateways))
    return RoutingTable(routes, default_gateways)
