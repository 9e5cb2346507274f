"""
Route resolver — pick the routing table entry the OS would use for an address.

Longest-prefix match, with two twists:
- entries resolved to a link or a hardware address beat any network prefix
- a default route is the weakest match of all
"""

from __future__ import annotations

import ipaddress
from functools import reduce
from typing import Iterable, Optional, Union

from collectors import RouteEntry
from models import CidrEntity, DefaultEntity, IPAddress, LinkEntity, MacEntity, Protocol


def route_contains(route: RouteEntry, address: IPAddress) -> bool:
    """Whether the route's destination is appropriate for the given address."""
    dest = route.destination.entity
    if isinstance(dest, CidrEntity):
        return dest.contains(address)
    if isinstance(dest, DefaultEntity):
        gw = route.gateway.entity
        if isinstance(gw, CidrEntity):
            # FIXME: IPv6 default routes should take the zone into account
            family = Protocol.V4 if address.version == 4 else Protocol.V6
            return route.protocol is family
        # Unlikely, but assume they're good if found
        return isinstance(gw, (LinkEntity, MacEntity))
    return False


def more_specific(a: RouteEntry, b: RouteEntry) -> RouteEntry:
    """Return whichever of the two routes is more precise. Ties go to `a`."""
    dest = a.destination.entity
    other = b.destination.entity

    if isinstance(dest, MacEntity):
        # Already in the ARP/NDP table, nothing is more precise
        return a
    if isinstance(dest, LinkEntity):
        return b if isinstance(other, MacEntity) else a
    if isinstance(dest, CidrEntity):
        if isinstance(other, (MacEntity, LinkEntity)):
            return b
        if isinstance(other, CidrEntity):
            return a if dest.prefix_length >= other.prefix_length else b
        return a
    if isinstance(dest, DefaultEntity):
        return a if isinstance(other, DefaultEntity) else b
    raise TypeError(f"unexpected destination entity {dest!r}")


def find_route(routes: Iterable[RouteEntry], address: Union[str, IPAddress]) -> Optional[RouteEntry]:
    """Find the route that most precisely matches the address, or None."""
    if isinstance(address, str):
        address = ipaddress.ip_address(address)
    candidates = [r for r in routes if route_contains(r, address)]
    if not candidates:
        return None
    return reduce(more_specific, candidates)
