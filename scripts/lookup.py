#!/usr/bin/env python3
"""
Look up which route handles traffic to an address.

Usage: python3 scripts/lookup.py [address] [snapshot-file]

Without a snapshot file, runs netstat -rn on this machine.
"""

from __future__ import annotations

import sys
import asyncio
import ipaddress
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from collectors.netstat_collector import FileCollector, NetstatCollector
from errors import RoutingTableError
from routing_table import load_routing_table

DEFAULT_ADDRESS = "1.1.1.1"


async def main(address: str, snapshot: str | None = None) -> int:
    try:
        addr = ipaddress.ip_address(address)
    except ValueError:
        print(f"error: '{address}' is not an IP address", file=sys.stderr)
        return 2

    collector = FileCollector(snapshot) if snapshot else NetstatCollector()
    try:
        table = await load_routing_table(collector)
    except RoutingTableError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    route = table.find_route(addr)
    if route is None:
        print(f"No route to {addr}")
        return 1

    print(f"{addr} => {route.gateway} via {route.interface}")
    gateways = table.default_gateways(route.interface)
    if gateways:
        print(f"  default gateways on {route.interface}: {', '.join(str(g) for g in gateways)}")
    return 0


if __name__ == "__main__":
    addr = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_ADDRESS
    snap = sys.argv[2] if len(sys.argv) > 2 else None
    sys.exit(asyncio.run(main(addr, snap)))
