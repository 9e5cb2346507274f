"""Immutable snapshot of the routing table."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Union

from collectors import RouteEntry, SnapshotCollector
from models import IPAddress
from resolver import find_route

logger = logging.getLogger(__name__)


class RoutingTable:
    """
    Routes in parse order, plus a map of interfaces to their default routers.

    Built once from a snapshot; there is no way to add or remove routes
    afterwards, so a table can be shared freely between readers.
    """

    __slots__ = ("_routes", "_default_gateways")

    def __init__(self, routes: Iterable[RouteEntry], default_gateways: Mapping[str, Iterable[IPAddress]]):
        self._routes = tuple(routes)
        self._default_gateways = {k: tuple(v) for k, v in default_gateways.items()}

    @classmethod
    def from_netstat_output(cls, output: str) -> "RoutingTable":
        """Parse complete `netstat -rn` output as printed on macOS/Darwin."""
        from parsers.netstat import parse_netstat
        return parse_netstat(output)

    @property
    def routes(self) -> tuple[RouteEntry, ...]:
        return self._routes

    @property
    def interfaces(self) -> list[str]:
        """Interfaces that have at least one default gateway."""
        return list(self._default_gateways)

    def find_route(self, address: Union[str, IPAddress]) -> Optional[RouteEntry]:
        """Find the routing table entry that most precisely matches the address."""
        # TODO: index routes by prefix length so an exact host match can short-circuit
        return find_route(self._routes, address)

    def default_gateways(self, interface: str) -> Optional[tuple[IPAddress, ...]]:
        return self._default_gateways.get(interface)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"RoutingTable(routes={len(self._routes)}, interfaces={self.interfaces})"


async def load_routing_table(collector: SnapshotCollector) -> RoutingTable:
    """Fetch a snapshot from the collector and parse it."""
    output = await collector.get_snapshot()
    table = RoutingTable.from_netstat_output(output)
    logger.info("[%s] loaded %d routes", collector.name(), len(table))
    return table
