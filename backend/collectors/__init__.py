"""Snapshot collectors — obtain raw `netstat -rn` text, and the RouteEntry it parses into."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

from models import Destination, Protocol, RoutingFlag


@dataclass(frozen=True)
class RouteEntry:
    """A single route obtained from the `netstat -rn` output."""
    protocol: Protocol
    destination: Destination     # e.g. a host or CIDR
    gateway: Destination         # how to reach the destination
    interface: str               # Netif column
    flags: frozenset[RoutingFlag] = field(default_factory=frozenset)
    expires: Optional[timedelta] = None  # mostly seen on ARP/NDP-derived entries

    def to_dict(self) -> dict:
        return {
            "protocol": self.protocol.value,
            "destination": str(self.destination),
            "gateway": str(self.gateway),
            "interface": self.interface,
            "flags": sorted(f.value for f in self.flags),
            "expires": int(self.expires.total_seconds()) if self.expires is not None else None,
        }


class SnapshotCollector(ABC):
    """Base class for anything that can produce routing table text."""

    @abstractmethod
    def name(self) -> str:
        """Collector name, used in log messages."""
        ...

    @abstractmethod
    async def get_snapshot(self) -> str:
        """Return the complete routing table text."""
        ...
