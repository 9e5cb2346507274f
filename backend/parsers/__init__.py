"""Parsers for `netstat -rn` routing table output."""

from .destination import parse_destination, parse_ipv4_shorthand, parse_mac_address
from .netstat import parse_netstat, parse_route_line

__all__ = ["parse_destination", "parse_ipv4_shorthand", "parse_mac_address", "parse_netstat", "parse_route_line"]
