"""Routing Table Lookup API."""

from __future__ import annotations

import ipaddress
import logging
import os
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException

from collectors import SnapshotCollector
from errors import CollectorError, RoutingTableError
from routing_table import RoutingTable, load_routing_table
from settings import build_collector, load_settings

backend_dir = Path(__file__).parent
project_dir = backend_dir.parent
config_path = Path(os.environ.get("ROUTING_TABLE_CONFIG", project_dir / "config" / "routing-table.yml"))

settings = load_settings(config_path)

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Routing Table Lookup", description="Which route handles traffic to an address", version="0.1.0")

_collector: SnapshotCollector = build_collector(settings)
_table: Optional[RoutingTable] = None


async def _get_table() -> RoutingTable:
    global _table
    if _table is None:
        try:
            _table = await load_routing_table(_collector)
        except CollectorError as e:
            logger.error("Could not collect routing table: %s", e)
            raise HTTPException(502, f"Could not collect routing table: {e}")
        except RoutingTableError as e:
            logger.error("Could not parse routing table: %s", e)
            raise HTTPException(502, f"Could not parse routing table: {e}")
    return _table


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": "0.1.0", "collector": _collector.name(), "loaded": _table is not None}


@app.get("/api/routes")
async def list_routes():
    table = await _get_table()
    return {"routes": [r.to_dict() for r in table.routes]}


@app.get("/api/route/{address}")
async def lookup_route(address: str):
    try:
        addr = ipaddress.ip_address(address.strip())
    except ValueError:
        raise HTTPException(400, f"'{address}' is not an IP address")

    table = await _get_table()
    route = table.find_route(addr)
    if route is None:
        raise HTTPException(404, f"No route to {addr}")
    return {"address": str(addr), "route": route.to_dict()}


@app.get("/api/gateways/{interface}")
async def default_gateways(interface: str):
    table = await _get_table()
    gateways = table.default_gateways(interface)
    if gateways is None:
        raise HTTPException(404, f"No default gateway on '{interface}'")
    return {"interface": interface, "gateways": [str(gw) for gw in gateways]}


@app.post("/api/reload")
async def reload_table():
    global _table
    _table = None
    table = await _get_table()
    return {"status": "reloaded", "routes": len(table)}
