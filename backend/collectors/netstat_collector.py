"""
Netstat Collector — run `netstat -rn` and return its output.

The program path and arguments come from settings so tests (and other
platforms) can point at something else. FileCollector serves a canned
snapshot instead.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

from collectors import SnapshotCollector
from errors import (
    NetstatDecodeError,
    NetstatExecError,
    NetstatFailedError,
    NetstatTimeoutError,
    SnapshotDecodeError,
    SnapshotFileError,
)

logger = logging.getLogger(__name__)

NETSTAT_PATH = "/usr/sbin/netstat"


class NetstatCollector(SnapshotCollector):
    """Collect the routing table by executing netstat."""

    def __init__(self, path: str = NETSTAT_PATH, args: Optional[list[str]] = None,
                 timeout: Optional[float] = 10.0):
        self.path = path
        self.args = list(args) if args is not None else ["-rn"]
        self.timeout = timeout

    def name(self) -> str:
        return "netstat"

    async def get_snapshot(self) -> str:
        try:
            proc = await asyncio.create_subprocess_exec(
                self.path, *self.args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error(f"[{self.name()}] failed to execute {self.path}: {e}")
            raise NetstatExecError(self.path, e) from e

        try:
            out, err = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            logger.error(f"[{self.name()}] timed out after {self.timeout}s")
            raise NetstatTimeoutError(self.timeout)

        if proc.returncode != 0:
            stderr = err.decode("utf-8", errors="replace")
            logger.error(f"[{self.name()}] exited with status {proc.returncode}")
            raise NetstatFailedError(proc.returncode, stderr)

        try:
            output = out.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"[{self.name()}] output is not UTF-8: {e}")
            raise NetstatDecodeError(e) from e

        logger.info(f"[{self.name()}] {len(output.splitlines())} lines of output")
        return output


class FileCollector(SnapshotCollector):
    """Serve a routing table snapshot saved to disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def name(self) -> str:
        return f"file:{self.path.name}"

    async def get_snapshot(self) -> str:
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            logger.error(f"[{self.name()}] failed to read {self.path}: {e}")
            raise SnapshotFileError(str(self.path), e) from e

        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"[{self.name()}] {self.path} is not UTF-8: {e}")
            raise SnapshotDecodeError(str(self.path), e) from e
