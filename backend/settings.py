"""Configuration — where the routing table snapshot comes from."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from collectors import SnapshotCollector
from collectors.netstat_collector import NETSTAT_PATH, FileCollector, NetstatCollector

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    netstat_path: str = NETSTAT_PATH
    netstat_args: list[str] = Field(default_factory=lambda: ["-rn"])
    timeout_seconds: float = Field(default=10.0, gt=0)
    snapshot_file: Optional[str] = None  # canned snapshot, used instead of running netstat
    log_level: str = "INFO"


def load_settings(path: str | Path) -> Settings:
    """Load settings from YAML. A missing file gives the defaults."""
    path = Path(path)
    if not path.exists():
        logger.info("No config at %s, using defaults", path)
        return Settings()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return Settings.model_validate(raw)


def build_collector(settings: Settings) -> SnapshotCollector:
    if settings.snapshot_file:
        return FileCollector(settings.snapshot_file)
    return NetstatCollector(
        path=settings.netstat_path,
        args=settings.netstat_args,
        timeout=settings.timeout_seconds,
    )
