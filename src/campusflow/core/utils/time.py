"""Time helpers.

Timestamp formatting is drawn from YAML config (``time.iso8601``) so stored
``createdAt`` / ``updatedAt`` values stay consistent across the registry.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_timestamp(*, home: Optional[Path] = None) -> str:
    """Return ISO 8601 UTC timestamp according to YAML configuration."""
    from campusflow.core.config.domains import TimeConfig

    cfg = TimeConfig(home=home)
    dt = utc_now()
    ts = dt.isoformat(timespec=cfg.timespec) if cfg.timespec else dt.isoformat()
    if cfg.use_z_suffix:
        ts = ts.replace("+00:00", "Z")
    return ts


def parse_iso_date(value: str) -> Optional[date]:
    """Parse ``YYYY-MM-DD``; returns None for anything unparsable."""
    try:
        return date.fromisoformat(str(value))
    except (TypeError, ValueError):
        return None


__all__ = ["utc_now", "utc_timestamp", "parse_iso_date"]
