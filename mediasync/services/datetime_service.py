"""Datetime helpers: file timestamps -> strict ISO 8601 output."""

from __future__ import annotations

from datetime import datetime, timezone

import pendulum


def from_timestamp(timestamp: float) -> datetime:
    """Convert a POSIX timestamp to a timezone-aware UTC datetime."""
    return pendulum.from_timestamp(timestamp, tz="UTC")


def format_iso(dt: datetime) -> str:
    """Format datetime as ISO 8601 (RFC 3339) for upload metadata.

    Naive datetimes are assumed to be UTC. Output always carries an explicit
    offset, e.g. ``2026-02-02T22:21:29.975359+00:00``.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


def epoch_seconds(dt: datetime) -> int:
    """Return whole seconds since the epoch, truncated toward negative infinity."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() // 1)
