"""Time helpers shared by models, services and serializers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


def from_epoch_ms(value: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything stored is UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def isoformat_z(value: Optional[datetime]) -> Optional[str]:
    """Render ``value`` as ISO-8601 UTC with a ``Z`` suffix."""

    if value is None:
        return None
    return as_utc(value).replace(tzinfo=None).isoformat() + "Z"


__all__ = ["as_utc", "from_epoch_ms", "isoformat_z", "utcnow"]
