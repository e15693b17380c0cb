"""Query-string parsing for limits, pages and time bounds."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from ..core.time import as_utc, from_epoch_ms
from ..errors import ValidationError

LIST_DEFAULT_LIMIT = 25
LIST_MAX_LIMIT = 200
LEADERBOARD_DEFAULT_LIMIT = 10
LEADERBOARD_MAX_LIMIT = 100
PLAYERS_DEFAULT_LIMIT = 100
PLAYERS_MAX_LIMIT = 500

_LEADING_INT = re.compile(r"\s*([+-]?\d{1,18})")


def clamp_int(raw: Optional[str], default: int, minimum: int, maximum: int) -> int:
    """Parse ``raw`` as an int clamped to ``[minimum, maximum]``.

    Only the leading integer counts (``"10abc"`` and
    ``"10.5"`` give 10). Missing, unparsable and zero values fall back to
    ``default``.
    """

    match = _LEADING_INT.match(str(raw)) if raw is not None else None
    value = int(match.group(1)) if match else 0
    if value == 0:
        value = default
    return max(minimum, min(maximum, value))


def page_and_limit(
    page: Optional[str],
    limit: Optional[str],
    *,
    default_limit: int = LIST_DEFAULT_LIMIT,
    max_limit: int = LIST_MAX_LIMIT,
) -> tuple[int, int, int]:
    """Return ``(page, limit, offset)`` for offset pagination."""

    page_number = clamp_int(page, 1, 1, 2**31 - 1)
    page_size = clamp_int(limit, default_limit, 1, max_limit)
    return page_number, page_size, (page_number - 1) * page_size


def parse_time_bound(raw: Optional[str], field: str) -> Optional[datetime]:
    """Accept epoch milliseconds or ISO-8601; naive timestamps are read as UTC."""

    if raw is None or not raw.strip():
        return None
    text = raw.strip()
    try:
        if text.lstrip("-").isdigit():
            return from_epoch_ms(int(text))
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except (OverflowError, OSError, ValueError) as exc:
        raise ValidationError.for_field(
            field, "Expected epoch milliseconds or an ISO-8601 timestamp"
        ) from exc
    return as_utc(parsed)


__all__ = [
    "LEADERBOARD_DEFAULT_LIMIT",
    "LEADERBOARD_MAX_LIMIT",
    "LIST_DEFAULT_LIMIT",
    "LIST_MAX_LIMIT",
    "PLAYERS_DEFAULT_LIMIT",
    "PLAYERS_MAX_LIMIT",
    "clamp_int",
    "page_and_limit",
    "parse_time_bound",
]
