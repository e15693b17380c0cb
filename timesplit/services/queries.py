"""Read-only projections over stored sessions and splits."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import Float, cast, distinct, func
from sqlmodel import Session, select

from ..core.time import isoformat_z
from ..errors import NotFound
from ..models import GameSession, Split
from .pagination import (
    LEADERBOARD_DEFAULT_LIMIT,
    LEADERBOARD_MAX_LIMIT,
    PLAYERS_DEFAULT_LIMIT,
    PLAYERS_MAX_LIMIT,
    clamp_int,
    page_and_limit,
)

RawInt = Optional[Union[str, int]]


def as_number(value: Any) -> Optional[Union[int, float]]:
    """Render a stored numeric as a JSON number."""

    if value is None:
        return None
    number = value if isinstance(value, Decimal) else Decimal(str(value))
    if number == number.to_integral_value():
        return int(number)
    return float(number)


def session_to_dict(record: GameSession) -> Dict[str, Any]:
    """Serialise a session header to an API-friendly dict."""

    return {
        "id": record.id,
        "player": record.player,
        "mode": record.mode,
        "started_at": isoformat_z(record.started_at),
        "duration_ms": record.duration_ms,
        "total_score": as_number(record.total_score),
        "created_at": isoformat_z(record.created_at),
        "updated_at": isoformat_z(record.updated_at),
    }


def split_to_dict(split: Split) -> Dict[str, Any]:
    return {
        "t": split.t_ms,
        "lap": split.lap,
        "score": as_number(split.score),
        "note": split.note,
    }


def list_sessions(
    session: Session,
    *,
    page: RawInt = None,
    limit: RawInt = None,
    player: Optional[str] = None,
    mode: Optional[str] = None,
    started_from: Optional[datetime] = None,
    started_to: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Page through headers, newest start first, each with its split count."""

    page_number, page_size, offset = page_and_limit(page, limit)

    filters = []
    if player:
        filters.append(GameSession.player == player)
    if mode:
        filters.append(GameSession.mode == mode)
    if started_from is not None:
        filters.append(GameSession.started_at >= started_from)
    if started_to is not None:
        filters.append(GameSession.started_at <= started_to)

    split_count = (
        select(func.count(Split.t_ms))
        .where(Split.session_id == GameSession.id)
        .correlate(GameSession)
        .scalar_subquery()
        .label("splits")
    )
    page_query = select(GameSession, split_count)
    count_query = select(func.count()).select_from(GameSession)
    for clause in filters:
        page_query = page_query.where(clause)
        count_query = count_query.where(clause)

    rows = session.exec(
        page_query.order_by(GameSession.started_at.desc(), GameSession.id.asc())
        .offset(offset)
        .limit(page_size)
    ).all()
    total = session.exec(count_query).one()

    return {
        "data": [{**session_to_dict(record), "splits": splits} for record, splits in rows],
        "page": page_number,
        "limit": page_size,
        "total": int(total),
    }


def get_session_detail(session: Session, session_id: str) -> Dict[str, Any]:
    """Return one header with its splits in ascending offset order."""

    record = session.get(GameSession, session_id)
    if record is None:
        raise NotFound("session", session_id)

    splits = session.exec(
        select(Split).where(Split.session_id == session_id).order_by(Split.t_ms.asc())
    ).all()
    return {**session_to_dict(record), "splits": [split_to_dict(split) for split in splits]}


def leaderboard(
    session: Session, *, mode: Optional[str] = None, limit: RawInt = None
) -> List[Dict[str, Any]]:
    """Best total score per (player, mode), highest first."""

    size = clamp_int(limit, LEADERBOARD_DEFAULT_LIMIT, 1, LEADERBOARD_MAX_LIMIT)
    best_score = func.max(GameSession.total_score).label("best_score")

    query = select(GameSession.player, GameSession.mode, best_score)
    if mode:
        query = query.where(GameSession.mode == mode)
    rows = session.exec(
        query.group_by(GameSession.player, GameSession.mode)
        .order_by(best_score.desc(), GameSession.player.asc())
        .limit(size)
    ).all()

    return [
        {"player": row.player, "mode": row.mode, "best_score": as_number(row.best_score)}
        for row in rows
    ]


def players(
    session: Session, *, search: Optional[str] = None, limit: RawInt = None
) -> List[Dict[str, Any]]:
    """Distinct players with session counts and best scores."""

    size = clamp_int(limit, PLAYERS_DEFAULT_LIMIT, 1, PLAYERS_MAX_LIMIT)
    sessions_count = func.count().label("sessions")
    best_score = func.max(GameSession.total_score).label("best_score")

    query = select(GameSession.player, sessions_count, best_score)
    if search:
        query = query.where(GameSession.player.icontains(search, autoescape=True))
    rows = session.exec(
        query.group_by(GameSession.player)
        .order_by(sessions_count.desc(), best_score.desc(), GameSession.player.asc())
        .limit(size)
    ).all()

    return [
        {
            "player": row.player,
            "sessions": int(row.sessions),
            "best_score": as_number(row.best_score),
        }
        for row in rows
    ]


def modes(session: Session) -> List[Dict[str, Any]]:
    rows = session.exec(
        select(
            GameSession.mode,
            func.count().label("sessions"),
            cast(func.avg(GameSession.total_score), Float).label("avg_score"),
            func.max(GameSession.total_score).label("max_score"),
        )
        .group_by(GameSession.mode)
        .order_by(GameSession.mode.asc())
    ).all()

    return [
        {
            "mode": row.mode,
            "sessions": int(row.sessions),
            "avg_score": row.avg_score,
            "max_score": as_number(row.max_score),
        }
        for row in rows
    ]


def stats(session: Session) -> Dict[str, Any]:
    """Global totals plus a per-mode breakdown."""

    totals = session.exec(
        select(func.count().label("sessions"), func.count(distinct(GameSession.player)).label("players"))
        .select_from(GameSession)
    ).one()
    by_mode = session.exec(
        select(
            GameSession.mode,
            func.count().label("total"),
            cast(func.avg(GameSession.total_score), Float).label("avg_score"),
        )
        .group_by(GameSession.mode)
        .order_by(GameSession.mode.asc())
    ).all()

    return {
        "sessions": int(totals.sessions),
        "players": int(totals.players),
        "byMode": [
            {"mode": row.mode, "total": int(row.total), "avg_score": row.avg_score}
            for row in by_mode
        ],
    }


__all__ = [
    "as_number",
    "get_session_detail",
    "leaderboard",
    "list_sessions",
    "modes",
    "players",
    "session_to_dict",
    "split_to_dict",
    "stats",
]
