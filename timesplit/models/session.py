"""Database model for recorded gameplay sessions."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, Column, DateTime, Index, Numeric
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow

GAME_MODES = ("racing", "soccer")


class GameSession(SQLModel, table=True):
    """Session header; the aggregate root that owns its splits."""

    __tablename__ = "sessions"
    __table_args__ = (
        CheckConstraint(
            "mode IN ({})".format(", ".join(f"'{mode}'" for mode in GAME_MODES)),
            name="ck_sessions_mode",
        ),
        CheckConstraint("duration_ms >= 0", name="ck_sessions_duration"),
    )

    id: str = ORMField(primary_key=True)
    player: str
    mode: str
    started_at: datetime = ORMField(
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    duration_ms: int
    total_score: Decimal = ORMField(sa_column=Column(Numeric, nullable=False))
    created_at: datetime = ORMField(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = ORMField(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


_table = GameSession.__table__
Index("idx_sessions_player", _table.c.player)
Index("idx_sessions_mode", _table.c.mode)
Index("idx_sessions_started", _table.c.started_at.desc())


__all__ = ["GAME_MODES", "GameSession"]
