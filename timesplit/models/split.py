"""Database model for split events recorded within a session."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Numeric, String
from sqlmodel import Field as ORMField, SQLModel


class Split(SQLModel, table=True):
    """Checkpoint event keyed by its time offset inside a session."""

    __tablename__ = "splits"
    __table_args__ = (
        CheckConstraint("t_ms >= 0", name="ck_splits_t"),
        CheckConstraint("lap >= 0", name="ck_splits_lap"),
    )

    session_id: str = ORMField(
        sa_column=Column(
            String,
            ForeignKey("sessions.id", ondelete="CASCADE"),
            primary_key=True,
        )
    )
    t_ms: int = ORMField(primary_key=True, sa_column_kwargs={"autoincrement": False})
    lap: int
    score: Decimal = ORMField(sa_column=Column(Numeric, nullable=False))
    note: Optional[str] = None


Index("idx_splits_session", Split.__table__.c.session_id)


__all__ = ["Split"]
