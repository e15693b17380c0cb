"""Atomic session upsert with idempotent split reconciliation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..core.time import from_epoch_ms, utcnow
from ..errors import PersistenceError
from ..models import GameSession, Split
from ..schemas import SessionPayload

logger = logging.getLogger(__name__)

# Five bound parameters per row keeps every batch under SQLite's 999 limit.
SPLIT_BATCH_SIZE = 150

_DIALECT_INSERTS: Dict[str, Callable[..., Any]] = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


@dataclass(frozen=True)
class MergeResult:
    upserted: str
    splits_inserted: int

    def to_body(self) -> Dict[str, Any]:
        return {"ok": True, "upserted": self.upserted, "splits_inserted": self.splits_inserted}


def _header_fields(payload: SessionPayload) -> Dict[str, Any]:
    return {
        "player": payload.player,
        "mode": payload.mode.value,
        "started_at": from_epoch_ms(payload.started_at),
        "duration_ms": payload.duration_ms,
        "total_score": payload.total_score,
    }


def _upsert_header(session: Session, payload: SessionPayload, now: datetime) -> None:
    """Insert the header or overwrite its mutable fields, keeping ``created_at``.

    On engines with ``ON CONFLICT`` this is a single statement, so a
    competing first write of the same id turns into an update instead of a
    key violation; the last commit wins.
    """

    fields = _header_fields(payload)
    insert = _DIALECT_INSERTS.get(session.get_bind().dialect.name)
    if insert is None:
        _upsert_header_orm(session, payload.id, fields, now)
        return

    table = GameSession.__table__
    statement = (
        insert(table)
        .values(id=payload.id, created_at=now, updated_at=now, **fields)
        .on_conflict_do_update(
            index_elements=[table.c.id],
            set_={**fields, "updated_at": now},
        )
    )
    session.exec(statement)


def _upsert_header_orm(
    session: Session, session_id: str, fields: Dict[str, Any], now: datetime
) -> None:
    record = session.get(GameSession, session_id, with_for_update=True)
    if record is None:
        record = GameSession(id=session_id, created_at=now, updated_at=now, **fields)
    else:
        for name, value in fields.items():
            setattr(record, name, value)
        record.updated_at = now
    session.add(record)
    session.flush()


def _pending_splits(session: Session, payload: SessionPayload) -> List[Dict[str, Any]]:
    """Return rows for offsets not yet stored; the first occurrence of an offset wins."""

    seen = set(session.exec(select(Split.t_ms).where(Split.session_id == payload.id)).all())
    rows: List[Dict[str, Any]] = []
    for split in payload.splits:
        if split.t in seen:
            continue
        seen.add(split.t)
        rows.append(
            {
                "session_id": payload.id,
                "t_ms": split.t,
                "lap": split.lap,
                "score": split.score,
                "note": split.note,
            }
        )
    return rows


def _insert_splits(session: Session, rows: List[Dict[str, Any]]) -> int:
    """Insert ``rows`` and return how many actually landed.

    Where the engine offers it, each batch skips key conflicts so that a
    concurrent merge of the same session cannot fail this one.
    """

    if not rows:
        return 0

    table = Split.__table__
    insert = _DIALECT_INSERTS.get(session.get_bind().dialect.name)
    inserted = 0
    for start in range(0, len(rows), SPLIT_BATCH_SIZE):
        batch = rows[start : start + SPLIT_BATCH_SIZE]
        if insert is None:
            session.exec(table.insert().values(batch))
            inserted += len(batch)
            continue
        statement = (
            insert(table)
            .values(batch)
            .on_conflict_do_nothing(index_elements=[table.c.session_id, table.c.t_ms])
            .returning(table.c.t_ms)
        )
        inserted += len(session.exec(statement).all())
    return inserted


def merge_session(
    session: Session, payload: SessionPayload, *, now: Optional[datetime] = None
) -> MergeResult:
    """Upsert the header and add new splits in one transaction.

    Splits already stored under the same offset are left untouched and are
    not counted. Any storage failure, including a value the engine cannot
    represent, rolls back the header change as well.
    """

    now = now or utcnow()
    try:
        _upsert_header(session, payload, now)
        inserted = _insert_splits(session, _pending_splits(session, payload))
        session.commit()
    except (SQLAlchemyError, ValueError, OverflowError, OSError) as exc:
        session.rollback()
        logger.exception("Merge of session %s rolled back", payload.id)
        raise PersistenceError(str(getattr(exc, "orig", None) or exc)) from exc

    logger.info(
        "Merged session %s: %d splits submitted, %d inserted",
        payload.id,
        len(payload.splits),
        inserted,
    )
    return MergeResult(upserted=payload.id, splits_inserted=inserted)


__all__ = ["MergeResult", "SPLIT_BATCH_SIZE", "merge_session"]
