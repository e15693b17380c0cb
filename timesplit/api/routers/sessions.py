"""Session upsert, listing and detail endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlmodel import Session

from ...core import get_session
from ...services.merge import merge_session
from ...services.pagination import parse_time_bound
from ...services.queries import get_session_detail, list_sessions
from ...services.validation import ParseFailure, parse_session_payload

router = APIRouter(tags=["sessions"])


@router.post("/sessions")
def upsert_session(
    body: Any = Body(None), session: Session = Depends(get_session)
) -> Dict[str, Any]:
    """Create or update a session and merge in any new splits."""

    result = parse_session_payload(body)
    if isinstance(result, ParseFailure):
        raise result.error
    return merge_session(session, result.payload).to_body()


@router.get("/sessions")
def get_sessions(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    player: Optional[str] = None,
    mode: Optional[str] = None,
    started_from: Optional[str] = Query(None, alias="from"),
    started_to: Optional[str] = Query(None, alias="to"),
    session: Session = Depends(get_session),
) -> Dict[str, Any]:
    """List sessions with optional filters, newest first."""

    return list_sessions(
        session,
        page=page,
        limit=limit,
        player=player,
        mode=mode,
        started_from=parse_time_bound(started_from, "from"),
        started_to=parse_time_bound(started_to, "to"),
    )


@router.get("/sessions/{session_id}")
def get_session_by_id(session_id: str, session: Session = Depends(get_session)) -> Dict[str, Any]:
    """Get a session header with its ordered splits."""

    return get_session_detail(session, session_id)


__all__ = ["router"]
