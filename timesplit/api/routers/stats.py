"""Aggregate statistics endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from ...core import get_session
from ...services import queries

router = APIRouter(tags=["stats"])


@router.get("/players")
def get_players(
    limit: Optional[str] = None,
    search: Optional[str] = None,
    session: Session = Depends(get_session),
) -> List[Dict[str, Any]]:
    """Players with session counts and best scores."""

    return queries.players(session, search=search, limit=limit)


@router.get("/modes")
def get_modes(session: Session = Depends(get_session)) -> List[Dict[str, Any]]:
    return queries.modes(session)


@router.get("/stats")
def get_stats(session: Session = Depends(get_session)) -> Dict[str, Any]:
    return queries.stats(session)


__all__ = ["router"]
