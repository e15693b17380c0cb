"""Leaderboard endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from ...core import get_session
from ...services.queries import leaderboard

router = APIRouter(tags=["leaderboard"])


@router.get("/leaderboard")
def get_leaderboard(
    mode: Optional[str] = None,
    limit: Optional[str] = None,
    session: Session = Depends(get_session),
) -> List[Dict[str, Any]]:
    """Top players by best total score, optionally within one mode."""

    return leaderboard(session, mode=mode, limit=limit)


__all__ = ["router"]
