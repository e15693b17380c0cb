"""System-level API endpoints."""

from __future__ import annotations

from typing import Dict

from fastapi import APIRouter

from ... import APP_NAME, __version__

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple liveness check."""

    return {"ok": True}


@router.get("/version")
def version() -> Dict[str, str]:
    """Report the service name and version."""

    return {"name": APP_NAME, "version": __version__}


__all__ = ["router"]
