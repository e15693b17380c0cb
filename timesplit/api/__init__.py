"""API assembly helpers."""

from __future__ import annotations

from fastapi import FastAPI

from .routers import ALL_ROUTERS


def register_routes(app: FastAPI, prefix: str = "") -> None:
    """Attach all application routers to the given app under ``prefix``."""

    for router in ALL_ROUTERS:
        app.include_router(router, prefix=prefix)


__all__ = ["register_routes"]
