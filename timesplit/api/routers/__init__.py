"""Aggregate API routers."""

from fastapi import APIRouter

from .leaderboard import router as leaderboard_router
from .sessions import router as sessions_router
from .stats import router as stats_router
from .system import router as system_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    sessions_router,
    leaderboard_router,
    stats_router,
)

__all__ = ["ALL_ROUTERS"]
