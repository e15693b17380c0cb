"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    API_KEY,
    API_PREFIX,
    DATABASE_URL,
    DATA_DIR,
    DB_RESET,
    HOST,
    LOG_LEVEL,
    PORT,
)
from .database import build_engine, get_session, init_schema
from .log import configure_logging
from .time import as_utc, from_epoch_ms, isoformat_z, utcnow

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "API_KEY",
    "API_PREFIX",
    "DATABASE_URL",
    "DATA_DIR",
    "DB_RESET",
    "HOST",
    "LOG_LEVEL",
    "PORT",
    "as_utc",
    "build_engine",
    "configure_logging",
    "from_epoch_ms",
    "get_session",
    "init_schema",
    "isoformat_z",
    "utcnow",
]
