"""Application settings and environment helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List

from dotenv import load_dotenv

load_dotenv(override=False)

_PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


def _normalize_database_url(url: str) -> str:
    """Point bare Postgres URLs (``postgres://`` included) at the psycopg driver."""

    for scheme in ("postgres://", "postgresql://"):
        if url.startswith(scheme):
            return "postgresql+psycopg://" + url[len(scheme):]
    return url


# Storage --------------------------------------------------------------------
DATA_DIR = Path(os.getenv("DATA_DIR", str(_PROJECT_ROOT / "data")))
DATABASE_URL = _normalize_database_url(
    os.getenv("DATABASE_URL") or f"sqlite:///{DATA_DIR / 'app.db'}"
)
DB_RESET = _env_bool("DB_RESET", False)


# Access ---------------------------------------------------------------------
# An empty key disables the gate entirely.
API_KEY = os.getenv("API_KEY", "").strip()
API_PREFIX = "/" + os.getenv("API_PREFIX", "/api").strip().strip("/")

ALLOWED_CORS_ORIGINS = _unique(_split_csv(os.getenv("CORS_ORIGIN", "*"))) or ["*"]


# Runtime behaviour ----------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()
HOST = os.getenv("HOST", "127.0.0.1")
PORT = _env_int("PORT", 3000)


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
]
