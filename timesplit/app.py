"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from . import APP_NAME, __version__
from .api import register_routes
from .api.errors import register_exception_handlers
from .api.gate import ApiKeyGate, RequestLog
from .core import (
    ALLOWED_CORS_ORIGINS,
    API_KEY,
    API_PREFIX,
    DB_RESET,
    build_engine,
    configure_logging,
    init_schema,
)

logger = logging.getLogger(__name__)


def create_app(
    *,
    engine: Optional[Engine] = None,
    api_key: Optional[str] = API_KEY,
    api_prefix: str = API_PREFIX,
    cors_origins: Optional[List[str]] = None,
    db_reset: bool = DB_RESET,
) -> FastAPI:
    """Build the app; an ``engine`` passed in is left open on shutdown."""

    configure_logging()
    owns_engine = engine is None
    engine = engine if engine is not None else build_engine()
    prefix = "/" + api_prefix.strip("/") if api_prefix.strip("/") else ""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_schema(app.state.engine, reset=db_reset)
        logger.info(
            "%s %s serving under %r (API key %s)",
            APP_NAME,
            __version__,
            prefix or "/",
            "required" if api_key else "not required",
        )
        yield
        if owns_engine:
            app.state.engine.dispose()

    app = FastAPI(title="Timesplit API", version=__version__, lifespan=lifespan)
    app.state.engine = engine

    # Starlette runs the last-added middleware first: CORS, request log, gate.
    app.add_middleware(ApiKeyGate, api_key=api_key, prefix=prefix)
    app.add_middleware(RequestLog)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or ALLOWED_CORS_ORIGINS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    register_routes(app, prefix=prefix)
    return app


app = create_app()

