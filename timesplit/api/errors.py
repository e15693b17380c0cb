"""Map domain errors to JSON responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..errors import PersistenceError, TimesplitError, ValidationError

logger = logging.getLogger(__name__)


async def timesplit_error_handler(request: Request, exc: TimesplitError) -> JSONResponse:
    if isinstance(exc, PersistenceError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(exc.to_body(), status_code=exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies get the same 400 shape as payload validation failures."""

    messages = [
        "{}: {}".format(".".join(str(part) for part in item.get("loc", ())), item.get("msg", "invalid"))
        for item in exc.errors()
    ]
    error = ValidationError(form_errors=messages)
    return JSONResponse(error.to_body(), status_code=error.status_code)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TimesplitError, timesplit_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


__all__ = ["register_exception_handlers"]
