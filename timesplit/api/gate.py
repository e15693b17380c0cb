"""Request interceptors: access log and shared-secret gate."""

from __future__ import annotations

import hmac
import logging
import time
from typing import Iterable, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from ..errors import Unauthorized

API_KEY_HEADER = "x-api-key"
EXEMPT_PATHS = ("/health", "/version")

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("timesplit.access")


class RequestLog(BaseHTTPMiddleware):
    """Log one line per request with status and elapsed time."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        access_logger.info(
            "%s %s %d %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response


class ApiKeyGate(BaseHTTPMiddleware):
    """Reject requests under ``prefix`` that lack the configured API key.

    With no key configured every request passes. Liveness and version
    endpoints are always reachable.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        api_key: Optional[str],
        prefix: str = "/api",
        exempt: Iterable[str] = EXEMPT_PATHS,
    ) -> None:
        super().__init__(app)
        self._api_key = (api_key or "").encode("utf-8")
        self._prefix = prefix.rstrip("/")
        self._exempt = {f"{self._prefix}{path}" for path in exempt}

    def _is_gated(self, request: Request) -> bool:
        path = request.url.path.rstrip("/") or "/"
        if request.method == "OPTIONS" or path in self._exempt:
            return False
        return not self._prefix or path == self._prefix or path.startswith(self._prefix + "/")

    def _is_authorized(self, request: Request) -> bool:
        presented = request.headers.get(API_KEY_HEADER)
        if presented is None:
            return False
        return hmac.compare_digest(presented.encode("utf-8"), self._api_key)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self._api_key and self._is_gated(request) and not self._is_authorized(request):
            logger.warning(
                "Rejected %s %s from %s: missing or invalid API key",
                request.method,
                request.url.path,
                request.client.host if request.client else "unknown",
            )
            error = Unauthorized()
            return JSONResponse(error.to_body(), status_code=error.status_code)
        return await call_next(request)


__all__ = ["API_KEY_HEADER", "ApiKeyGate", "EXEMPT_PATHS", "RequestLog"]
