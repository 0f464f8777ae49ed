import time
from typing import Optional
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from starlette.types import ASGIApp

from contractor_ads.core.exceptions import AuthError
from contractor_ads.core.logger import get_logger

logger = get_logger(__name__)

HEALTH_PATHS = {"/", "/health", "/health/", "/health/ready", "/health/live"}


class InternalKeyMiddleware(BaseHTTPMiddleware):
    """
    Shared-secret gate for service-to-service calls.

    Every route except the health probes and API docs requires the
    ``x-internal-key`` header (or its legacy spelling ``internal_webhook_key``)
    to equal the configured key exactly.
    """

    HEADER_NAMES = ("x-internal-key", "internal_webhook_key")

    UNPROTECTED_PATHS = HEALTH_PATHS | {
        "/docs",
        "/redoc",
        "/openapi.json",
    }

    UNPROTECTED_PREFIXES = {
        "/docs",
        "/redoc",
    }

    def __init__(self, app: ASGIApp, internal_key: str):
        super().__init__(app)
        self.internal_key = internal_key

    async def dispatch(self, request: Request, call_next):
        # Skip authentication for OPTIONS requests (CORS preflight)
        if request.method == "OPTIONS":
            return await call_next(request)

        if self._is_unprotected_path(request.url.path):
            return await call_next(request)

        if not self.authorize(request):
            logger.warning(f"Rejected unauthorized {request.method} {request.url.path}")
            return self._unauthorized_response()

        return await call_next(request)

    def authorize(self, request: Request) -> bool:
        return self._extract_key(request) == self.internal_key

    def _is_unprotected_path(self, path: str) -> bool:
        if path in self.UNPROTECTED_PATHS:
            return True
        return any(path.startswith(prefix) for prefix in self.UNPROTECTED_PREFIXES)

    def _extract_key(self, request: Request) -> Optional[str]:
        for header in self.HEADER_NAMES:
            value = request.headers.get(header)
            if value is not None:
                return value
        return None

    def _unauthorized_response(self) -> JSONResponse:
        error = AuthError()
        return JSONResponse(status_code=error.status_code, content=error.to_content())


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request and propagate an ``X-Request-ID``."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id
        start_time = time.time()

        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        # Don't log health probes to avoid noise
        if request.url.path not in HEALTH_PATHS:
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={
                    "component": "http",
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": int((time.time() - start_time) * 1000),
                },
            )
        return response
