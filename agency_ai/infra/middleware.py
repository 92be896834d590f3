"""Request middleware: request IDs, access logging with per-route metrics, CORS."""

import logging
import os
import uuid
import time
from typing import Callable, Optional
from fastapi import Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from agency_ai.infra.config import config
from agency_ai.infra.metrics import request_count, request_duration

logger = logging.getLogger("agency_ai.request")

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time-Ms"

# Probes are counted in metrics but not logged
SILENT_PATHS = ("/health", "/health/live", "/metrics")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reuse the caller's X-Request-ID or mint one, and echo it on the response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


def _tenant_id(request: Request) -> Optional[str]:
    return request.scope.get("path_params", {}).get("tenant_id")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each AI request with its tenant and record request metrics by route template."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = getattr(request.state, "request_id", "unknown")
        silent = request.url.path in SILENT_PATHS
        start_time = time.monotonic()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "tenant_id": _tenant_id(request),
                    "error": str(e),
                    "duration_ms": int((time.monotonic() - start_time) * 1000),
                },
                exc_info=True,
            )
            raise

        duration = time.monotonic() - start_time
        duration_ms = int(duration * 1000)

        # Route template keeps tenant ids out of metric labels
        endpoint = _route_template(request)
        request_count.labels(method=request.method, endpoint=endpoint, status=str(response.status_code)).inc()
        request_duration.labels(method=request.method, endpoint=endpoint).observe(duration)

        if not silent:
            log = logger.warning if response.status_code >= 500 else logger.info
            log(
                "Request completed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "endpoint": endpoint,
                    "tenant_id": _tenant_id(request),
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                    "client": request.client.host if request.client else None,
                },
            )

        response.headers[RESPONSE_TIME_HEADER] = str(duration_ms)
        return response


def _allowed_origins() -> list:
    origins_env = os.getenv("CORS_ORIGINS", "")
    if not origins_env:
        return ["*"] if config.APP_ENV == "development" else []
    origins = [origin.strip() for origin in origins_env.split(",") if origin.strip()]
    if config.APP_ENV != "development":
        origins = [origin for origin in origins if origin != "*"]
    return origins


def setup_cors(app):
    """Allow the agency web app to call the AI endpoints from the browser."""
    production = config.APP_ENV == "production"
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"] if production else ["*"],
        allow_headers=["Content-Type", "Authorization", REQUEST_ID_HEADER] if production else ["*"],
        expose_headers=[REQUEST_ID_HEADER, RESPONSE_TIME_HEADER],
    )
