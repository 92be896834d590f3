"""Request timeout configuration and middleware."""

import asyncio
import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from agency_ai.infra.config import config

logger = logging.getLogger(__name__)

# A generation request is one tenant snapshot plus one model call
LLM_CALL_TIMEOUT = config.LLM_CALL_TIMEOUT
DATABASE_QUERY_TIMEOUT = 10
REQUEST_TIMEOUT = int(LLM_CALL_TIMEOUT) + 3 * DATABASE_QUERY_TIMEOUT

UNBOUNDED_PATHS = ("/health", "/health/live", "/metrics")


class TimeoutMiddleware(BaseHTTPMiddleware):
    """Answer 504 when a request runs longer than ``timeout`` seconds."""

    def __init__(self, app, timeout: int = REQUEST_TIMEOUT):
        super().__init__(app)
        self.timeout = timeout

    async def dispatch(self, request: Request, call_next):
        if request.url.path in UNBOUNDED_PATHS:
            return await call_next(request)

        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Request exceeded timeout",
                extra={
                    "path": request.url.path,
                    "timeout_seconds": self.timeout,
                    "request_id": getattr(request.state, "request_id", None),
                },
            )
            return JSONResponse(
                status_code=504,
                content={"detail": f"Request timeout after {self.timeout} seconds"},
            )
