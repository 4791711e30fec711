# site_api/middleware/logging.py
from __future__ import annotations

import time
import uuid
from typing import Mapping

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from site_api.core.config import settings
from site_api.core.logging import get_structlog_logger, set_request_id

logger = get_structlog_logger(__name__)

SENSITIVE_HEADERS = (
    "authorization",
    "cookie",
    "x-api-key",
    "secret",
    "token",
    "password",
)


def resolve_request_id(headers: Mapping[str, str]) -> str:
    """Reuse an upstream request/correlation/trace id, or mint a new one."""
    request_id = headers.get("x-request-id") or headers.get("x-correlation-id")
    if request_id:
        return request_id

    # W3C Trace Context: 00-<32 hex trace id>-<span id>-<flags>
    traceparent = headers.get("traceparent")
    if traceparent and traceparent.startswith("00-") and len(traceparent) >= 35:
        return traceparent[3:35]

    return str(uuid.uuid4())


def filter_headers(headers: Mapping[str, str]) -> dict:
    """Filter sensitive headers from logs."""
    filtered = {}
    for key, value in headers.items():
        if any(sensitive in key.lower() for sensitive in SENSITIVE_HEADERS):
            filtered[key] = "[REDACTED]"
        else:
            filtered[key] = value
    return filtered


class LoggingMiddleware(BaseHTTPMiddleware):
    """Binds a request id to the log context and logs each request/response."""

    def __init__(self, app, quiet_paths=None):
        super().__init__(app)
        self.quiet_paths = set(quiet_paths or (f"{settings.api_prefix}/health/live", "/metrics"))

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        request_id = resolve_request_id(request.headers)
        set_request_id(request_id)

        quiet = request.url.path in self.quiet_paths
        if not quiet:
            logger.info(
                "request.received",
                method=request.method,
                path=request.url.path,
                client_ip=request.client.host if request.client else "unknown",
                headers=filter_headers(request.headers),
            )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request.exception",
                method=request.method,
                path=request.url.path,
                response_time_ms=(time.perf_counter() - start_time) * 1000,
                exception_type=type(e).__name__,
            )
            raise

        response_time = time.perf_counter() - start_time
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{response_time:.3f}"

        if not quiet:
            log_data = {
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "response_time_ms": response_time * 1000,
            }
            if response.status_code >= 500:
                logger.warning("response.sent", error_type="server_error", **log_data)
            elif response.status_code >= 400:
                logger.warning("response.sent", error_type="client_error", **log_data)
            else:
                logger.info("response.sent", **log_data)

        return response
