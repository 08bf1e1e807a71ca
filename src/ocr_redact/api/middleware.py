"""Request middleware for OCR-REDACT.

Provides request logging and metrics middleware.
"""

import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ocr_redact.logging.setup import get_logger, set_request_id
from ocr_redact.metrics.collectors import (
    ACTIVE_REQUESTS,
    REQUEST_COUNT,
    REQUEST_LATENCY,
)

logger = get_logger(__name__)

_KNOWN_ENDPOINTS = frozenset({"/v1/locate", "/health", "/metrics"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Assigns a request id, logs request start/completion and records
    latency and count metrics.

    Request bodies are never logged: they carry the sensitive phrases.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        set_request_id(request_id)
        request.state.request_id = request_id

        endpoint = self._get_endpoint(request)
        method = request.method

        ACTIVE_REQUESTS.inc()
        start_time = time.perf_counter()
        logger.info(
            "Request started",
            extra={
                "event": "request_started",
                "method": method,
                "path": str(request.url.path),
                "client_ip": self._get_client_ip(request),
            },
        )

        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            logger.exception(
                "Request failed with exception",
                extra={"event": "request_error", "error": str(e)},
            )
            raise
        finally:
            duration = time.perf_counter() - start_time
            ACTIVE_REQUESTS.dec()

            status_str = str(status_code)
            REQUEST_LATENCY.labels(method=method, endpoint=endpoint, status=status_str).observe(duration)
            REQUEST_COUNT.labels(method=method, endpoint=endpoint, status=status_str).inc()

            logger.info(
                "Request completed",
                extra={
                    "event": "request_completed",
                    "method": method,
                    "path": str(request.url.path),
                    "status_code": status_code,
                    "duration_ms": round(duration * 1000, 2),
                },
            )

        response.headers["X-Request-ID"] = request_id
        return response

    def _get_endpoint(self, request: Request) -> str:
        """Collapse paths into a bounded set of metric labels."""
        path = request.url.path
        if path in _KNOWN_ENDPOINTS:
            return path
        return "other"

    def _get_client_ip(self, request: Request) -> str:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"
