"""
HTTP request/response logging middleware.

Each request gets a short id stored in request_id_var, so every log line
written while handling it can be correlated. The id is echoed back in the
X-Request-ID response header.
"""
import time
import uuid
import logging
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from .logging_config import request_id_var

logger = logging.getLogger("studyshelf.middleware")


def _format_bytes(size: int) -> str:
    """Format byte count to human-readable string."""
    if size < 1024:
        return f"{size}B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f}KB"
    return f"{size / (1024 * 1024):.1f}MB"


def _header_int(value) -> int:
    try:
        return int(value or 0)
    except (ValueError, TypeError):
        return 0


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request and one per response, with timing."""

    # Paths to skip logging (health checks, docs)
    SKIP_PATHS = frozenset({"/health", "/openapi.json", "/docs", "/redoc", "/favicon.ico"})

    def __init__(self, app: ASGIApp, skip_prefixes: Iterable[str] = ("/uploads/",)):
        super().__init__(app)
        self.skip_prefixes = tuple(skip_prefixes)

    def _should_skip(self, path: str) -> bool:
        return path in self.SKIP_PATHS or path.startswith(self.skip_prefixes)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # Skip noisy endpoints and static uploads
        if self._should_skip(request.url.path):
            return await call_next(request)

        # Generate and set request ID
        req_id = uuid.uuid4().hex[:12]
        token = request_id_var.set(req_id)

        method = request.method
        path = request.url.path
        full_path = f"{path}?{request.url.query}" if request.url.query else path
        client_ip = request.client.host if request.client else "unknown"

        # Request size
        req_size = _header_int(request.headers.get("content-length"))

        logger.info(
            f"→ {method} {full_path} {_format_bytes(req_size)}",
            extra={"method": method, "path": path, "client_ip": client_ip, "request_size": req_size}
        )
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = round((time.perf_counter() - start_time) * 1000)
            logger.error(
                f"✗ {method} {full_path} {duration_ms}ms — {type(exc).__name__}: {exc}",
                extra={"method": method, "path": path, "duration_ms": duration_ms, "status_code": 500},
                exc_info=True,
            )
            request_id_var.reset(token)
            raise

        duration_ms = round((time.perf_counter() - start_time) * 1000)
        status = response.status_code

        # Response size
        resp_size = _header_int(response.headers.get("content-length"))

        # Choose log level based on status code
        if status >= 500:
            log_fn = logger.error
        elif status >= 400:
            log_fn = logger.warning
        else:
            log_fn = logger.info

        log_fn(
            f"← {status} {method} {full_path} {duration_ms}ms {_format_bytes(resp_size)}",
            extra={
                "method": method, "path": path,
                "status_code": status, "duration_ms": duration_ms,
                "response_size": resp_size, "client_ip": client_ip,
            }
        )

        response.headers["X-Request-ID"] = req_id
        request_id_var.reset(token)
        return response
