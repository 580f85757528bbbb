"""
Structured request logging middleware.
"""
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.utils.client_ip import get_client_ip
from app.utils.logger import log_error, log_warning, set_request_id

# Slow response threshold (ms)
SLOW_REQUEST_THRESHOLD_MS = 3000

REQUEST_ID_HEADER = "X-Request-ID"

# Paths that are never logged and get no Request ID
EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc", "/metrics", "/favicon.ico"}


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Assigns a Request ID to every request and logs the ones worth looking at.

    - 5xx responses → ERROR
    - 4xx responses → WARNING
    - responses slower than SLOW_REQUEST_THRESHOLD_MS → WARNING
    - everything else is not logged
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path in EXCLUDED_PATHS or path.startswith("/uploads/"):
            return await call_next(request)

        rid = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        client_ip = get_client_ip(request)
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            log_error(
                f"Request exception: {e}",
                error_type=type(e).__name__,
                http_method=request.method,
                http_path=path,
                duration_ms=duration_ms,
                client_ip=client_ip,
                request_id=rid,
                event="request",
                exc_info=True,
            )
            # The global exception handler answers the client
            raise

        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        response.headers[REQUEST_ID_HEADER] = rid
        status_code = response.status_code

        if status_code >= 500:
            log_error(
                "Request error - Server error occurred",
                error_code=f"HTTP_{status_code}",
                http_method=request.method,
                http_path=path,
                http_status=status_code,
                duration_ms=duration_ms,
                client_ip=client_ip,
                request_id=rid,
                event="request",
            )
        elif status_code >= 400:
            log_warning(
                "Request failed - Client error",
                http_method=request.method,
                http_path=path,
                http_status=status_code,
                duration_ms=duration_ms,
                client_ip=client_ip,
                request_id=rid,
                event="request",
            )
        elif duration_ms >= SLOW_REQUEST_THRESHOLD_MS:
            log_warning(
                "Slow request detected",
                http_method=request.method,
                http_path=path,
                http_status=status_code,
                duration_ms=duration_ms,
                client_ip=client_ip,
                request_id=rid,
                event="request",
                performance_issue=True,
            )

        return response
