"""
Exception handlers translating domain errors into HTTP responses.
"""
import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from app.exceptions import NotFoundError, ProxyError, StorageError, ValidationError
from app.utils.logger import get_request_id
from app.utils.prometheus_metrics import exceptions_total

logger = logging.getLogger("app.errors")


def setup_exception_handlers(app):
    """
    Register handlers for the exceptions raised by services.

    - NotFoundError → 404
    - ValidationError → 400
    - ProxyError → 502
    - StorageError → 500 with the request id
    """
    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": f"{exc.entity} not found"},
        )

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc)},
        )

    @app.exception_handler(ProxyError)
    async def proxy_handler(request: Request, exc: ProxyError):
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(StorageError)
    async def storage_handler(request: Request, exc: StorageError):
        exceptions_total.inc()
        rid = get_request_id()
        logger.error(
            "Storage failure",
            extra={
                "event": "storage",
                "error_message": str(exc),
                "http_path": request.url.path,
                "request_id": rid,
            },
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Storage error", "request_id": rid},
        )
