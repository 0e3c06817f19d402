"""
Request logging middleware.
Tags every request with a short id, echoes it in the X-Request-ID header, and
logs the request and its outcome.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time
import uuid

from realtyflow.services.error_handler import ErrorHandlerService

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Assigns ``request.state.request_id`` before routing so error responses and
    log lines for the same request share one id.
    """

    def __init__(self, app: ASGIApp, enable_request_logging: bool = True, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.enable_request_logging = enable_request_logging
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()

        if self.enable_request_logging:
            self._log_request(request, request_id)

        try:
            response = await call_next(request)
        except Exception as exc:
            return ErrorHandlerService.handle_unexpected_error(exc, request)

        processing_time = time.time() - start_time
        if self.enable_request_logging or processing_time > self.slow_request_threshold:
            self._log_response(request, response, request_id, processing_time)

        response.headers["X-Request-ID"] = request_id
        return response

    def _log_request(self, request: Request, request_id: str) -> None:
        client_ip = request.client.host if request.client else "unknown"
        logger.info(
            f"Request [{request_id}]: {request.method} {request.url.path}",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "client_ip": client_ip,
            }
        )

    def _log_response(self, request: Request, response: Response, request_id: str, processing_time: float) -> None:
        if response.status_code >= 500:
            log = logger.error
        elif response.status_code >= 400 or processing_time > self.slow_request_threshold:
            log = logger.warning
        else:
            log = logger.info

        log(
            f"Response [{request_id}]: {response.status_code} ({processing_time:.3f}s)",
            extra={
                "request_id": request_id,
                "status_code": response.status_code,
                "path": request.url.path,
                "processing_time": processing_time,
            }
        )
