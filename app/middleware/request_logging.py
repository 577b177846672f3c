"""
Request logging middleware.
Tags each request with a short id, rejects oversized bodies and logs request/response lines.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time
import uuid

from app.services.error_handler import ErrorHandlerService
from app.utils.exceptions import BadRequestError

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware adding X-Request-ID and X-Processing-Time to every response.
    """

    def __init__(
        self,
        app: ASGIApp,
        max_request_size: int = 10 * 1024 * 1024,
        enable_request_logging: bool = True
    ):
        super().__init__(app)
        self.max_request_size = max_request_size
        self.enable_request_logging = enable_request_logging

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Generate request ID for tracking
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()

        try:
            self._validate_request_size(request)
        except BadRequestError as exc:
            return ErrorHandlerService.handle_api_exception(exc, request)

        if self.enable_request_logging:
            self._log_request(request, request_id)

        response = await call_next(request)

        processing_time = time.time() - start_time
        if self.enable_request_logging:
            logger.info(f"Response [{request_id}]: {response.status_code} - {processing_time:.3f}s")

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Processing-Time"] = f"{processing_time:.3f}"
        return response

    def _validate_request_size(self, request: Request) -> None:
        """
        Validate request content length.

        Raises:
            BadRequestError: If the declared size exceeds the limit
        """
        content_length = request.headers.get("content-length")
        if content_length:
            try:
                size = int(content_length)
            except ValueError:
                raise BadRequestError("Invalid content-length header")
            if size > self.max_request_size:
                raise BadRequestError(
                    f"Request size {size} bytes exceeds maximum allowed size {self.max_request_size} bytes"
                )

    def _get_client_ip(self, request: Request) -> str:
        # Check for forwarded headers (load balancer/proxy)
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    def _log_request(self, request: Request, request_id: str) -> None:
        logger.info(
            f"Request [{request_id}]: {request.method} {request.url.path} from {self._get_client_ip(request)}"
        )
