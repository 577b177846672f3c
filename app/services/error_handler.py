"""
Error handling service for consistent error response formatting and logging.
Every failure is rendered as {success: false, message, errors?}.
"""

from typing import Dict, Any, Optional, List, Sequence
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from app.utils.exceptions import APIException
import logging

logger = logging.getLogger(__name__)

VALIDATION_FAILED_MESSAGE = "Validation failed"
INTERNAL_ERROR_MESSAGE = "Internal server error"

# Leading loc entries naming where a value came from, not the field itself
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie", "form"}


class ErrorHandlerService:
    """
    Service for handling and formatting errors consistently across the application.
    Typed errors keep their message; anything unexpected becomes a generic 500.
    """

    @staticmethod
    def format_error_response(
        message: str,
        errors: Optional[Dict[str, List[str]]] = None
    ) -> Dict[str, Any]:
        """
        Format error response in the envelope structure.

        Args:
            message: Human-readable error message
            errors: Optional per-field messages

        Returns:
            Formatted error response dictionary
        """
        response: Dict[str, Any] = {"success": False, "message": message}
        if errors:
            response["errors"] = errors
        return response

    @staticmethod
    def _request_context(request: Optional[Request]) -> str:
        if request is None:
            return "-"
        request_id = getattr(request.state, "request_id", None) or "-"
        return f"[{request_id}] {request.method} {request.url.path}"

    @staticmethod
    def handle_api_exception(
        exception: APIException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle custom API exceptions with structured response.
        """
        logger.warning(
            f"API Exception {ErrorHandlerService._request_context(request)}: "
            f"{exception.status_code} {exception.error_code} - {exception.detail}"
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(exception.detail, exception.errors),
            headers=exception.headers
        )

    @staticmethod
    def collect_field_errors(errors: Sequence[Dict[str, Any]]) -> Dict[str, List[str]]:
        """
        Group pydantic error entries by field name.

        Args:
            errors: Output of ValidationError.errors() or RequestValidationError.errors()

        Returns:
            Mapping of field name to its messages
        """
        field_errors: Dict[str, List[str]] = {}
        for error in errors:
            loc = [str(part) for part in error.get("loc", ())]
            while loc and loc[0] in _LOCATION_PREFIXES:
                loc = loc[1:]
            field = ".".join(loc) or "body"

            message = error.get("msg", "Invalid value")
            if message.startswith("Value error, "):
                message = message[len("Value error, "):]

            field_errors.setdefault(field, []).append(message)
        return field_errors

    @staticmethod
    def handle_validation_error(
        errors: Sequence[Dict[str, Any]],
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle request/schema validation errors with per-field messages.
        """
        field_errors = ErrorHandlerService.collect_field_errors(errors)

        logger.warning(
            f"Validation Error {ErrorHandlerService._request_context(request)}: "
            f"{len(field_errors)} invalid fields ({', '.join(field_errors)})"
        )

        return JSONResponse(
            status_code=400,
            content=ErrorHandlerService.format_error_response(VALIDATION_FAILED_MESSAGE, field_errors)
        )

    @staticmethod
    def handle_database_error(
        exception: SQLAlchemyError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle database errors; constraint violations become 409, the rest 500.
        """
        if isinstance(exception, IntegrityError):
            logger.warning(
                f"Integrity Error {ErrorHandlerService._request_context(request)}: {exception.orig}"
            )
            return JSONResponse(
                status_code=409,
                content=ErrorHandlerService.format_error_response("Data integrity constraint violation")
            )

        logger.error(
            f"Database Error {ErrorHandlerService._request_context(request)}: "
            f"{type(exception).__name__} - {exception}",
            exc_info=exception
        )
        return JSONResponse(
            status_code=500,
            content=ErrorHandlerService.format_error_response(INTERNAL_ERROR_MESSAGE)
        )

    @staticmethod
    def handle_http_exception(
        exception: StarletteHTTPException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle framework HTTP exceptions (unknown routes, wrong methods, ...).
        """
        if exception.status_code == 404 and request is not None and exception.detail == "Not Found":
            message = f"Route {request.method} {request.url.path} not found"
        else:
            message = str(exception.detail)

        logger.warning(
            f"HTTP Exception {ErrorHandlerService._request_context(request)}: "
            f"{exception.status_code} - {message}"
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(message),
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle anything not otherwise classified; details stay in the logs.
        """
        logger.error(
            f"Unexpected Error {ErrorHandlerService._request_context(request)}: "
            f"{type(exception).__name__} - {exception}",
            exc_info=exception
        )

        return JSONResponse(
            status_code=500,
            content=ErrorHandlerService.format_error_response(INTERNAL_ERROR_MESSAGE)
        )

