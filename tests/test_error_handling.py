"""
Tests for error handling.
Tests custom exceptions, the request logging middleware and error response formatting.
"""

import pytest
import json
import uuid
from fastapi.testclient import TestClient
from fastapi import Depends, FastAPI, Request
from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.main import app
from app.middleware.request_logging import RequestLoggingMiddleware
from app.models.user import User, UserRole
from app.services.error_handler import ErrorHandlerService
from app.utils.dependencies import get_property_service, require_roles
from app.utils.exceptions import (
    APIException,
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    BadRequestError,
    ConflictError,
    InvalidCredentialsError,
    InsufficientPermissionsError,
    FileUploadError
)
from tests.conftest import auth_headers


def _body(response) -> dict:
    return json.loads(response.body)


def _request(method: str = "GET", path: str = "/api/somewhere") -> Request:
    return Request({"type": "http", "method": method, "path": path, "headers": [], "query_string": b""})


class TestErrorHandlerService:
    """Test error handler service functionality."""

    def test_format_error_response(self):
        assert ErrorHandlerService.format_error_response("Nope") == {"success": False, "message": "Nope"}

        response = ErrorHandlerService.format_error_response("Nope", {"email": ["Invalid email format"]})
        assert response["errors"] == {"email": ["Invalid email format"]}

    def test_handle_api_exception(self):
        response = ErrorHandlerService.handle_api_exception(ConflictError("Email already registered"))

        assert response.status_code == 409
        assert _body(response) == {"success": False, "message": "Email already registered"}

    def test_api_exception_keeps_field_errors_and_headers(self):
        errors = BadRequestError("Password does not meet requirements", {"password": ["Too short"]})
        assert _body(ErrorHandlerService.handle_api_exception(errors))["errors"] == {"password": ["Too short"]}

        response = ErrorHandlerService.handle_api_exception(InvalidCredentialsError())
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_collect_field_errors(self):
        errors = [
            {"loc": ("body", "firstName"), "msg": "Field required", "type": "missing"},
            {"loc": ("body", "price"), "msg": "Value error, must not be negative", "type": "value_error"},
            {"loc": ("query", "limit"), "msg": "Input should be a valid integer", "type": "int_parsing"},
            {"loc": ("body", "images", 0), "msg": "Input should be a valid string", "type": "string_type"},
            {"loc": ("body",), "msg": "Field required", "type": "missing"},
        ]

        assert ErrorHandlerService.collect_field_errors(errors) == {
            "firstName": ["Field required"],
            "price": ["must not be negative"],
            "limit": ["Input should be a valid integer"],
            "images.0": ["Input should be a valid string"],
            "body": ["Field required"],
        }

    def test_handle_pydantic_validation_error(self):
        class Sample(BaseModel):
            name: str
            count: int

        with pytest.raises(PydanticValidationError) as exc_info:
            Sample.model_validate({"count": "many"})

        response = ErrorHandlerService.handle_validation_error(exc_info.value.errors())

        assert response.status_code == 400
        body = _body(response)
        assert body["message"] == "Validation failed"
        assert set(body["errors"]) == {"name", "count"}

    def test_integrity_error_is_conflict(self):
        error = IntegrityError("INSERT INTO users", {}, Exception("UNIQUE constraint failed: users.email"))
        response = ErrorHandlerService.handle_database_error(error, _request("POST", "/api/auth/register"))

        assert response.status_code == 409
        assert _body(response) == {"success": False, "message": "Data integrity constraint violation"}

    def test_other_database_errors_are_hidden(self):
        error = OperationalError("SELECT 1", {}, Exception("connection refused to db.internal:5432"))
        response = ErrorHandlerService.handle_database_error(error)

        assert response.status_code == 500
        assert _body(response) == {"success": False, "message": "Internal server error"}

    def test_unexpected_error_is_generic(self):
        response = ErrorHandlerService.handle_unexpected_error(RuntimeError("secret stack detail"))

        assert response.status_code == 500
        assert "secret" not in response.body.decode()

    def test_http_404_names_the_route(self):
        response = ErrorHandlerService.handle_http_exception(
            StarletteHTTPException(status_code=404),
            _request("DELETE", "/api/unknown")
        )
        assert _body(response)["message"] == "Route DELETE /api/unknown not found"

    def test_http_exception_keeps_detail(self):
        response = ErrorHandlerService.handle_http_exception(
            StarletteHTTPException(status_code=405, detail="Method Not Allowed")
        )
        assert response.status_code == 405
        assert _body(response)["message"] == "Method Not Allowed"


class TestCustomExceptions:
    """Test custom exception classes."""

    @pytest.mark.parametrize("exception,status_code,message", [
        (BadRequestError("Invalid phone number"), 400, "Invalid phone number"),
        (NotFoundError("Property"), 404, "Property not found"),
        (UnauthorizedError(), 401, "Authentication required"),
        (ForbiddenError("You can only edit your own properties"), 403, "You can only edit your own properties"),
        (ConflictError("Property already in favorites"), 409, "Property already in favorites"),
        (InvalidCredentialsError(), 401, "Invalid email or password"),
        (InsufficientPermissionsError(), 403, "Insufficient permissions"),
        (FileUploadError("Not an image! Please upload only images."), 400, "Not an image! Please upload only images."),
    ])
    def test_status_and_message(self, exception, status_code, message):
        assert isinstance(exception, APIException)
        assert exception.status_code == status_code
        assert exception.detail == message

    def test_upload_errors_are_bad_requests(self):
        assert isinstance(FileUploadError("x"), BadRequestError)
        assert isinstance(InsufficientPermissionsError(), ForbiddenError)


def _small_app(max_request_size: int) -> FastAPI:
    small = FastAPI()
    small.add_middleware(RequestLoggingMiddleware, max_request_size=max_request_size, enable_request_logging=False)

    @small.exception_handler(APIException)
    async def api_exception_handler(request: Request, exc: APIException):
        return ErrorHandlerService.handle_api_exception(exc, request)

    @small.post("/echo")
    async def echo(request: Request):
        return {"size": len(await request.body()), "requestId": request.state.request_id}

    @small.get("/admin-only")
    async def admin_only(current_user=Depends(require_roles(UserRole.ADMIN))):
        return {"role": current_user.role.value}

    return small


class TestRequestLoggingMiddleware:

    def test_small_request_passes_and_is_tagged(self):
        client = TestClient(_small_app(max_request_size=1024))
        response = client.post("/echo", content=b"hello")

        assert response.status_code == 200
        assert response.json()["size"] == 5
        assert response.headers["x-request-id"] == response.json()["requestId"]
        assert "x-processing-time" in response.headers

    def test_oversized_request_rejected(self):
        client = TestClient(_small_app(max_request_size=10))
        response = client.post("/echo", content=b"x" * 64)

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Request size 64 bytes exceeds maximum allowed size 10 bytes"
        }


class TestRoleGuard:

    def test_role_outside_allowed_set_is_forbidden(self):
        agent = User(id=uuid.uuid4(), email="agent@test.com", role=UserRole.AGENT)

        client = TestClient(_small_app(max_request_size=1024))
        response = client.get("/admin-only", headers=auth_headers(agent))

        assert response.status_code == 403
        assert response.json() == {"success": False, "message": "Insufficient permissions"}

    def test_missing_token_is_unauthorized(self):
        client = TestClient(_small_app(max_request_size=1024))
        response = client.get("/admin-only")

        assert response.status_code == 401
        assert response.json()["message"] == "Missing or invalid authorization header"


class TestApplicationErrorResponses:
    """Unhandled failures inside the real application."""

    def test_unexpected_exception_becomes_500(self):
        def broken_service():
            raise RuntimeError("boom")

        app.dependency_overrides[get_property_service] = broken_service
        try:
            client = TestClient(app, raise_server_exceptions=False)
            response = client.get("/api/properties")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Internal server error"}

    def test_method_not_allowed(self):
        client = TestClient(app)
        response = client.put("/health")

        assert response.status_code == 405
        assert response.json()["success"] is False
