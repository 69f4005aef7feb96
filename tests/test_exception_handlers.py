"""Tests for global exception handlers.

Validates that all exception types are handled consistently with
proper HTTP status codes, error format, and no information leakage.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from siteapi.core.errors import (
    AccessDeniedAppError,
    AppError,
    AuthenticationAppError,
    ConfigurationAppError,
    DeliveryAppError,
    NotFoundAppError,
    UpstreamAppError,
    ValidationAppError,
)
from siteapi.core.exception_handlers import general_exception_handler, setup_exception_handlers


@pytest.fixture
def app_with_handlers() -> FastAPI:
    """Create FastAPI app with exception handlers registered."""
    app = FastAPI()
    setup_exception_handlers(app)
    return app


@pytest.fixture
def client(app_with_handlers: FastAPI) -> TestClient:
    """Create test client with handlers enabled."""
    return TestClient(app_with_handlers)


class TestAppErrorHandler:
    """Test handler for AppError and subclasses."""

    @pytest.mark.parametrize(
        ("error_cls", "expected_status"),
        [
            (ValidationAppError, 400),
            (AuthenticationAppError, 403),
            (AccessDeniedAppError, 403),
            (NotFoundAppError, 404),
            (DeliveryAppError, 500),
            (UpstreamAppError, 502),
            (ConfigurationAppError, 503),
        ],
    )
    def test_error_maps_to_status(
        self, client: TestClient, app_with_handlers: FastAPI, error_cls, expected_status
    ):
        @app_with_handlers.get("/test-error")
        async def test_endpoint():
            raise error_cls(code="test_code", message="Test message")

        response = client.get("/test-error")

        assert response.status_code == expected_status
        data = response.json()
        assert data["error"]["code"] == "test_code"
        assert data["error"]["message"] == "Test message"
        assert "request_id" in data["error"]
        assert "details" not in data["error"]

    def test_error_includes_details(self, client: TestClient, app_with_handlers: FastAPI):
        """Verify details are returned when provided."""
        @app_with_handlers.get("/test-details")
        async def test_endpoint():
            raise ValidationAppError(
                code="unknown_configuration",
                message="Unknown configuration names.",
                details={"unknown": ["nope.settings"]},
            )

        response = client.get("/test-details")

        assert response.status_code == 400
        assert response.json()["error"]["details"] == {"unknown": ["nope.settings"]}


class TestGeneralExceptionHandler:
    """Test fallback handler for unexpected exceptions."""

    def test_general_exception_handler_logic(self):
        request = AsyncMock()
        request.url.path = "/test"
        request.method = "GET"

        exc = RuntimeError("Unexpected error: cache connection failed")
        response = asyncio.run(general_exception_handler(request, exc))

        data = json.loads(bytes(response.body).decode())
        assert response.status_code == 500
        assert data["error"]["code"] == "internal_server_error"
        # Original error message should NOT be in response
        assert "cache connection" not in data["error"]["message"]
        assert "request_id" in data["error"]

    def test_general_exception_handler_never_leaks_stack_trace(self):
        request = AsyncMock()
        request.url.path = "/test"
        request.method = "GET"

        response = asyncio.run(general_exception_handler(request, ValueError("boom")))

        response_text = bytes(response.body).decode()
        assert "Traceback" not in response_text
        assert "ValueError" not in response_text


class TestErrorHandlerIntegration:
    """Integration tests for exception handler setup."""

    def test_setup_exception_handlers_registers_handlers(self, app_with_handlers: FastAPI):
        assert AppError in app_with_handlers.exception_handlers
        assert Exception in app_with_handlers.exception_handlers

    def test_multiple_handler_setups_does_not_fail(self):
        app = FastAPI()

        setup_exception_handlers(app)
        setup_exception_handlers(app)

        assert AppError in app.exception_handlers
