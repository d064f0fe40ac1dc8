"""Tests for shared error classes and exception handlers."""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.shared.errors import (
    AppError,
    CompletionError,
    NotFoundError,
    ValidationError,
    register_exception_handlers,
)


class TestAppError:
    """Tests for the base AppError exception."""

    def test_default_status_code(self):
        err = AppError(detail="something broke")
        assert err.status_code == 500
        assert err.detail == "something broke"

    def test_custom_status_code(self):
        err = AppError(detail="bad request", status_code=400)
        assert err.status_code == 400

    def test_str_is_detail(self):
        err = AppError(detail="human readable")
        assert str(err) == "human readable"


class TestValidationError:
    """Tests for ValidationError (422)."""

    def test_default_detail(self):
        err = ValidationError()
        assert err.status_code == 422
        assert err.detail == "Validation error"

    def test_inherits_from_app_error(self):
        assert issubclass(ValidationError, AppError)


class TestNotFoundError:
    """Tests for NotFoundError (404)."""

    def test_default_detail(self):
        err = NotFoundError()
        assert err.status_code == 404
        assert err.detail == "Resource not found"

    def test_custom_detail(self):
        err = NotFoundError(detail="Service domain not found: Treasury")
        assert err.detail == "Service domain not found: Treasury"


class TestCompletionError:
    """Tests for CompletionError (502)."""

    def test_default_detail(self):
        err = CompletionError()
        assert err.status_code == 502
        assert err.detail == "Completion service error"

    def test_custom_detail(self):
        err = CompletionError(detail="Completion returned no content")
        assert str(err) == "Completion returned no content"

    def test_inherits_from_app_error(self):
        assert issubclass(CompletionError, AppError)


class TestRegisterExceptionHandlers:
    """Tests for register_exception_handlers on a FastAPI app."""

    def test_app_error_returns_json(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/test-500")
        async def _raise_app():
            raise AppError(detail="server error")

        client = TestClient(app, raise_server_exceptions=False)
        resp = client.get("/test-500")
        assert resp.status_code == 500
        assert resp.json() == {"detail": "server error"}

    def test_not_found_error_returns_404(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/test-404")
        async def _raise_nf():
            raise NotFoundError(detail="gone")

        client = TestClient(app, raise_server_exceptions=False)
        resp = client.get("/test-404")
        assert resp.status_code == 404
        assert resp.json() == {"detail": "gone"}

    def test_completion_error_returns_502(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/test-502")
        async def _raise_completion():
            raise CompletionError(detail="upstream down")

        client = TestClient(app, raise_server_exceptions=False)
        resp = client.get("/test-502")
        assert resp.status_code == 502
        assert resp.json() == {"detail": "upstream down"}
