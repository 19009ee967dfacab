"""Unit tests for the client exception hierarchy."""

import builtins

import pytest

from client.exceptions import (
    APIError,
    BadRequestError,
    ConflictError,
    ConnectionError,
    MeltdownClientError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc",
        [
            ConnectionError("x"),
            TimeoutError("x"),
            APIError("x", 418),
            BadRequestError("x"),
            NotFoundError("x"),
            ConflictError("x"),
            ValidationError("x"),
            ServerError("x"),
        ],
    )
    def test_all_derive_from_base(self, exc):
        assert isinstance(exc, MeltdownClientError)

    def test_names_do_not_shadow_builtins_in_hierarchy(self):
        assert not issubclass(ConnectionError, builtins.ConnectionError)
        assert not issubclass(TimeoutError, builtins.TimeoutError)

    @pytest.mark.parametrize(
        "exc_type,status_code",
        [
            (BadRequestError, 400),
            (NotFoundError, 404),
            (ConflictError, 409),
            (ValidationError, 422),
            (ServerError, 500),
        ],
    )
    def test_fixed_status_codes(self, exc_type, status_code):
        exc = exc_type("x")
        assert isinstance(exc, APIError)
        assert exc.status_code == status_code


class TestFormatting:
    def test_connection_error_includes_url(self):
        exc = ConnectionError("Failed to connect", url="http://localhost:8000/health")
        assert str(exc) == "Failed to connect (url: http://localhost:8000/health)"

    def test_timeout_error_includes_timeout(self):
        assert str(TimeoutError("Timed out", timeout=5.0)) == "Timed out (timeout: 5.0s)"

    def test_api_error_with_type(self):
        exc = ConflictError("Cannot tick", error_type="Simulation Not Running")
        assert str(exc) == "[HTTP 409] [Simulation Not Running] Cannot tick"

    def test_api_error_without_type(self):
        assert str(NotFoundError("missing")) == "[HTTP 404] missing"

    def test_validation_error_keeps_errors(self):
        errors = [{"loc": ["body", "percent"], "msg": "too large"}]
        exc = ValidationError("percent: too large", errors=errors)

        assert exc.errors == errors
        assert exc.error_type == "validation_error"

    def test_server_error_custom_status(self):
        assert ServerError("gateway", status_code=502).status_code == 502
