"""Tests for error handling and Problem Details implementation."""

import pytest
from fastapi import Request
from fastapi.responses import JSONResponse
from unittest.mock import Mock

from partsearch.errors.problem_details import (
    ProblemDetail,
    ProblemDetailException,
    BadRequestError,
    ServiceUnavailableError,
    InvalidArgumentError,
    InvalidCursorError,
    StorageError,
    create_problem_response
)


class TestProblemDetail:
    """Test ProblemDetail model."""

    def test_problem_detail_defaults(self):
        """Test ProblemDetail with default values."""
        problem = ProblemDetail(title="Test Error", status=400)

        assert problem.type == "about:blank"
        assert problem.title == "Test Error"
        assert problem.status == 400
        assert problem.detail is None
        assert problem.instance is None

    def test_problem_detail_extra_fields(self):
        """Test ProblemDetail allows extension fields."""
        problem = ProblemDetail(title="Test Error", status=400, error_code="TEST_001")
        assert problem.error_code == "TEST_001"


class TestProblemDetailException:
    """Test ProblemDetailException base class."""

    def test_basic_exception(self):
        """Test basic exception creation."""
        exc = ProblemDetailException(status=400, title="Test Error", detail="Test detail")

        assert exc.status == 400
        assert exc.title == "Test Error"
        assert exc.detail == "Test detail"
        assert exc.type_uri == "about:blank"
        assert str(exc) == "Test detail"

    def test_to_problem_detail_with_request(self):
        """Test the request path becomes the instance."""
        request = Mock(spec=Request)
        request.url.path = "/v1/records"

        exc = ProblemDetailException(status=400, title="Test Error", detail="Test detail")

        assert exc.to_problem_detail(request).instance == "/v1/records"

    def test_to_response(self):
        """Test converting to JSONResponse."""
        exc = ProblemDetailException(status=400, title="Test Error", detail="Test detail", error_code="X")

        response = exc.to_response()

        assert isinstance(response, JSONResponse)
        assert response.status_code == 400
        assert response.headers["Content-Type"] == "application/problem+json"
        assert b'"error_code":"X"' in response.body


class TestSpecificExceptions:
    """Test specific exception classes."""

    def test_bad_request_error(self):
        """Test BadRequestError."""
        exc = BadRequestError("Invalid input")

        assert exc.status == 400
        assert exc.title == "Bad Request"
        assert exc.detail == "Invalid input"

    def test_service_unavailable_error(self):
        """Test ServiceUnavailableError default detail."""
        exc = ServiceUnavailableError()

        assert exc.status == 503
        assert exc.detail == "Service temporarily unavailable"

    def test_invalid_argument_error(self):
        """Test InvalidArgumentError is a bad request with an error code."""
        exc = InvalidArgumentError("page_limit must be at least 1, got 0")

        assert isinstance(exc, BadRequestError)
        assert exc.status == 400
        assert exc.extensions["error_code"] == "INVALID_ARGUMENT"

    def test_invalid_cursor_error(self):
        """Test InvalidCursorError defaults."""
        exc = InvalidCursorError()

        assert isinstance(exc, BadRequestError)
        assert exc.detail == "Invalid cursor"
        assert exc.extensions["error_code"] == "INVALID_CURSOR"

    def test_error_code_can_be_overridden(self):
        """Test an explicit error code wins over the default."""
        exc = InvalidCursorError("Expired cursor", error_code="CURSOR_EXPIRED")
        assert exc.extensions["error_code"] == "CURSOR_EXPIRED"

    def test_storage_error_keeps_cause(self):
        """Test StorageError is a 503 and keeps the original exception."""
        original = ConnectionResetError("reset by peer")
        with pytest.raises(StorageError) as exc_info:
            try:
                raise original
            except OSError as e:
                raise StorageError("Database connection error") from e

        assert exc_info.value.status == 503
        assert exc_info.value.title == "Service Unavailable"
        assert exc_info.value.__cause__ is original


class TestCreateProblemResponse:
    """Test create_problem_response helper."""

    def test_with_request_and_extensions(self):
        """Test instance and extensions are included."""
        request = Mock(spec=Request)
        request.url.path = "/v1/records"

        response = create_problem_response(
            status=422,
            title="Validation Error",
            detail="bad",
            request=request,
            validation_errors=[]
        )

        assert response.status_code == 422
        assert b'"instance":"/v1/records"' in response.body
        assert b'"validation_errors":[]' in response.body
