"""
Unit tests for the Paginant exception hierarchy.

Tests the error classes and the handle_operation_errors context manager
that tags failures of the find and count operations.
"""

import pytest

from paginant.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    PaginantError,
    UpstreamOperationError,
    handle_operation_errors,
)


class TestExceptionHierarchy:
    """Test the exception class hierarchy and instantiation."""

    def test_paginant_error_base_class(self):
        """Test that PaginantError is the base exception class."""
        error = PaginantError("Test message")
        assert isinstance(error, Exception)
        assert error.message == "Test message"
        assert error.original_error is None

    def test_configuration_error(self):
        """Test ConfigurationError keeps the name of the faulty option."""
        error = ConfigurationError("missing option", option="find_operation_name")
        assert isinstance(error, PaginantError)
        assert error.option == "find_operation_name"
        assert "missing option" in str(error)

    def test_invalid_argument_error(self):
        """Test InvalidArgumentError with original error preservation."""
        original = ValueError("page must be >= 1")
        error = InvalidArgumentError("Invalid pagination arguments", original_error=original)
        assert isinstance(error, PaginantError)
        assert error.original_error is original

    def test_upstream_operation_error(self):
        """Test UpstreamOperationError tags role and operation name."""
        original = RuntimeError("connection reset")
        error = UpstreamOperationError("count", "countUsers", original_error=original)
        assert isinstance(error, PaginantError)
        assert error.role == "count"
        assert error.operation_name == "countUsers"
        assert str(error) == "count operation 'countUsers' failed: connection reset"


class TestHandleOperationErrors:
    """Test the handle_operation_errors context manager."""

    def test_successful_operation(self):
        """Test that successful operations pass through normally."""
        with handle_operation_errors("find", "findMany"):
            result = 42
        assert result == 42

    def test_wraps_foreign_errors(self):
        """Test that operation failures become UpstreamOperationError."""
        original = KeyError("missing")
        with pytest.raises(UpstreamOperationError) as exc:
            with handle_operation_errors("find", "findMany"):
                raise original
        assert exc.value.role == "find"
        assert exc.value.operation_name == "findMany"
        assert exc.value.original_error is original
        assert exc.value.__cause__ is original

    def test_paginant_errors_pass_through(self):
        """Test that Paginant errors are not wrapped again."""
        with pytest.raises(InvalidArgumentError):
            with handle_operation_errors("count", "count"):
                raise InvalidArgumentError("bad")
