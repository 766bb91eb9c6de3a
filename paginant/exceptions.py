from collections.abc import Generator
from contextlib import contextmanager


class PaginantError(Exception):
    """Base exception for all Paginant errors."""

    def __init__(self, message: str, original_error: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ConfigurationError(PaginantError):
    """Raised at setup time when a pagination resolver cannot be built."""

    def __init__(self, message: str, option: str | None = None) -> None:
        super().__init__(message)
        self.option = option


class InvalidArgumentError(PaginantError):
    """Raised when the pagination arguments of a call are invalid (e.g. page=0)."""

    def __init__(self, message: str, original_error: BaseException | None = None) -> None:
        super().__init__(message, original_error)


class UpstreamOperationError(PaginantError):
    """Raised when the find or count operation fails."""

    def __init__(
        self, role: str, operation_name: str, original_error: BaseException | None = None
    ) -> None:
        msg = f"{role} operation '{operation_name}' failed"
        if original_error is not None:
            msg += f": {original_error!s}"
        super().__init__(msg, original_error)
        self.role = role
        self.operation_name = operation_name


@contextmanager
def handle_operation_errors(role: str, operation_name: str) -> Generator[None, None, None]:
    """
    Context manager that catches failures raised by an underlying operation
    and re-raises them as UpstreamOperationError, tagged with the role
    ("find" or "count") of the operation that failed.

    Paginant errors pass through untouched.

    Usage:
        with handle_operation_errors("count", "countUsers"):
            operation.resolve(params)
    """
    try:
        yield
    except PaginantError:
        raise
    except Exception as e:
        raise UpstreamOperationError(
            role=role, operation_name=operation_name, original_error=e
        ) from e
