"""Error handling module for Parts Search API."""

from .problem_details import (
    ProblemDetail,
    ProblemDetailException,
    BadRequestError,
    ServiceUnavailableError,
    InvalidArgumentError,
    InvalidCursorError,
    StorageError,
    create_problem_response
)
from .handlers import register_exception_handlers

__all__ = [
    "ProblemDetail",
    "ProblemDetailException",
    "BadRequestError",
    "ServiceUnavailableError",
    "InvalidArgumentError",
    "InvalidCursorError",
    "StorageError",
    "create_problem_response",
    "register_exception_handlers"
]
