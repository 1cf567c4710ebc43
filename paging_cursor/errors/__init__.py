"""Error handling module for paging cursors."""

from .problem_details import (
    ProblemDetail,
    ProblemDetailException,
    BadRequestError,
    MalformedTokenError,
    create_problem_response
)
from .handlers import register_exception_handlers

__all__ = [
    "ProblemDetail",
    "ProblemDetailException",
    "BadRequestError",
    "MalformedTokenError",
    "create_problem_response",
    "register_exception_handlers"
]
