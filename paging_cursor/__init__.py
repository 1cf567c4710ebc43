"""Opaque, URL-safe paging cursors for keyset pagination."""

from .errors import MalformedTokenError, register_exception_handlers
from .pagination import PagingCursor, compare, parse

__all__ = [
    "MalformedTokenError",
    "PagingCursor",
    "compare",
    "parse",
    "register_exception_handlers"
]
