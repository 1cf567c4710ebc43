"""Pagination module for cursor-based pagination."""

from .codec import CursorMetaInfo, CursorValue, decode_token, encode_token
from .cursor import PagingCursor, compare, parse
from .pages import (
    PaginationParams,
    PaginatedResponse,
    cursor_from_row,
    paginate_query_results,
    create_link_header
)

__all__ = [
    "CursorMetaInfo",
    "CursorValue",
    "decode_token",
    "encode_token",
    "PagingCursor",
    "compare",
    "parse",
    "PaginationParams",
    "PaginatedResponse",
    "cursor_from_row",
    "paginate_query_results",
    "create_link_header"
]
