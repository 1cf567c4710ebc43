"""Keyset pagination helpers built on paging cursors."""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple
from urllib.parse import urlencode

from pydantic import BaseModel, Field, model_validator

from ..config import get_settings
from .cursor import PagingCursor


class PaginationParams(BaseModel):
    """Query parameters for pagination."""

    limit: int = Field(default_factory=lambda: get_settings().default_page_size, ge=1, description="Number of items per page")
    cursor: Optional[str] = Field(default=None, description="Cursor for pagination")

    @model_validator(mode="after")
    def check_limit(self):
        """Cap limit at the configured maximum page size."""
        max_page_size = get_settings().max_page_size
        if self.limit > max_page_size:
            raise ValueError(f"limit must be at most {max_page_size}")
        return self

    def paging_cursor(self) -> Optional[PagingCursor]:
        """Parse the cursor parameter, if one was given."""
        return PagingCursor.parse(self.cursor) if self.cursor else None


class PaginatedResponse(BaseModel):
    """Response model for paginated data."""

    items: List[Any] = Field(description="List of items")
    next_cursor: Optional[str] = Field(default=None, description="Cursor for next page")
    prev_cursor: Optional[str] = Field(default=None, description="Cursor for previous page")
    has_more: bool = Field(description="Whether more items are available")
    total_count: Optional[int] = Field(default=None, description="Total count if available")


def cursor_from_row(
    row: Any,
    sort_columns: Sequence[str],
    context: Any = None,
    descending: Optional[Sequence[bool]] = None
) -> PagingCursor:
    """Create a paging cursor from a result row.

    Args:
        row: Mapping (e.g. a database record) or object with the sort columns
        sort_columns: Column names in sort order
        context: Optional opaque context to carry in the cursor
        descending: Optional per-column descending flags

    Returns:
        Cursor positioned at ``row``

    Raises:
        KeyError: If the row lacks one of the sort columns
    """
    values = []
    for column in sort_columns:
        if isinstance(row, Mapping):
            values.append(row[column])
        elif hasattr(row, column):
            values.append(getattr(row, column))
        else:
            raise KeyError(column)

    return PagingCursor(values, context, descending)


def paginate_query_results(
    items: List[Any],
    limit: int,
    sort_columns: Sequence[str],
    context: Any = None,
    descending: Optional[Sequence[bool]] = None,
    after: Optional[PagingCursor] = None
) -> Tuple[List[Any], Optional[str], Optional[str], bool]:
    """Process query results for pagination.

    The query is expected to fetch ``limit + 1`` rows so that the extra row
    signals another page.

    Args:
        items: Rows from the query, already in sort order
        limit: Requested page size
        sort_columns: Column names in sort order
        context: Optional context to carry in the returned cursors
        descending: Optional per-column descending flags
        after: Cursor that produced this page; when given a previous-page
            cursor is returned too

    Returns:
        Tuple of (page_items, next_cursor, prev_cursor, has_more)
    """
    # Check if we have more items than requested
    has_more = len(items) > limit

    # Take only the requested number of items
    page_items = items[:limit]

    next_cursor = None
    if has_more and page_items:
        next_cursor = cursor_from_row(
            page_items[-1],
            sort_columns,
            context,
            list(descending) if descending is not None else None
        ).to_string()

    prev_cursor = None
    if after is not None and page_items:
        flags = list(descending) if descending is not None else [False] * len(sort_columns)
        cursor = cursor_from_row(page_items[0], sort_columns, context, flags)
        cursor.reverse()
        prev_cursor = cursor.to_string()

    return page_items, next_cursor, prev_cursor, has_more


def create_link_header(
    base_url: str,
    params: Dict[str, Any],
    next_cursor: Optional[str] = None,
    prev_cursor: Optional[str] = None
) -> Optional[str]:
    """Create Link header for pagination as per RFC 8288.

    Args:
        base_url: Base URL for the resource
        params: Current query parameters
        next_cursor: Cursor for next page
        prev_cursor: Cursor for previous page

    Returns:
        Link header value or None if no links
    """
    param_name = get_settings().cursor_param
    links = []

    if next_cursor:
        next_params = {**params, param_name: next_cursor}
        links.append(f'<{base_url}?{urlencode(next_params)}>; rel="next"')

    if prev_cursor:
        prev_params = {**params, param_name: prev_cursor}
        links.append(f'<{base_url}?{urlencode(prev_params)}>; rel="prev"')

    return ", ".join(links) if links else None
