"""FastAPI dependencies for reading paging cursors from requests."""

import logging
from typing import Annotated, Optional

from fastapi import Query, Request

from .config import get_settings
from .pagination.cursor import PagingCursor

logger = logging.getLogger(__name__)


def get_paging_cursor(
    request: Request,
    cursor: Annotated[
        Optional[str],
        Query(
            alias=get_settings().cursor_param,
            max_length=get_settings().max_cursor_length,
            description="Opaque cursor returned by a previous page"
        )
    ] = None
) -> Optional[PagingCursor]:
    """Parse the cursor query parameter.

    Returns:
        The parsed cursor, or None on the first page

    Raises:
        MalformedTokenError: If the cursor cannot be decoded
    """
    if not cursor:
        return None

    paging_cursor = PagingCursor.parse(cursor)
    logger.debug(
        f"Resuming {request.url.path} from cursor with {len(paging_cursor.values)} values"
    )
    return paging_cursor
