"""Exception handlers for APIs that accept paging cursors."""

import logging
from fastapi import Request
from fastapi.responses import JSONResponse

from .problem_details import ProblemDetailException, create_problem_response

logger = logging.getLogger(__name__)


def _request_context(request: Request) -> dict:
    return {"path": str(request.url.path), "method": request.method}


async def problem_detail_exception_handler(
    request: Request,
    exc: ProblemDetailException
) -> JSONResponse:
    """Answer a rejected cursor (or other problem) with its problem+json body."""
    logger.info(
        f"{exc.status} {exc.title}: {exc.detail}",
        extra={**_request_context(request), "status_code": exc.status}
    )
    return exc.to_response(request)


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Log an unexpected failure and answer with an opaque 500."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__} - {exc}",
        extra={**_request_context(request), "exception_type": type(exc).__name__},
        exc_info=exc
    )
    return create_problem_response(
        500,
        "Internal Server Error",
        "An unexpected error occurred",
        request=request
    )


def register_exception_handlers(app):
    """Register cursor-related exception handlers with a FastAPI app."""
    app.add_exception_handler(ProblemDetailException, problem_detail_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
