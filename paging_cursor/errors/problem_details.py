"""Problem Details (RFC 9457) errors raised by paging cursors."""

from typing import Optional, Any
from pydantic import BaseModel, Field
from fastapi import Request
from fastapi.responses import JSONResponse

MALFORMED_TOKEN_TYPE = "urn:paging-cursor:malformed-token"


class ProblemDetail(BaseModel):
    """Problem Details body; extension members are kept as extra fields."""

    type: str = Field(default="about:blank", description="Problem type URI")
    title: str = Field(description="Short summary of the problem type")
    status: int = Field(description="HTTP status code")
    detail: Optional[str] = Field(default=None, description="Explanation of this occurrence")
    instance: Optional[str] = Field(default=None, description="Request path of this occurrence")

    model_config = {"extra": "allow"}


def create_problem_response(
    status: int,
    title: str,
    detail: Optional[str] = None,
    type_uri: str = "about:blank",
    request: Optional[Request] = None,
    **extensions: Any
) -> JSONResponse:
    """Render a problem+json response; the request path becomes the instance."""
    problem = ProblemDetail(
        type=type_uri,
        title=title,
        status=status,
        detail=detail,
        instance=str(request.url.path) if request else None,
        **extensions
    )
    return JSONResponse(
        status_code=status,
        content=problem.model_dump(exclude_none=True),
        headers={"Content-Type": "application/problem+json"}
    )


class ProblemDetailException(Exception):
    """Base exception for Problem Details responses."""

    def __init__(
        self,
        status: int,
        title: str,
        detail: Optional[str] = None,
        type_uri: str = "about:blank",
        **extensions: Any
    ):
        self.status = status
        self.title = title
        self.detail = detail
        self.type_uri = type_uri
        self.extensions = extensions
        super().__init__(detail or title)

    def to_response(self, request: Optional[Request] = None) -> JSONResponse:
        """Convert to a problem+json response."""
        return create_problem_response(
            self.status,
            self.title,
            self.detail,
            self.type_uri,
            request,
            **self.extensions
        )


class BadRequestError(ProblemDetailException):
    """400 Bad Request error."""

    def __init__(self, detail: str, type_uri: str = "about:blank", **extensions: Any):
        super().__init__(400, "Bad Request", detail, type_uri, **extensions)


class MalformedTokenError(BadRequestError):
    """A cursor token that cannot be decoded.

    The token itself is never echoed back; only its length is reported.
    """

    def __init__(self, reason: str, token: Optional[str] = None):
        extensions = {} if token is None else {"token_length": len(token)}
        super().__init__(f"Malformed cursor token: {reason}", MALFORMED_TOKEN_TYPE, **extensions)
