"""Token codec for paging cursors.

A token is the URL-safe base64 encoding of a compact JSON array whose first
element is a metadata record and whose remaining elements are the cursor
values in sort-column order:

    [{"$ctx": {"filter": "test"}, "$dsc": [false, true]}, "2025-01-15", 42]

Both metadata keys are optional. The base64 text uses ``-`` and ``_`` in place
of ``+`` and ``/`` and carries no ``=`` padding, so a token can be placed in a
query string without escaping.

The JSON text is encoded as UTF-8 before base64, so any Unicode text
round-trips. Tokens whose values hold non-ASCII text therefore differ from
encoders that emit Latin-1 bytes, and cannot be read by them.
"""

import base64
import binascii
import json
import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError

from ..errors.problem_details import MalformedTokenError

logger = logging.getLogger(__name__)

CursorValue = Union[bool, int, float, str, None]

CONTEXT_KEY = "$ctx"
DESCENDING_KEY = "$dsc"

_URL_SAFE_TOKEN = re.compile(r"[A-Za-z0-9_-]*")
_TO_URL_SAFE = str.maketrans({"+": "-", "/": "_", "=": None})
_FROM_URL_SAFE = str.maketrans({"-": "+", "_": "/"})


class CursorMetaInfo(BaseModel):
    """Metadata record stored as the first element of a token payload."""

    context: Any = Field(default=None, alias=CONTEXT_KEY, description="Opaque query context")
    descending: Optional[List[StrictBool]] = Field(
        default=None,
        alias=DESCENDING_KEY,
        description="Per-column descending flags"
    )

    model_config = ConfigDict(extra="ignore")


def to_url_safe_base64(raw: bytes) -> str:
    """Encode bytes as unpadded URL-safe base64."""
    return base64.b64encode(raw).decode("ascii").translate(_TO_URL_SAFE)


def from_url_safe_base64(safe_base64: str) -> bytes:
    """Decode unpadded URL-safe base64.

    Raises:
        binascii.Error: If the text is not valid base64
    """
    padded = safe_base64.translate(_FROM_URL_SAFE)
    padded += "=" * (-len(padded) % 4)
    return base64.b64decode(padded, validate=True)


def encode_token(
    values: Sequence[CursorValue],
    context: Any = None,
    descending: Optional[Sequence[bool]] = None
) -> str:
    """Encode cursor values and metadata to a token.

    Args:
        values: Row values in sort-column order
        context: Optional opaque context, omitted from the token when None
        descending: Optional descending flags, omitted from the token when None

    Returns:
        URL-safe token

    Raises:
        TypeError: If a value or the context is not JSON serializable
        ValueError: If a value is NaN or infinite
    """
    meta_info: Dict[str, Any] = {}
    if context is not None:
        meta_info[CONTEXT_KEY] = context
    if descending is not None:
        meta_info[DESCENDING_KEY] = list(descending)

    payload = json.dumps(
        [meta_info, *values],
        separators=(",", ":"),
        sort_keys=True,
        ensure_ascii=False,
        allow_nan=False
    )
    return to_url_safe_base64(payload.encode("utf-8"))


def _reject(token: str, reason: str) -> MalformedTokenError:
    logger.debug(f"Rejected cursor token ({len(token)} chars): {reason}")
    return MalformedTokenError(reason, token=token)


def decode_token(token: str) -> Tuple[CursorMetaInfo, List[Any]]:
    """Decode a token into its metadata record and values.

    Args:
        token: A token produced by :func:`encode_token`

    Returns:
        Tuple of (meta_info, values)

    Raises:
        MalformedTokenError: If the token is not URL-safe base64 or does not
            hold a ``[metaInfo, ...values]`` array
    """
    if not isinstance(token, str):
        raise MalformedTokenError(f"expected a string, got {type(token).__name__}")
    if not _URL_SAFE_TOKEN.fullmatch(token):
        raise _reject(token, "not URL-safe base64")

    try:
        payload = json.loads(from_url_safe_base64(token).decode("utf-8"))
    except binascii.Error as e:
        raise _reject(token, "invalid base64") from e
    except UnicodeDecodeError as e:
        raise _reject(token, "payload is not UTF-8 text") from e
    except (ValueError, RecursionError) as e:
        raise _reject(token, "payload is not valid JSON") from e

    if not isinstance(payload, list) or not payload or not isinstance(payload[0], dict):
        raise _reject(token, "payload must be an array starting with a metadata object")

    try:
        meta_info = CursorMetaInfo.model_validate(payload[0])
    except ValidationError as e:
        raise _reject(token, "invalid metadata record") from e

    return meta_info, payload[1:]
