"""Serializable paging cursor.

A cursor marks a position in a sorted result set by the values of the sort
columns for the last row seen. It round-trips through an opaque, URL-safe
token so clients can resume a listing without server-side state.

Example:
    cursor = PagingCursor(["2025-01-15T10:30:00Z", 42], {"filter": "open"})
    token = cursor.to_string()
    PagingCursor.parse(token).values  # ("2025-01-15T10:30:00Z", 42)
"""

import copy
from typing import Any, Optional, Sequence, Tuple, Union

from .codec import CursorValue, decode_token, encode_token


class PagingCursor:
    """Position marker for keyset pagination.

    Attributes:
        values: Row values identifying a position, in sort-column order
        context: Optional opaque context (filter, order by, etc.)
        descending: Optional per-column descending flags used by
            :meth:`compare`. The list is kept by reference, so a caller that
            passes its own list sees the flips made by :meth:`reverse`. Any
            other sequence is copied into a list.
    """

    __slots__ = ("_values", "_context", "descending")

    def __init__(
        self,
        values: Sequence[CursorValue],
        context: Any = None,
        descending: Optional[Sequence[bool]] = None
    ):
        self._values = tuple(values)
        self._context = copy.deepcopy(context)
        # Lists are shared with the caller; other sequences get an owned list
        if descending is not None and not isinstance(descending, list):
            descending = list(descending)
        self.descending = descending

    @property
    def values(self) -> Tuple[CursorValue, ...]:
        return self._values

    @property
    def context(self) -> Any:
        return self._context

    @classmethod
    def parse(cls, token: str) -> "PagingCursor":
        """Construct a paging cursor from a token.

        Args:
            token: A token returned from :meth:`to_string`

        Returns:
            A paging cursor instance

        Raises:
            MalformedTokenError: If the token cannot be decoded
        """
        meta_info, values = decode_token(token)
        return cls(values, meta_info.context, meta_info.descending)

    @classmethod
    def compare(cls, a: Union["PagingCursor", str], b: Union["PagingCursor", str]) -> int:
        """Compare two cursors (or tokens) by their values.

        The descending flags of ``a`` decide the direction of every column;
        those of ``b`` are not consulted. Only the first ``len(a.values)``
        positions are compared.

        Args:
            a: A paging cursor or token
            b: A paging cursor or token

        Returns:
            -1, 0 or 1 when cursor ``a`` sorts before, level with or after ``b``

        Raises:
            MalformedTokenError: If either side is an invalid token
            ValueError: If ``b`` has fewer values than ``a``
            TypeError: If values at the same position have incomparable types
        """
        a_cursor = cls.parse(a) if isinstance(a, str) else a
        b_cursor = cls.parse(b) if isinstance(b, str) else b

        if len(b_cursor.values) < len(a_cursor.values):
            raise ValueError(
                f"Cannot compare a cursor of {len(a_cursor.values)} values "
                f"against one of {len(b_cursor.values)}"
            )

        desc = a_cursor.descending or []
        for i, a_value in enumerate(a_cursor.values):
            b_value = b_cursor.values[i]
            if a_value == b_value:
                continue

            descending = i < len(desc) and desc[i]
            if a_value < b_value:
                return 1 if descending else -1
            return -1 if descending else 1

        return 0

    def to_string(self) -> str:
        """Convert the paging cursor to a URL-safe token."""
        return encode_token(self._values, self._context, self.descending)

    def reverse(self) -> None:
        """Reverse the direction of the cursor by inverting its descending flags."""
        direction = self.descending
        if direction is not None:
            for i in range(len(direction) - 1, -1, -1):
                direction[i] = not direction[i]

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return (
            f"PagingCursor(values={list(self._values)!r}, "
            f"context={self._context!r}, descending={self.descending!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PagingCursor):
            return NotImplemented
        return (
            self._values == other._values
            and self._context == other._context
            and self.descending == other.descending
        )

    __hash__ = None


def parse(token: str) -> PagingCursor:
    """Parse a token into a :class:`PagingCursor`."""
    return PagingCursor.parse(token)


def compare(a: Union[PagingCursor, str], b: Union[PagingCursor, str]) -> int:
    """Compare two cursors or tokens; see :meth:`PagingCursor.compare`."""
    return PagingCursor.compare(a, b)
