"""Cursor-based pagination utilities for Parts Search API."""

import base64
import binascii
import json
from typing import Optional, Dict, Any, List, Sequence, Tuple, TypeVar
from urllib.parse import urlencode
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError
from ..errors.problem_details import InvalidCursorError

T = TypeVar("T")

LIKE_ESCAPE_CHAR = "\\"


class CursorData(BaseModel):
    """Data structure carried inside an opaque cursor token."""

    sort_key: str = Field(description="Sort key of the last record on the previous page")
    id: UUID = Field(description="Record UUID for stable ordering between equal sort keys")


def encode_cursor(sort_key: str, record_id: UUID) -> str:
    """Encode pagination cursor.

    Args:
        sort_key: The sort key of the last record returned
        record_id: The UUID of that record, used as tie-break

    Returns:
        URL-safe base64 encoded cursor string
    """
    cursor_data = CursorData(sort_key=sort_key, id=record_id)
    cursor_bytes = cursor_data.model_dump_json().encode("utf-8")
    return base64.urlsafe_b64encode(cursor_bytes).decode("ascii")


def decode_cursor(cursor: str) -> CursorData:
    """Decode pagination cursor.

    Args:
        cursor: URL-safe base64 encoded cursor string

    Returns:
        Decoded cursor data

    Raises:
        InvalidCursorError: If cursor is empty, invalid or malformed
    """
    if not cursor:
        raise InvalidCursorError("Empty cursor provided")

    try:
        cursor_bytes = base64.urlsafe_b64decode(cursor.encode("ascii"))
        cursor_dict = json.loads(cursor_bytes.decode("utf-8"))
        return CursorData.model_validate(cursor_dict)
    except ValidationError as e:
        raise InvalidCursorError(f"Invalid cursor contents: {e.error_count()} errors") from e
    except (ValueError, TypeError, binascii.Error, UnicodeError) as e:
        # json.JSONDecodeError is a ValueError
        raise InvalidCursorError(f"Invalid cursor format: {e}") from e


def escape_like(value: str, escape_char: str = LIKE_ESCAPE_CHAR) -> str:
    """Escape LIKE metacharacters so ``value`` is matched literally."""
    return (
        value.replace(escape_char, escape_char * 2)
        .replace("%", escape_char + "%")
        .replace("_", escape_char + "_")
    )


def build_keyset_condition(
    column: str,
    id_column: str,
    cursor_param: str,
    id_param: Optional[str] = None
) -> str:
    """Build the keyset seek predicate for ascending order.

    Args:
        column: Sort key column name
        id_column: Tie-break column name
        cursor_param: Placeholder for the cursor sort key (e.g. ``$3``)
        id_param: Placeholder for the cursor id, if the cursor carries one

    Returns:
        SQL boolean expression
    """
    if id_param is None:
        return f"{column} > {cursor_param}"
    return f"({column} > {cursor_param} OR ({column} = {cursor_param} AND {id_column} > {id_param}::uuid))"


def build_order_clause(order: Sequence[str]) -> str:
    """Build ORDER BY clause for pagination, every column ascending."""
    return "ORDER BY " + ", ".join(f"{column} ASC" for column in order)


def create_link_header(
    base_url: str,
    params: Dict[str, Any],
    next_cursor: Optional[str] = None
) -> Optional[str]:
    """Create Link header for pagination as per RFC 8288.

    Args:
        base_url: Base URL for the resource
        params: Current query parameters
        next_cursor: Cursor for next page

    Returns:
        Link header value or None if no links
    """
    if not next_cursor:
        return None

    next_params = {k: v for k, v in params.items() if v is not None}
    next_params["cursor"] = next_cursor
    return f'<{base_url}?{urlencode(next_params)}>; rel="next"'


def paginate_query_results(items: List[T], limit: int) -> Tuple[List[T], bool]:
    """Split a look-ahead result into the page and the has-more flag.

    Args:
        items: Items fetched with ``limit + 1`` as the query limit
        limit: Requested page size

    Returns:
        Tuple of (page_items, has_more)
    """
    has_more = len(items) > limit
    return items[:limit], has_more
