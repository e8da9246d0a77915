"""Keyset pagination over a ranked, searchable set of records.

Records are ordered by ``(match_rank, sort_key, id)`` ascending. With a
search term, an exact sort key match ranks 0 and a prefix match ranks 1;
without one every record ranks 0. The engine asks the store for one row
more than the page size so ``has_more`` is known without a count query.
"""

import logging
from typing import Optional, List, Protocol, Sequence
from uuid import UUID

from pydantic import BaseModel, Field

from ..errors.problem_details import InvalidArgumentError, InvalidCursorError
from ..models.records import Record
from .cursor import paginate_query_results


logger = logging.getLogger(__name__)

EXACT_MATCH_RANK = 0
PREFIX_MATCH_RANK = 1

CANDIDATE_ORDER = ("match_rank", "sort_key", "id")

# PostgreSQL text values cannot hold NUL
NUL_CHAR = "\x00"


class CandidateFilter(BaseModel):
    """Rank, search and cursor predicate handed to the record store."""

    search_text: Optional[str] = Field(default=None, description="Exact/prefix search term")
    cursor: Optional[str] = Field(default=None, description="Return only records after this sort key")
    cursor_id: Optional[UUID] = Field(default=None, description="Tie-break id paired with the cursor")

    model_config = {"frozen": True}

    def rank(self, sort_key: str) -> Optional[int]:
        """Return the match rank of ``sort_key``, or None if it does not match."""
        if not self.search_text:
            return EXACT_MATCH_RANK
        if sort_key == self.search_text:
            return EXACT_MATCH_RANK
        if sort_key.startswith(self.search_text):
            return PREFIX_MATCH_RANK
        return None

    def is_after_cursor(self, sort_key: str, record_id: UUID) -> bool:
        """Whether a record lies past the cursor position."""
        if self.cursor is None:
            return True
        if self.cursor_id is None:
            return sort_key > self.cursor
        return (sort_key, record_id) > (self.cursor, self.cursor_id)


class Page(BaseModel):
    """One page of records plus the continuation state."""

    records: List[Record] = Field(default_factory=list)
    has_more: bool = False
    next_cursor: Optional[str] = Field(default=None, description="Sort key of the last record when more exist")
    next_cursor_id: Optional[UUID] = Field(default=None, description="Id of the last record when more exist")


class RecordStore(Protocol):
    """Read-only capability the engine needs from storage."""

    async def query_ordered_candidates(
        self,
        filter: CandidateFilter,
        order: Sequence[str],
        limit: int
    ) -> List[Record]:
        ...


def _validate_page_limit(page_limit) -> int:
    # bool is an int subclass but never a page size
    if isinstance(page_limit, bool) or not isinstance(page_limit, int):
        raise InvalidArgumentError(f"page_limit must be an integer, got {type(page_limit).__name__}")
    if page_limit < 1:
        raise InvalidArgumentError(f"page_limit must be at least 1, got {page_limit}")
    return page_limit


def _validate_search_text(search_text) -> None:
    if search_text is not None and not isinstance(search_text, str):
        raise InvalidArgumentError(f"search_text must be a string, got {type(search_text).__name__}")
    if search_text and NUL_CHAR in search_text:
        raise InvalidArgumentError("search_text contains a NUL character")


def _validate_cursor(cursor, cursor_id) -> None:
    if cursor is not None and not isinstance(cursor, str):
        raise InvalidCursorError(
            f"Cursor of type {type(cursor).__name__} cannot be compared with a string sort key"
        )
    if cursor is not None and NUL_CHAR in cursor:
        raise InvalidCursorError("Cursor contains a NUL character")
    if cursor_id is not None:
        if cursor is None:
            raise InvalidCursorError("Cursor id supplied without a cursor")
        if not isinstance(cursor_id, UUID):
            raise InvalidCursorError(f"Cursor id must be a UUID, got {type(cursor_id).__name__}")


async def paginate(
    store: RecordStore,
    search_text: Optional[str],
    page_limit: int,
    cursor: Optional[str] = None,
    cursor_id: Optional[UUID] = None
) -> Page:
    """Fetch one page of records ordered by match rank then sort key.

    Args:
        store: Record store to read candidates from
        search_text: Exact/prefix search term; empty or None disables filtering
        page_limit: Maximum number of records on the page, at least 1
        cursor: ``next_cursor`` of the previous page, None on the first call
        cursor_id: ``next_cursor_id`` of the previous page, if known

    Returns:
        The page, with ``next_cursor`` set only when ``has_more`` is true

    Raises:
        InvalidArgumentError: If page_limit is not a positive integer
            or search_text contains a NUL character
        InvalidCursorError: If the cursor cannot be compared to sort keys
        StorageError: If the store fails
    """
    page_limit = _validate_page_limit(page_limit)
    _validate_search_text(search_text)
    _validate_cursor(cursor, cursor_id)

    candidate_filter = CandidateFilter(
        search_text=search_text or None,
        cursor=cursor,
        cursor_id=cursor_id
    )

    # One look-ahead row decides has_more
    candidates = await store.query_ordered_candidates(
        candidate_filter, CANDIDATE_ORDER, page_limit + 1
    )
    records, has_more = paginate_query_results(list(candidates), page_limit)

    page = Page(records=records, has_more=has_more)
    if has_more and records:
        page.next_cursor = records[-1].sort_key
        page.next_cursor_id = records[-1].id

    logger.debug(
        f"Paginated {len(records)} records (search={candidate_filter.search_text!r}, "
        f"cursor={cursor!r}, has_more={has_more})"
    )
    return page
