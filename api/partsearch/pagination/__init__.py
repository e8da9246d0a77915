"""Pagination module for keyset pagination over ranked search results."""

from .cursor import (
    CursorData,
    encode_cursor,
    decode_cursor,
    escape_like,
    build_keyset_condition,
    build_order_clause,
    create_link_header,
    paginate_query_results
)
from .engine import (
    CANDIDATE_ORDER,
    EXACT_MATCH_RANK,
    PREFIX_MATCH_RANK,
    CandidateFilter,
    Page,
    RecordStore,
    paginate
)

__all__ = [
    "CursorData",
    "encode_cursor",
    "decode_cursor",
    "escape_like",
    "build_keyset_condition",
    "build_order_clause",
    "create_link_header",
    "paginate_query_results",
    "CANDIDATE_ORDER",
    "EXACT_MATCH_RANK",
    "PREFIX_MATCH_RANK",
    "CandidateFilter",
    "Page",
    "RecordStore",
    "paginate"
]
