"""Records search API endpoints."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from ..config import Settings, get_settings
from ..models.records import RecordListResponse
from ..pagination import (
    RecordStore, paginate, encode_cursor, decode_cursor, create_link_header
)
from ..db.records import PostgresRecordStore


logger = logging.getLogger(__name__)

records_router = APIRouter(
    prefix="/records",
    tags=["Records"],
    responses={
        400: {"description": "Bad Request - Invalid page limit or cursor"},
        503: {"description": "Record store unavailable"}
    }
)


def get_record_store() -> RecordStore:
    """Provide the record store used by the search endpoint."""
    return PostgresRecordStore(query_timeout=get_settings().query_timeout)


RecordStoreDep = Annotated[RecordStore, Depends(get_record_store)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


@records_router.get(
    "",
    response_model=RecordListResponse,
    summary="Search records",
    description="Search records by exact or prefix part number with cursor-based pagination.",
    responses={
        200: {"description": "Records retrieved successfully"}
    }
)
async def search_records(
    request: Request,
    response: Response,
    store: RecordStoreDep,
    settings: SettingsDep,
    search: Annotated[Optional[str], Query(description="Exact or prefix part number")] = None,
    limit: Annotated[Optional[int], Query(description="Number of records per page")] = None,
    cursor: Annotated[Optional[str], Query(description="Cursor for pagination")] = None
) -> RecordListResponse:
    """Search records with seek-based pagination.

    An exact part number match is returned first, followed by part numbers
    that start with the search text, each group in ascending part number
    order. Without a search term all records are listed in part number
    order. Pages are resumed from the cursor of the previous response, so
    rows inserted before the current position never shift later pages.

    Args:
        request: FastAPI request object
        response: FastAPI response object for adding headers
        store: Record store dependency
        settings: Application settings
        search: Exact or prefix search text, matched literally
        limit: Maximum number of records to return, capped by the configured maximum
        cursor: Pagination cursor from a previous response

    Returns:
        Page of records with pagination metadata and Link header
    """
    page_limit = settings.default_page_size if limit is None else min(limit, settings.max_page_size)

    cursor_sort_key = None
    cursor_id = None
    if cursor:
        cursor_data = decode_cursor(cursor)
        cursor_sort_key = cursor_data.sort_key
        cursor_id = cursor_data.id

    logger.info(f"Searching records (search={search!r}, limit={page_limit}, cursor={'yes' if cursor else 'no'})")

    page = await paginate(
        store,
        search_text=search,
        page_limit=page_limit,
        cursor=cursor_sort_key,
        cursor_id=cursor_id
    )

    next_cursor = None
    if page.has_more:
        next_cursor = encode_cursor(page.next_cursor, page.next_cursor_id)

        base_url = str(request.url).split('?')[0]
        link_header = create_link_header(
            base_url=base_url,
            params={"search": search or None, "limit": page_limit},
            next_cursor=next_cursor
        )
        if link_header:
            response.headers["Link"] = link_header

    logger.info(f"Returned {len(page.records)} records (has_more={page.has_more})")
    return RecordListResponse(
        records=page.records,
        next_cursor=next_cursor,
        has_more=page.has_more
    )
