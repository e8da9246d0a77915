"""Database operations for part records."""

import asyncio
import logging
from typing import Optional, List, Any, Sequence, Tuple

import asyncpg
from asyncpg import Pool

from ..config import get_settings
from ..models.records import Record, RecordRow
from ..pagination import (
    CandidateFilter, EXACT_MATCH_RANK, PREFIX_MATCH_RANK,
    build_keyset_condition, build_order_clause, escape_like
)
from ..pagination.cursor import LIKE_ESCAPE_CHAR
from ..errors.problem_details import InvalidArgumentError, StorageError
from .connection import get_db_pool


logger = logging.getLogger(__name__)

PARTS_TABLE = "parts"
RECORD_COLUMNS = "id, sort_key, description, created_at"
ORDERABLE_COLUMNS = frozenset({"match_rank", "sort_key", "id"})


def build_candidates_query(
    candidate_filter: CandidateFilter,
    order: Sequence[str],
    limit: int
) -> Tuple[str, List[Any]]:
    """Build the ranked candidate query and its positional parameters.

    Without a search term every record ranks 0. With one, the exact match
    branch (rank 0) and the prefix branch (rank 1) are combined with
    UNION ALL; the prefix branch excludes the exact sort key so a record
    is never returned twice.

    Args:
        candidate_filter: Search and cursor predicate
        order: Columns to order by, all ascending
        limit: Maximum number of rows to return

    Returns:
        Tuple of (query, parameters)
    """
    unknown = [column for column in order if column not in ORDERABLE_COLUMNS]
    if unknown:
        raise InvalidArgumentError(f"Cannot order candidates by {unknown}")

    params: List[Any] = []

    def add_param(value: Any) -> str:
        params.append(value)
        return f"${len(params)}"

    keyset = None
    if candidate_filter.cursor is not None:
        cursor_param = add_param(candidate_filter.cursor)
        id_param = None
        if candidate_filter.cursor_id is not None:
            id_param = add_param(candidate_filter.cursor_id)
        keyset = build_keyset_condition("sort_key", "id", cursor_param, id_param)

    if not candidate_filter.search_text:
        where_clause = f"WHERE {keyset}" if keyset else ""
        query = f"""
            SELECT {RECORD_COLUMNS}, {EXACT_MATCH_RANK} AS match_rank
            FROM {PARTS_TABLE}
            {where_clause}
        """
    else:
        exact_param = add_param(candidate_filter.search_text)
        prefix_param = add_param(escape_like(candidate_filter.search_text) + "%")

        exact_conditions = [f"sort_key = {exact_param}"]
        prefix_conditions = [
            f"sort_key LIKE {prefix_param} ESCAPE '{LIKE_ESCAPE_CHAR}'",
            f"sort_key <> {exact_param}",
        ]
        if keyset:
            exact_conditions.append(keyset)
            prefix_conditions.append(keyset)

        query = f"""
            SELECT {RECORD_COLUMNS}, {EXACT_MATCH_RANK} AS match_rank
            FROM {PARTS_TABLE}
            WHERE {" AND ".join(exact_conditions)}
            UNION ALL
            SELECT {RECORD_COLUMNS}, {PREFIX_MATCH_RANK} AS match_rank
            FROM {PARTS_TABLE}
            WHERE {" AND ".join(prefix_conditions)}
        """

    limit_param = add_param(limit)
    query += f"""
            {build_order_clause(order)}
            LIMIT {limit_param}
        """
    return query, params


class PostgresRecordStore:
    """Record store backed by the ``parts`` table through an asyncpg pool."""

    def __init__(self, pool: Optional[Pool] = None, query_timeout: Optional[float] = None):
        self._pool = pool
        self.query_timeout = (
            query_timeout if query_timeout is not None else get_settings().query_timeout
        )

    async def _get_pool(self) -> Pool:
        if self._pool is None:
            self._pool = await get_db_pool()
        return self._pool

    async def query_ordered_candidates(
        self,
        filter: CandidateFilter,
        order: Sequence[str],
        limit: int
    ) -> List[Record]:
        """Fetch ranked candidates in the requested order.

        Raises:
            StorageError: If the database cannot be reached, errors or times out
        """
        query, params = build_candidates_query(filter, order, limit)

        try:
            pool = await self._get_pool()
            async with pool.acquire() as conn:
                rows = await conn.fetch(query, *params, timeout=self.query_timeout)
        except asyncpg.PostgresError as e:
            logger.error(f"Database error querying records: {e}")
            raise StorageError(f"Database error: {type(e).__name__}") from e
        except asyncio.TimeoutError as e:
            logger.error(f"Record query timed out after {self.query_timeout}s")
            raise StorageError(f"Query timed out after {self.query_timeout}s") from e
        except (asyncpg.InterfaceError, OSError) as e:
            logger.error(f"Database connection error querying records: {e}")
            raise StorageError("Database connection error") from e

        records = [RecordRow.model_validate(dict(row)).to_record() for row in rows]
        logger.debug(f"Fetched {len(records)} candidate records (limit {limit})")
        return records
