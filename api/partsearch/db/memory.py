"""In-memory record store for tests and local development."""

import logging
from typing import Iterable, List, Sequence

from ..models.records import Record
from ..pagination import CandidateFilter
from ..errors.problem_details import InvalidArgumentError


logger = logging.getLogger(__name__)


class InMemoryRecordStore:
    """
    Read-only record store over a snapshot of records.

    Applies the same rank, prefix and cursor semantics as the SQL store;
    prefix matching uses ``str.startswith`` so wildcard characters in the
    search text are literal.
    """

    def __init__(self, records: Iterable[Record] = ()):
        self._records: tuple = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    async def query_ordered_candidates(
        self,
        filter: CandidateFilter,
        order: Sequence[str],
        limit: int
    ) -> List[Record]:
        """Return up to ``limit`` matching records in the requested order."""
        ranked = []
        for record in self._records:
            rank = filter.rank(record.sort_key)
            if rank is None or not filter.is_after_cursor(record.sort_key, record.id):
                continue
            values = {"match_rank": rank, "sort_key": record.sort_key, "id": record.id}
            try:
                key = tuple(values[column] for column in order)
            except KeyError as e:
                raise InvalidArgumentError(f"Cannot order candidates by {e.args[0]!r}") from e
            ranked.append((key, record))

        ranked.sort(key=lambda item: item[0])
        logger.debug(f"Matched {len(ranked)} of {len(self._records)} records")
        return [record for _, record in ranked[:limit]]
