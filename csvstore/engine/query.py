"""
QueryEngine - filtered scans, projection and sorted-range retrieval.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from functools import cmp_to_key

from csvstore.engine.matcher import compare_values, matches_conditions
from csvstore.models.condition import QueryCondition
from csvstore.models.exceptions import CorruptDataError, InvalidArgumentError
from csvstore.models.record import Record, project
from csvstore.models.result import QueryResult
from csvstore.models.table_file import TableFile

logger = logging.getLogger(__name__)


class QueryEngine:
    """
    Read-only access to table contents.

    Every call loads the full table; there are no indexes. Results never
    change the stored row order.

    Thread Safety:
    - Holds no lock. The caller must hold the store's lock in at least
      shared mode for the whole call.
    """

    ASCENDING = "asc"
    DESCENDING = "desc"

    def __init__(self, table_files: Callable[[str], TableFile]) -> None:
        """
        Initialize query engine.

        Args:
            table_files: Resolves a table name to its TableFile.
        """
        self._table_files = table_files

    def query(self, table: str, conditions: Sequence[QueryCondition]) -> QueryResult:
        """
        Return every record matching all conditions, in stored order.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        records = self._table_files(table).load_all()
        matched = [record for record in records if matches_conditions(record, conditions)]
        logger.debug(f"Query on {table} matched {len(matched)} of {len(records)} rows")
        return QueryResult(matched)

    def select(
        self,
        table: str,
        columns: Iterable[str] | None,
        conditions: Sequence[QueryCondition],
    ) -> QueryResult:
        """
        Query, then keep only the requested columns of each record.

        An empty or missing column list keeps every column. Requested
        columns the table does not have are left out silently.
        """
        result = self.query(table, conditions)
        columns = list(columns or ())
        if not columns:
            return result
        return QueryResult([project(record, columns) for record in result.records])

    def query_sorted_range(
        self,
        table: str,
        sort_column: str,
        sort_order: str,
        limit: int,
    ) -> list[Record]:
        """
        Sort the whole table by one column and return the first records.

        Values compare numerically when both parse as numbers, otherwise
        lexicographically. The sort is stable in both directions, so ties
        keep their stored order.

        Args:
            table: Table to read.
            sort_column: Column to order by; must be in the header.
            sort_order: "asc" or "desc".
            limit: Maximum number of records to return (0 returns none).

        Returns:
            Up to limit records in sorted order.

        Raises:
            TableNotFoundError: If the table does not exist.
            InvalidArgumentError: On a bad sort order, unknown column or
                negative limit.
        """
        header, records = self._table_files(table).read()

        if sort_order not in (self.ASCENDING, self.DESCENDING):
            raise InvalidArgumentError(
                f"sortBy must be either 'asc' or 'desc', got {sort_order!r}"
            )
        if limit < 0:
            raise InvalidArgumentError(f"limit must be >= 0, got {limit}")
        if not header:
            raise CorruptDataError(table, "missing header row", 1)
        if sort_column not in header:
            raise InvalidArgumentError(f"column {sort_column} does not exist in table {table}")

        key = cmp_to_key(compare_values)
        ordered = sorted(
            records,
            key=lambda record: key(record[sort_column]),
            reverse=sort_order == self.DESCENDING,
        )
        logger.debug(
            f"Sorted range on {table} by {sort_column} {sort_order}: "
            f"{min(limit, len(ordered))} of {len(ordered)} rows"
        )
        return ordered[:limit]
