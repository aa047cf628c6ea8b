"""
TableStore - main table store API.
"""

import logging
import os
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from csvstore.engine.matcher import ConditionLike, prepare_conditions
from csvstore.engine.mutations import MutationEngine
from csvstore.engine.query import QueryEngine
from csvstore.engine.rwlock import ReadWriteLock
from csvstore.models.exceptions import InvalidArgumentError, StorageIOError
from csvstore.models.record import Record
from csvstore.models.result import QueryResult
from csvstore.models.table_file import TableFile

logger = logging.getLogger(__name__)


class TableStore:
    """
    Row-oriented store keeping each table as one delimited text file.

    Provides:
    - create_table(name, headers): Create an empty table
    - insert(table, record): Append a record
    - query(table, conditions): Filter records (AND of all conditions)
    - select(table, columns, conditions): Filter, then project columns
    - update(table, updates, conditions): Merge updates into matches
    - delete(table, conditions): Remove matches
    - query_sorted_range(table, column, order, limit): Sorted top-N
    - list_tables(): Names of all tables

    Architecture:
    - One reader/writer lock per store, shared by all tables
    - Reads take the lock shared; every mutation takes it exclusive, so all
      mutations across all tables are serialized
    - Mutations rewrite the whole table file; there is no index or log
    - Every operation rejects table names that would resolve outside the
      storage directory with InvalidArgumentError
    """

    TABLE_EXTENSION = ".csv"

    def __init__(self, storage_dir: str) -> None:
        """
        Initialize the store, creating the storage directory if needed.

        Args:
            storage_dir: Directory holding the table files.

        Raises:
            InvalidArgumentError: If storage_dir is empty.
            StorageIOError: If the directory cannot be created.
        """
        if not storage_dir or not storage_dir.strip():
            raise InvalidArgumentError("storage_dir cannot be empty")

        storage_dir = os.path.abspath(storage_dir)
        try:
            Path(storage_dir).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError(f"failed to create storage directory {storage_dir}: {e}") from e

        self._storage_dir = storage_dir
        self._lock = ReadWriteLock()
        self._mutations = MutationEngine(self._table_file)
        self._queries = QueryEngine(self._table_file)
        logger.info(f"Table store opened at {storage_dir}")

    @property
    def storage_dir(self) -> str:
        return self._storage_dir

    def get_table_path(self, table: str) -> str:
        """Return the file path for a table. Performs no I/O."""
        return os.path.join(self._storage_dir, table + self.TABLE_EXTENSION)

    def _table_file(self, table: str) -> TableFile:
        self._validate_name(table)
        return TableFile(table, self.get_table_path(table))

    def create_table(self, table: str, headers: Sequence[str]) -> None:
        """
        Create a new, empty table.

        Args:
            table: Table name; becomes the file name.
            headers: Unique column names, in on-disk order.

        Raises:
            InvalidArgumentError: If the name or headers are unusable.
            TableExistsError: If the table already exists.
        """
        with self._lock.write_locked():
            self._mutations.create(table, headers)

    def insert(self, table: str, record: Mapping[str, str]) -> Record:
        """
        Append a record.

        Returns:
            The stored record, including auto-filled id/created_at/updated_at.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        with self._lock.write_locked():
            return self._mutations.insert(table, record)

    def query(self, table: str, conditions: Iterable[ConditionLike] | None = None) -> QueryResult:
        """
        Return records matching every condition, in stored order.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        prepared = prepare_conditions(conditions)
        with self._lock.read_locked():
            return self._queries.query(table, prepared)

    def select(
        self,
        table: str,
        columns: Iterable[str] | None = None,
        conditions: Iterable[ConditionLike] | None = None,
    ) -> QueryResult:
        """
        Query, then project each record onto the given columns.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        prepared = prepare_conditions(conditions)
        with self._lock.read_locked():
            return self._queries.select(table, columns, prepared)

    def update(
        self,
        table: str,
        updates: Mapping[str, str],
        conditions: Iterable[ConditionLike] | None = None,
    ) -> QueryResult:
        """
        Update records matching every condition.

        Returns:
            QueryResult with the updated records; count 0 is not an error.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        prepared = prepare_conditions(conditions)
        with self._lock.write_locked():
            return self._mutations.update(table, updates, prepared)

    def delete(self, table: str, conditions: Iterable[ConditionLike] | None = None) -> QueryResult:
        """
        Delete records matching every condition.

        Returns:
            QueryResult with the deleted records; count 0 is not an error.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        prepared = prepare_conditions(conditions)
        with self._lock.write_locked():
            return self._mutations.delete(table, prepared)

    def query_sorted_range(
        self,
        table: str,
        sort_column: str,
        sort_order: str,
        limit: int,
    ) -> list[Record]:
        """
        Return the first limit records ordered by sort_column.

        Raises:
            TableNotFoundError: If the table does not exist.
            InvalidArgumentError: On a bad order, unknown column or negative limit.
        """
        with self._lock.read_locked():
            return self._queries.query_sorted_range(table, sort_column, sort_order, limit)

    def read_header(self, table: str) -> list[str]:
        """
        Return the table's column names.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        with self._lock.read_locked():
            return self._table_file(table).read_header()

    def list_tables(self) -> list[str]:
        """
        Return the names of all tables, sorted.

        Raises:
            StorageIOError: If the storage directory cannot be read.
        """
        with self._lock.read_locked():
            try:
                entries = list(os.scandir(self._storage_dir))
            except OSError as e:
                raise StorageIOError(f"failed to read directory {self._storage_dir}: {e}") from e

        tables = [
            entry.name[: -len(self.TABLE_EXTENSION)]
            for entry in entries
            if entry.name.endswith(self.TABLE_EXTENSION) and not entry.is_dir()
        ]
        return sorted(tables)

    def _validate_name(self, table: str) -> None:
        if not table or not table.strip():
            raise InvalidArgumentError("table name cannot be empty")
        separators = [os.sep] + ([os.altsep] if os.altsep else [])
        if any(sep in table for sep in separators) or table in (".", ".."):
            raise InvalidArgumentError(f"table name cannot contain a path: {table!r}")
