"""
MutationEngine - create, insert, update and delete over table files.
"""

import logging
from collections.abc import Callable, Mapping, Sequence

from csvstore.engine.matcher import matches_conditions
from csvstore.engine.stamps import new_record_id, now_timestamp
from csvstore.models.condition import QueryCondition
from csvstore.models.exceptions import CorruptDataError, InvalidArgumentError, StorageIOError
from csvstore.models.record import Record, materialize
from csvstore.models.result import QueryResult
from csvstore.models.table_file import TableFile

logger = logging.getLogger(__name__)


class MutationEngine:
    """
    Applies mutations as read-whole, modify-in-memory, write-whole sequences.

    Responsibilities:
    - Create a table file from a header
    - Append inserted rows, auto-filling id/created_at/updated_at
    - Rewrite the table after update/delete, only when rows were affected

    Thread Safety:
    - Holds no lock. The caller must hold the store's exclusive lock for the
      whole call so load and save phases of two mutations never interleave.
    """

    ID_COLUMN = "id"
    CREATED_AT_COLUMN = "created_at"
    UPDATED_AT_COLUMN = "updated_at"

    def __init__(self, table_files: Callable[[str], TableFile]) -> None:
        """
        Initialize mutation engine.

        Args:
            table_files: Resolves a table name to its TableFile.
        """
        self._table_files = table_files

    def create(self, table: str, header: Sequence[str]) -> None:
        """
        Create an empty table.

        Raises:
            InvalidArgumentError: If the header is empty or has blank or
                duplicate column names.
            TableExistsError: If the table already exists.
        """
        header = list(header)
        if not header:
            raise InvalidArgumentError(f"table {table} needs at least one column")
        if any(not column for column in header):
            raise InvalidArgumentError(f"table {table} has a blank column name")
        if len(set(header)) != len(header):
            raise InvalidArgumentError(f"table {table} has duplicate column names: {header}")

        self._table_files(table).create(header)
        logger.info(f"Created table {table} with columns {header}")

    def insert(self, table: str, record: Mapping[str, str]) -> Record:
        """
        Append a record to the table.

        Columns missing from the record are stored empty; keys outside the
        header are dropped. When the header has them and the caller left them
        empty, id gets a time-derived token and created_at/updated_at both get
        the same current timestamp.

        Returns:
            The record exactly as written.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        table_file = self._table_files(table)
        header = table_file.read_header()

        row = materialize(header, record)
        if self.ID_COLUMN in header and not record.get(self.ID_COLUMN):
            row[self.ID_COLUMN] = new_record_id()

        now = now_timestamp()
        for column in (self.CREATED_AT_COLUMN, self.UPDATED_AT_COLUMN):
            if column in header and not record.get(column):
                row[column] = now

        table_file.append(header, row)
        logger.debug(f"Inserted 1 row into {table}")
        return dict(row)

    def update(
        self,
        table: str,
        updates: Mapping[str, str],
        conditions: Sequence[QueryCondition],
    ) -> QueryResult:
        """
        Merge updates into every record matching all conditions.

        updated_at, when in the header, is always refreshed, even if the
        updates name it. Keys outside the header are ignored.

        Returns:
            QueryResult with the matched records in their post-update state.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        table_file = self._table_files(table)
        header, records = self._read_table(table_file)

        changes = {column: value for column, value in updates.items() if column in header}
        stamp = self.UPDATED_AT_COLUMN in header

        updated: list[Record] = []
        for record in records:
            if not matches_conditions(record, conditions):
                continue
            record.update(changes)
            if stamp:
                record[self.UPDATED_AT_COLUMN] = now_timestamp()
            updated.append(dict(record))

        if updated:
            self._save(table_file, header, records)
        logger.debug(f"Updated {len(updated)} of {len(records)} rows in {table}")
        return QueryResult(updated)

    def delete(self, table: str, conditions: Sequence[QueryCondition]) -> QueryResult:
        """
        Remove every record matching all conditions.

        Returns:
            QueryResult with the removed records as they were before deletion.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        table_file = self._table_files(table)
        header, records = self._read_table(table_file)

        kept: list[Record] = []
        deleted: list[Record] = []
        for record in records:
            if matches_conditions(record, conditions):
                deleted.append(dict(record))
            else:
                kept.append(record)

        if deleted:
            self._save(table_file, header, kept)
        logger.debug(f"Deleted {len(deleted)} of {len(records)} rows from {table}")
        return QueryResult(deleted)

    def _read_table(self, table_file: TableFile) -> tuple[list[str], list[Record]]:
        header, records = table_file.read()
        if not header:
            raise CorruptDataError(table_file.name, "missing header row", 1)
        return header, records

    def _save(self, table_file: TableFile, header: list[str], records: list[Record]) -> None:
        try:
            table_file.write(header, records)
        except StorageIOError as e:
            logger.error(f"Rewrite of table {table_file.name} failed: {e}")
            raise
