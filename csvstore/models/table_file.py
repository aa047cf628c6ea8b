"""
TableFile - one table persisted as a delimited text file.
"""

from collections.abc import Sequence

from csvstore.interfaces.table_codec import TableCodec
from csvstore.models.csv_codec import CSVCodec
from csvstore.models.exceptions import (
    CorruptDataError,
    RowDecodeError,
    StorageIOError,
    TableExistsError,
    TableNotFoundError,
)
from csvstore.models.record import Record, to_row


class TableFile:
    """
    On-disk representation of a single table.

    Structure:
    - First row: header (column names, in creation order)
    - Following rows: one record each, values positioned by header order

    Every read loads the whole file; every rewrite writes the whole file in
    one sequential write. There is no temp-file rename, so a crash during
    write() can leave a truncated file behind.

    Thread Safety:
    - None of its own. Callers serialize writers against readers.
    """

    def __init__(self, name: str, file_path: str, codec: TableCodec | None = None) -> None:
        """
        Initialize TableFile.

        Args:
            name: Table name, used in error messages.
            file_path: Path to the table file.
            codec: Row encoding; defaults to CSVCodec.
        """
        self.name = name
        self.file_path = file_path
        self._codec = codec or CSVCodec()

    def create(self, header: Sequence[str]) -> None:
        """
        Create the file holding only the header row.

        Raises:
            TableExistsError: If the file already exists.
            StorageIOError: If the file cannot be created or written.
        """
        content = self._codec.encode([list(header)])
        try:
            with open(self.file_path, "x", newline="", encoding="utf-8") as f:
                f.write(content)
        except FileExistsError as e:
            raise TableExistsError(self.name) from e
        except OSError as e:
            raise StorageIOError(f"failed to create table file {self.file_path}: {e}") from e

    def read(self) -> tuple[list[str], list[Record]]:
        """
        Read the whole table.

        Returns:
            Tuple of (header, records). Both are empty for an empty file.

        Raises:
            TableNotFoundError: If the file is missing or unreadable.
            CorruptDataError: If a row cannot be decoded or has the wrong width.
        """
        rows = self._read_rows()
        if not rows:
            return [], []

        _, header = rows[0]
        records: list[Record] = []
        for line, fields in rows[1:]:
            if len(fields) != len(header):
                raise CorruptDataError(
                    self.name,
                    f"expected {len(header)} fields, got {len(fields)}",
                    line,
                )
            records.append(dict(zip(header, fields)))
        return header, records

    def load_all(self) -> list[Record]:
        _, records = self.read()
        return records

    def read_header(self) -> list[str]:
        """
        Read only the header row.

        Raises:
            TableNotFoundError: If the file is missing or unreadable.
            CorruptDataError: If the header cannot be decoded or is absent.
        """
        try:
            with open(self.file_path, newline="", encoding="utf-8") as f:
                for _, fields in self._codec.read_rows(f):
                    return fields
        except OSError as e:
            raise TableNotFoundError(self.name, e.strerror or str(e)) from e
        except RowDecodeError as e:
            raise CorruptDataError(self.name, e.detail, e.line) from e
        except UnicodeDecodeError as e:
            raise CorruptDataError(self.name, str(e)) from e
        raise CorruptDataError(self.name, "missing header row", 1)

    def append(self, header: Sequence[str], record: Record) -> None:
        """
        Append one record after the existing rows.

        Raises:
            StorageIOError: If the file cannot be opened or written.
        """
        content = self._codec.encode([to_row(header, record)])
        try:
            with open(self.file_path, "a", newline="", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise StorageIOError(f"failed to append to table file {self.file_path}: {e}") from e

    def write(self, header: Sequence[str], records: Sequence[Record]) -> None:
        """
        Overwrite the file with the header followed by every record.

        Missing fields are written as empty strings; keys outside the header
        are dropped.

        Raises:
            StorageIOError: If the file cannot be opened or written.
        """
        rows = [list(header)]
        rows.extend(to_row(header, record) for record in records)
        content = self._codec.encode(rows)
        try:
            with open(self.file_path, "w", newline="", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise StorageIOError(f"failed to write table file {self.file_path}: {e}") from e

    def _read_rows(self) -> list[tuple[int, list[str]]]:
        try:
            with open(self.file_path, newline="", encoding="utf-8") as f:
                return list(self._codec.read_rows(f))
        except OSError as e:
            raise TableNotFoundError(self.name, e.strerror or str(e)) from e
        except RowDecodeError as e:
            raise CorruptDataError(self.name, e.detail, e.line) from e
        except UnicodeDecodeError as e:
            raise CorruptDataError(self.name, str(e)) from e
