"""
TableCodec abstract base class for on-disk row encodings.
"""

import io
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from typing import TextIO


class TableCodec(ABC):
    """
    Encodes and decodes rows of text fields to and from a text stream.

    A table is stored header-first: the first row holds the column names,
    every following row holds one record's values in header order.

    Implementations:
    - CSVCodec: comma-delimited text with minimal quoting
    """

    @abstractmethod
    def write_rows(self, stream: TextIO, rows: Iterable[Sequence[str]]) -> None:
        """
        Write rows to a text stream opened with newline="".

        Args:
            stream: Destination stream.
            rows: Rows of field values, written in order.
        """
        pass

    @abstractmethod
    def read_rows(self, stream: TextIO) -> Iterator[tuple[int, list[str]]]:
        """
        Read rows from a text stream opened with newline="".

        Blank lines are skipped.

        Args:
            stream: Source stream.

        Returns:
            Iterator yielding (line_number, fields) tuples; line_number is
            the 1-based line on which the row ends.

        Raises:
            RowDecodeError: If the content is malformed.
        """
        pass

    def encode(self, rows: Iterable[Sequence[str]]) -> str:
        """Encode rows into a single string."""
        buffer = io.StringIO(newline="")
        self.write_rows(buffer, rows)
        return buffer.getvalue()
