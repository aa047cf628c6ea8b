"""
CSVCodec - comma-delimited encoding of table rows.
"""

import csv
from collections.abc import Iterable, Iterator, Sequence
from typing import TextIO

from csvstore.interfaces.table_codec import TableCodec
from csvstore.models.exceptions import RowDecodeError


class CSVCodec(TableCodec):
    """
    Delimited-text codec built on the standard csv module.

    Fields containing the delimiter, the quote character, CR or LF are
    quoted; embedded quotes are doubled. Parsing is strict: stray characters
    after a closing quote and quote characters inside an unquoted field are
    both reported as corruption.
    """

    DELIMITER = ","
    QUOTE_CHAR = '"'
    LINE_TERMINATOR = "\n"

    def _dialect(self) -> dict:
        return {
            "delimiter": self.DELIMITER,
            "quotechar": self.QUOTE_CHAR,
            "lineterminator": self.LINE_TERMINATOR,
            "quoting": csv.QUOTE_MINIMAL,
            "doublequote": True,
        }

    def write_rows(self, stream: TextIO, rows: Iterable[Sequence[str]]) -> None:
        writer = csv.writer(stream, **self._dialect())
        writer.writerows(rows)

    def read_rows(self, stream: TextIO) -> Iterator[tuple[int, list[str]]]:
        # csv.reader pulls exactly the physical lines of one row per step,
        # so `raw` holds the source text of the row just parsed.
        raw: list[str] = []

        def lines() -> Iterator[str]:
            for line in stream:
                raw.append(line)
                yield line

        reader = csv.reader(lines(), strict=True, **self._dialect())
        try:
            for fields in reader:
                text = "".join(raw)
                raw.clear()
                if not fields:
                    continue
                if self._has_bare_quote(text):
                    raise RowDecodeError('bare " in non-quoted field', reader.line_num)
                yield reader.line_num, fields
        except csv.Error as e:
            raise RowDecodeError(str(e), reader.line_num) from e

    def _has_bare_quote(self, text: str) -> bool:
        """Check whether a quote character appears inside an unquoted field."""
        in_quotes = False
        field_start = True
        i = 0
        while i < len(text):
            ch = text[i]
            if in_quotes:
                if ch == self.QUOTE_CHAR:
                    if text[i + 1 : i + 2] == self.QUOTE_CHAR:
                        i += 2
                        continue
                    in_quotes = False
            elif ch == self.QUOTE_CHAR:
                if not field_start:
                    return True
                in_quotes = True
                field_start = False
            elif ch == self.DELIMITER or ch in "\r\n":
                field_start = True
            else:
                field_start = False
            i += 1
        return False
