"""
Record helpers.

A record is a plain mapping of column name to text value. Values are never
typed; numeric meaning is inferred only while comparing.
"""

from collections.abc import Iterable, Mapping, Sequence

Record = dict[str, str]


def materialize(header: Sequence[str], record: Mapping[str, str]) -> Record:
    """
    Build a record holding exactly the header's columns.

    Absent columns become the empty string; keys outside the header are dropped.
    """
    return {column: record.get(column, "") for column in header}


def to_row(header: Sequence[str], record: Mapping[str, str]) -> list[str]:
    """Position a record's values by header order."""
    return [record.get(column, "") for column in header]


def project(record: Mapping[str, str], columns: Iterable[str]) -> Record:
    """
    Restrict a record to the requested columns.

    Columns missing from the record are left out rather than reported.
    """
    wanted = set(columns)
    return {column: value for column, value in record.items() if column in wanted}
