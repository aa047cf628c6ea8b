"""
QueryResult returned by filtering, update and delete operations.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from csvstore.models.record import Record


@dataclass
class QueryResult:
    """
    Ordered records plus their count.

    For update the records are the post-update state; for delete they are
    the rows as they were before removal.
    """

    records: list[Record] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)
