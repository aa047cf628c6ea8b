"""
File-backed row store keeping each table as a delimited text file.

This package provides a small, human-inspectable table store with:
- create_table(name, headers) - One file per table, header first
- insert(table, record) - Append, auto-filling id/created_at/updated_at
- query(table, conditions) - Full scan with AND-ed predicates
- select(table, columns, conditions) - Query plus column projection
- update(table, updates, conditions) / delete(table, conditions) - Whole-table rewrite
- query_sorted_range(table, column, order, limit) - Sorted top-N scan
"""

from csvstore.engine import AsyncTableStore, TableStore
from csvstore.models import (
    CorruptDataError,
    InvalidArgumentError,
    Operator,
    QueryCondition,
    QueryResult,
    Record,
    StorageIOError,
    StoreError,
    TableExistsError,
    TableNotFoundError,
)

__all__ = [
    "AsyncTableStore",
    "TableStore",
    "CorruptDataError",
    "InvalidArgumentError",
    "Operator",
    "QueryCondition",
    "QueryResult",
    "Record",
    "StorageIOError",
    "StoreError",
    "TableExistsError",
    "TableNotFoundError",
]
