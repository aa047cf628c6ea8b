"""
Data models for the table store.
"""

from csvstore.models.condition import Operator, QueryCondition
from csvstore.models.csv_codec import CSVCodec
from csvstore.models.exceptions import (
    CorruptDataError,
    InvalidArgumentError,
    StorageIOError,
    StoreError,
    TableExistsError,
    TableNotFoundError,
)
from csvstore.models.record import Record
from csvstore.models.result import QueryResult
from csvstore.models.table_file import TableFile

__all__ = [
    "Operator",
    "QueryCondition",
    "CSVCodec",
    "CorruptDataError",
    "InvalidArgumentError",
    "StorageIOError",
    "StoreError",
    "TableExistsError",
    "TableNotFoundError",
    "Record",
    "QueryResult",
    "TableFile",
]
