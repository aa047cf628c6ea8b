"""
Custom exceptions for the table store.
"""


class StoreError(Exception):
    """Base class for every error raised by the table store."""


class TableNotFoundError(StoreError, LookupError):
    """
    Raised when a table file is missing or cannot be read.
    """

    def __init__(self, table: str, reason: str | None = None):
        """
        Initialize not-found error.

        Args:
            table: Name of the table that could not be read.
            reason: Optional detail from the underlying failure.
        """
        self.table = table
        self.reason = reason
        message = f"table {table} not found"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class TableExistsError(StoreError):
    """Raised when creating a table whose file already exists."""

    def __init__(self, table: str):
        self.table = table
        super().__init__(f"table {table} already exists")


class CorruptDataError(StoreError):
    """
    Raised when a table file cannot be decoded.

    This is a fail-fast error: rows are never skipped or repaired.
    """

    def __init__(self, table: str, detail: str, line: int | None = None):
        """
        Initialize corruption error.

        Args:
            table: Name of the table being decoded.
            detail: What was wrong with the content.
            line: 1-based line in the file where decoding failed, if known.
        """
        self.table = table
        self.detail = detail
        self.line = line
        where = f" at line {line}" if line is not None else ""
        super().__init__(f"corrupt data in table {table}{where}: {detail}")


class InvalidArgumentError(StoreError, ValueError):
    """Raised when a caller passes an argument the store cannot act on."""


class StorageIOError(StoreError, OSError):
    """Raised when the storage directory or a table file cannot be written."""


class RowDecodeError(ValueError):
    """
    Raised by a table codec when delimited content is malformed.

    Table files translate it into CorruptDataError, adding the table name.
    """

    def __init__(self, detail: str, line: int):
        self.detail = detail
        self.line = line
        super().__init__(f"line {line}: {detail}")
