"""
AsyncTableStore - asyncio facade over TableStore.
"""

import asyncio
from collections.abc import Callable, Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import TypeVar

from csvstore.engine.matcher import ConditionLike
from csvstore.engine.store import TableStore
from csvstore.models.exceptions import InvalidArgumentError
from csvstore.models.record import Record
from csvstore.models.result import QueryResult

T = TypeVar("T")


class AsyncTableStore:
    """
    Coroutine API for a TableStore.

    Each call runs the blocking store operation in a thread pool, so the
    event loop never waits on file I/O. Locking is unchanged: the wrapped
    TableStore still serializes mutations and shares reads.
    """

    def __init__(self, storage_dir: str, max_workers: int | None = None) -> None:
        """
        Initialize the async store.

        Args:
            storage_dir: Directory holding the table files.
            max_workers: Thread pool size (default: ThreadPoolExecutor's default).
        """
        if max_workers is not None and max_workers <= 0:
            raise InvalidArgumentError(f"max_workers must be positive, got {max_workers}")

        self._store = TableStore(storage_dir)
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="csvstore"
        )
        self._closed = False

    @property
    def store(self) -> TableStore:
        return self._store

    def get_table_path(self, table: str) -> str:
        return self._store.get_table_path(table)

    async def _run(self, func: Callable[..., T], *args) -> T:
        """Run a blocking store call in the thread pool."""
        if self._closed:
            raise RuntimeError("AsyncTableStore is closed")
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, partial(func, *args))

    async def create_table(self, table: str, headers: Sequence[str]) -> None:
        await self._run(self._store.create_table, table, headers)

    async def insert(self, table: str, record: Mapping[str, str]) -> Record:
        return await self._run(self._store.insert, table, record)

    async def query(
        self, table: str, conditions: Iterable[ConditionLike] | None = None
    ) -> QueryResult:
        return await self._run(self._store.query, table, conditions)

    async def select(
        self,
        table: str,
        columns: Iterable[str] | None = None,
        conditions: Iterable[ConditionLike] | None = None,
    ) -> QueryResult:
        return await self._run(self._store.select, table, columns, conditions)

    async def update(
        self,
        table: str,
        updates: Mapping[str, str],
        conditions: Iterable[ConditionLike] | None = None,
    ) -> QueryResult:
        return await self._run(self._store.update, table, updates, conditions)

    async def delete(
        self, table: str, conditions: Iterable[ConditionLike] | None = None
    ) -> QueryResult:
        return await self._run(self._store.delete, table, conditions)

    async def query_sorted_range(
        self, table: str, sort_column: str, sort_order: str, limit: int
    ) -> list[Record]:
        return await self._run(
            self._store.query_sorted_range, table, sort_column, sort_order, limit
        )

    async def read_header(self, table: str) -> list[str]:
        return await self._run(self._store.read_header, table)

    async def list_tables(self) -> list[str]:
        return await self._run(self._store.list_tables)

    async def close(self) -> None:
        """Shut down the thread pool, waiting for running calls to finish."""
        if self._closed:
            return
        self._closed = True
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._executor.shutdown)

    async def __aenter__(self) -> "AsyncTableStore":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
