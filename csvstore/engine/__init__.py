"""
Storage engine: locking, condition matching, mutations and queries.
"""

from csvstore.engine.async_store import AsyncTableStore
from csvstore.engine.store import TableStore

__all__ = ["AsyncTableStore", "TableStore"]
