"""
Abstract base classes for the table store.
"""

from csvstore.interfaces.table_codec import TableCodec

__all__ = ["TableCodec"]
