"""
Shared pytest fixtures for table store tests.
"""

import os
import tempfile

import pytest
import pytest_asyncio

from csvstore.engine.async_store import AsyncTableStore
from csvstore.engine.store import TableStore
from csvstore.models.table_file import TableFile


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def store(temp_dir):
    """Provide a TableStore rooted in a fresh directory."""
    return TableStore(storage_dir=os.path.join(temp_dir, "tables"))


@pytest_asyncio.fixture
async def async_store(temp_dir):
    """Provide an AsyncTableStore rooted in a fresh directory."""
    async with AsyncTableStore(storage_dir=os.path.join(temp_dir, "tables")) as s:
        yield s


@pytest.fixture
def table_file(temp_dir):
    """Provide a TableFile for a not-yet-created table."""
    return TableFile("items", os.path.join(temp_dir, "items.csv"))


@pytest.fixture
def products(store):
    """Provide a store with a seeded products table."""
    store.create_table("products", ["id", "name", "category", "price"])
    rows = [
        {"id": "1", "name": "Laptop", "category": "Electronics", "price": "999.99"},
        {"id": "2", "name": "Mouse", "category": "Electronics", "price": "19.99"},
        {"id": "3", "name": "Desk", "category": "Furniture", "price": "599.99"},
        {"id": "4", "name": "Notebook", "category": "Stationery", "price": "4.50"},
    ]
    for row in rows:
        store.insert("products", row)
    return store


@pytest.fixture
def range_items(store):
    """Provide a store with a table whose value column is unsorted."""
    store.create_table("range_items", ["id", "name", "value"])
    rows = [
        {"id": "1", "name": "ItemA", "value": "100"},
        {"id": "2", "name": "ItemB", "value": "200"},
        {"id": "3", "name": "ItemC", "value": "150"},
        {"id": "4", "name": "ItemD", "value": "250"},
        {"id": "5", "name": "ItemE", "value": "050"},
    ]
    for row in rows:
        store.insert("range_items", row)
    return store
