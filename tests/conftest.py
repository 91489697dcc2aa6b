"""Pytest configuration and fixtures for querydesk tests."""

import pytest
import pytest_asyncio

from querydesk.models.connection import ConnectionConfig
from querydesk.services.database import open_connection


# Markers for test categorization
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test items after collection."""
    items.sort(key=lambda item: (item.get_closest_marker("integration") is not None, item.name))


@pytest.fixture
def sqlite_config():
    """In-memory SQLite connection config."""
    return ConnectionConfig(
        conn_id=1,
        name="memory",
        url="sqlite:///:memory:",
        username="tester",
        driver="sqlite"
    )


@pytest_asyncio.fixture
async def sqlite_connection(sqlite_config):
    """Open an in-memory SQLite connection, closed after the test."""
    connection = await open_connection(sqlite_config)
    yield connection
    await connection.close()
