"""Integration tests against a PostgreSQL server.

Set QUERYDESK_TEST_PG_URL (and optionally QUERYDESK_TEST_PG_USER /
QUERYDESK_TEST_PG_PASSWORD) to point at a server; tests skip otherwise.
"""

import os
import pytest
import pytest_asyncio

from querydesk.models.connection import ConnectionConfig
from querydesk.services.database import open_connection
from querydesk.services.executor import QueryExecutor
from querydesk.utils.exceptions import QueryDeskError


# Skip integration tests if no database is available
pytestmark = pytest.mark.integration


class TestPostgresIntegration:
    """PostgreSQL integration tests."""

    @pytest_asyncio.fixture
    async def connection(self):
        """Open a PostgreSQL connection."""
        config = ConnectionConfig(
            conn_id=1,
            name="integration",
            url=os.environ.get("QUERYDESK_TEST_PG_URL", "postgresql://localhost:5432/postgres"),
            username=os.environ.get("QUERYDESK_TEST_PG_USER", "postgres"),
            password=os.environ.get("QUERYDESK_TEST_PG_PASSWORD", ""),
            driver="postgresql"
        )
        try:
            connection = await open_connection(config, connect_timeout=3)
        except QueryDeskError as e:
            pytest.skip(f"Database not available: {e.message}")
        yield connection
        await connection.close()

    @pytest.mark.asyncio
    async def test_select_one(self, connection):
        """Test a row-returning statement."""
        result = await QueryExecutor(connection).execute("SELECT 1")
        assert result.success is True
        assert result.rows == [[1]]
        assert result.row_count == 1

    @pytest.mark.asyncio
    async def test_duplicate_columns(self, connection):
        """Test that duplicate column names survive."""
        result = await QueryExecutor(connection).execute("SELECT 1 AS a, 2 AS a")
        assert result.columns == ["a", "a"]
        assert result.rows == [[1, 2]]

    @pytest.mark.asyncio
    async def test_mutations(self, connection):
        """Test the mutation path on a temporary table."""
        executor = QueryExecutor(connection)
        created = await executor.execute("CREATE TEMP TABLE qd_t (x INTEGER)")
        assert created.rows == [[0]]

        inserted = await executor.execute("INSERT INTO qd_t VALUES (1), (2)")
        assert inserted.rows == [[2]]

        updated = await executor.execute("UPDATE qd_t SET x=1 WHERE 1=0")
        assert updated.columns == ["Rows Affected"]
        assert updated.rows == [[0]]

    @pytest.mark.asyncio
    async def test_parameterized(self, connection):
        """Test $n placeholders."""
        result = await QueryExecutor(connection).execute_parameterized(
            "SELECT $1::int + $2::int AS total", [2, 3]
        )
        assert result.columns == ["total"]
        assert result.rows == [[5]]

    @pytest.mark.asyncio
    async def test_driver_error(self, connection):
        """Test a rejected statement."""
        result = await QueryExecutor(connection).execute("SELECT * FROM qd_missing_table")
        assert result.success is False
        assert result.error.startswith("Database error:")

    @pytest.mark.asyncio
    async def test_closed_connection(self, connection):
        """Test execution after close."""
        await connection.close()
        result = await QueryExecutor(connection).execute("SELECT 1")
        assert result.success is False
        assert "not valid" in result.error
