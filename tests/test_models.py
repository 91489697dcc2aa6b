"""Tests for data models."""

import pytest
from datetime import datetime
from pydantic import TypeAdapter, ValidationError

from querydesk.models.query import (
    QueryFailure,
    QueryResult,
    QuerySuccess,
    StatementKind,
)
from querydesk.models.connection import ConnectionConfig, ConnectionStatus
from querydesk.models.history import HistoryEntry


class TestQueryModels:
    """Query result model tests."""

    def test_success_row_count(self):
        """Test that row_count follows the rows."""
        result = QuerySuccess(
            sql="SELECT id, name FROM users",
            columns=["id", "name"],
            rows=[[1, "a"], [2, None]],
            execution_time_ms=4.2
        )
        assert result.success is True
        assert result.row_count == 2
        assert result.error is None
        assert result.status == "success"

    def test_success_duplicate_columns(self):
        """Test that duplicate column names are preserved in order."""
        result = QuerySuccess(sql="SELECT 1 AS a, 2 AS a", columns=["a", "a"], rows=[[1, 2]])
        assert result.columns == ["a", "a"]

    def test_success_empty(self):
        """Test a result with no rows."""
        result = QuerySuccess(sql="SELECT * FROM t", columns=["x"])
        assert result.rows == []
        assert result.row_count == 0

    def test_failure(self):
        """Test a failure result."""
        result = QueryFailure(sql="SELEC", error="Invalid SQL query", execution_time_ms=0.1)
        assert result.success is False
        assert result.row_count == 0
        assert result.status == "error"
        assert not hasattr(result, "columns")

    def test_results_are_frozen(self):
        """Test that results cannot be reassigned."""
        result = QueryFailure(sql="x", error="boom")
        with pytest.raises(ValidationError):
            result.error = "other"

    def test_dump_includes_row_count(self):
        """Test serialization of a success."""
        data = QuerySuccess(sql="SELECT 1", columns=["1"], rows=[[1]]).model_dump(mode="json")
        assert data["row_count"] == 1
        assert data["status"] == "success"
        assert isinstance(data["executed_at"], str)

    def test_dump_binary_cells(self):
        """Test that non-UTF-8 binary cells serialize as base64 text."""
        result = QuerySuccess(
            sql="SELECT data FROM blobs",
            columns=["data", "label"],
            rows=[[b"\xff\x00", "a"], [None, "b"]]
        )
        data = result.model_dump(mode="json")
        assert data["rows"] == [["/wA=", "a"], [None, "b"]]
        assert result.model_dump()["rows"][0][0] == b"\xff\x00"

    def test_discriminated_union(self):
        """Test that the status field selects the variant."""
        adapter = TypeAdapter(QueryResult)
        success = adapter.validate_python(
            {"status": "success", "sql": "SELECT 1", "columns": ["1"], "rows": [[1]]}
        )
        failure = adapter.validate_python(
            {"status": "error", "sql": "SELECT 1", "error": "nope"}
        )
        assert isinstance(success, QuerySuccess)
        assert isinstance(failure, QueryFailure)

    def test_statement_kind_values(self):
        """Test StatementKind enum values."""
        assert StatementKind.SELECT.value == "SELECT"
        assert StatementKind.UNKNOWN.value == "UNKNOWN"


class TestConnectionModels:
    """Connection model tests."""

    def test_connection_config(self):
        """Test ConnectionConfig fields."""
        config = ConnectionConfig(
            conn_id=2,
            name="Test PostgreSQL Connection",
            url="postgresql://localhost:5432/test",
            username="testuser",
            password="testpass",
            driver="postgresql"
        )
        assert config.is_usable() is True
        assert config.display_name == "Test PostgreSQL Connection"

    def test_password_not_in_repr(self):
        """Test that the password is excluded from repr."""
        config = ConnectionConfig(url="sqlite:///x.db", username="u", password="s3cret")
        assert "s3cret" not in repr(config)

    def test_config_is_frozen(self):
        """Test that a config cannot be mutated."""
        config = ConnectionConfig(url="sqlite:///x.db", username="u")
        with pytest.raises(ValidationError):
            config.url = "sqlite:///y.db"

    def test_unusable_config(self):
        """Test that URL and username are required for use."""
        assert ConnectionConfig(url="", username="u").is_usable() is False
        assert ConnectionConfig(url="sqlite:///x.db", username="  ").is_usable() is False

    def test_display_name_fallback(self):
        """Test display name when no name is given."""
        config = ConnectionConfig(conn_id=3, url="sqlite:///x.db", username="u", driver="sqlite")
        assert config.display_name == "sqlite #3"

    def test_connection_status(self):
        """Test ConnectionStatus."""
        status = ConnectionStatus(
            conn_id=1,
            name="mydb",
            driver="sqlite",
            connected=False,
            error="Connection is closed"
        )
        assert status.connected is False
        assert status.latency_ms is None


class TestHistoryModels:
    """History entry model tests."""

    def _entry(self, sql: str) -> HistoryEntry:
        return HistoryEntry(
            history_id=1,
            conn_id=1,
            sql=sql,
            run_at=datetime(2024, 1, 2, 3, 4, 5),
            duration_ms=12.0,
            success=True,
            row_count=3
        )

    def test_summary_short_sql(self):
        """Test summary for short SQL."""
        summary = self._entry("SELECT 1").summary()
        assert summary == "[2024-01-02T03:04:05] SELECT 1 (12ms, 3 rows)"

    def test_summary_truncates_long_sql(self):
        """Test that long SQL is cut at 50 characters."""
        sql = "SELECT " + ", ".join(f"column_{i}" for i in range(20)) + " FROM t"
        summary = self._entry(sql).summary()
        assert sql[:50] + "..." in summary

    def test_defaults(self):
        """Test default error message and row count."""
        entry = HistoryEntry(
            history_id=1,
            conn_id=1,
            sql="x",
            run_at=datetime.now(),
            duration_ms=0,
            success=False
        )
        assert entry.error_message == ""
        assert entry.row_count == 0
