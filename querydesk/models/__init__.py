"""Data models for querydesk."""

from querydesk.models.query import (
    StatementKind,
    QuerySuccess,
    QueryFailure,
    QueryResult,
)
from querydesk.models.connection import (
    ConnectionConfig,
    ConnectionStatus,
)
from querydesk.models.history import HistoryEntry

__all__ = [
    "StatementKind",
    "QuerySuccess",
    "QueryFailure",
    "QueryResult",
    "ConnectionConfig",
    "ConnectionStatus",
    "HistoryEntry",
]
