"""Service modules for querydesk."""

from querydesk.services.classifier import (
    StatementClassifier,
    classify,
    is_valid_query,
    is_read_only,
)
from querydesk.services.sanitizer import sanitize
from querydesk.services.drivers import (
    DriverAdapter,
    PostgresAdapter,
    SQLiteAdapter,
    register_driver,
    get_driver,
    available_drivers,
)
from querydesk.services.database import (
    Connection,
    open_connection,
    open_postgres,
    open_sqlite,
)
from querydesk.services.executor import QueryExecutor
from querydesk.services.history import QueryHistory
from querydesk.services.workspace import Workspace

__all__ = [
    # Statements
    "StatementClassifier",
    "classify",
    "is_valid_query",
    "is_read_only",
    "sanitize",
    # Drivers
    "DriverAdapter",
    "PostgresAdapter",
    "SQLiteAdapter",
    "register_driver",
    "get_driver",
    "available_drivers",
    # Connections
    "Connection",
    "open_connection",
    "open_postgres",
    "open_sqlite",
    # Execution
    "QueryExecutor",
    # History
    "QueryHistory",
    # Session
    "Workspace",
]
