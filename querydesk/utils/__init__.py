"""Utility modules for querydesk."""

from querydesk.utils.constants import ErrorCode, ERROR_MESSAGES, ROWS_AFFECTED_COLUMN
from querydesk.utils.exceptions import (
    QueryDeskError,
    ValidationError,
    ConnectionInvalidError,
    DriverNotFoundError,
    ConnectionFailedError,
    ExecutionError,
    UnexpectedError,
    ConnectionNotFoundError,
    QueryInProgressError,
)

__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "ROWS_AFFECTED_COLUMN",
    "QueryDeskError",
    "ValidationError",
    "ConnectionInvalidError",
    "DriverNotFoundError",
    "ConnectionFailedError",
    "ExecutionError",
    "UnexpectedError",
    "ConnectionNotFoundError",
    "QueryInProgressError",
]
