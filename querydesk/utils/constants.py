"""Constants for querydesk."""

from enum import Enum


class ErrorCode(str, Enum):
    """Error code enumeration."""

    INVALID_QUERY = "ERR_001"
    CONNECTION_INVALID = "ERR_002"
    DRIVER_NOT_FOUND = "ERR_003"
    CONNECTION_FAILED = "ERR_004"
    EXECUTION_FAILED = "ERR_005"
    UNEXPECTED = "ERR_006"
    CONNECTION_NOT_FOUND = "ERR_007"
    QUERY_IN_PROGRESS = "ERR_008"


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_QUERY: "Invalid SQL query",
    ErrorCode.CONNECTION_INVALID: "Database connection is not valid",
    ErrorCode.DRIVER_NOT_FOUND: "Database driver not found",
    ErrorCode.CONNECTION_FAILED: "Failed to connect to database",
    ErrorCode.EXECUTION_FAILED: "Database error",
    ErrorCode.UNEXPECTED: "Unexpected error",
    ErrorCode.CONNECTION_NOT_FOUND: "No open connection with that id",
    ErrorCode.QUERY_IN_PROGRESS: "A query is already running on this connection",
}

ROWS_AFFECTED_COLUMN = "Rows Affected"
