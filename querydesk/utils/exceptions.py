"""Exception classes for querydesk."""

from querydesk.utils.constants import ErrorCode, ERROR_MESSAGES


class QueryDeskError(Exception):
    """Base exception class for querydesk."""

    def __init__(
        self,
        code: ErrorCode,
        message: str | None = None,
        details: dict | None = None
    ):
        self.code = code
        self.message = message or ERROR_MESSAGES.get(code, "Unknown error")
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert the exception to a dictionary format.

        Returns:
            A dictionary representation of the error.
        """
        return {
            "status": "error",
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details
            }
        }


class ValidationError(QueryDeskError):
    """Empty, too short or unclassifiable SQL, or an unusable config."""

    def __init__(self, message: str | None = None, details: dict | None = None):
        super().__init__(
            code=ErrorCode.INVALID_QUERY,
            message=message,
            details=details
        )


class ConnectionInvalidError(QueryDeskError):
    """The liveness probe failed before execution."""

    def __init__(self, message: str | None = None):
        super().__init__(
            code=ErrorCode.CONNECTION_INVALID,
            message=message
        )


class DriverNotFoundError(QueryDeskError):
    """No driver is registered (or installed) for the identifier."""

    def __init__(self, driver: str, hint: str | None = None):
        message = f"Database driver not found: {driver}"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(
            code=ErrorCode.DRIVER_NOT_FOUND,
            message=message,
            details={"driver": driver}
        )
        self.driver = driver


class ConnectionFailedError(QueryDeskError):
    """The driver rejected the handshake."""

    def __init__(self, cause: BaseException | str):
        super().__init__(
            code=ErrorCode.CONNECTION_FAILED,
            message=f"Failed to connect to database: {cause}"
        )
        self.cause = cause


class ExecutionError(QueryDeskError):
    """The driver rejected the statement at run time."""

    def __init__(self, message: str):
        super().__init__(
            code=ErrorCode.EXECUTION_FAILED,
            message=f"Database error: {message}"
        )


class UnexpectedError(QueryDeskError):
    """Anything not covered by the other error kinds."""

    def __init__(self, message: str):
        super().__init__(
            code=ErrorCode.UNEXPECTED,
            message=f"Unexpected error: {message}"
        )


class ConnectionNotFoundError(QueryDeskError):
    """No open connection is registered under the id."""

    def __init__(self, conn_id: int):
        super().__init__(
            code=ErrorCode.CONNECTION_NOT_FOUND,
            message=f"No open connection with id {conn_id}",
            details={"conn_id": conn_id}
        )


class QueryInProgressError(QueryDeskError):
    """A query is already running on the connection."""

    def __init__(self, conn_id: int):
        super().__init__(
            code=ErrorCode.QUERY_IN_PROGRESS,
            details={"conn_id": conn_id}
        )
