"""Query-related data models."""

import base64
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_serializer
from typing import Annotated, Any, Literal, Optional, Union
from datetime import datetime


def _json_cell(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    return value


class StatementKind(str, Enum):
    """Coarse statement kind derived from the leading keyword."""

    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    CREATE = "CREATE"
    DROP = "DROP"
    UNKNOWN = "UNKNOWN"


class QuerySuccess(BaseModel):
    """Outcome of a statement the driver executed.

    Column names are kept as an ordered list so duplicate names survive;
    every row is aligned positionally with ``columns``.
    """

    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    sql: str
    columns: list[str]
    rows: list[list[Any]] = Field(default_factory=list)
    execution_time_ms: float = 0.0
    executed_at: datetime = Field(default_factory=datetime.now)

    @field_serializer("rows", when_used="json")
    def serialize_rows(self, rows: list[list[Any]]) -> list[list[Any]]:
        """Render binary cells (BLOB, bytea) as base64 text."""
        return [[_json_cell(value) for value in row] for row in rows]

    @computed_field
    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def success(self) -> bool:
        return True

    @property
    def error(self) -> Optional[str]:
        return None


class QueryFailure(BaseModel):
    """Outcome of an execution attempt that did not complete."""

    model_config = ConfigDict(frozen=True)

    status: Literal["error"] = "error"
    sql: str
    error: str
    execution_time_ms: float = 0.0
    executed_at: datetime = Field(default_factory=datetime.now)

    @property
    def success(self) -> bool:
        return False

    @property
    def row_count(self) -> int:
        return 0


QueryResult = Annotated[
    Union[QuerySuccess, QueryFailure],
    Field(discriminator="status")
]
