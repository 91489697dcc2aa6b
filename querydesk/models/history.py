"""Query history data models."""

from pydantic import BaseModel, ConfigDict
from datetime import datetime

SUMMARY_SQL_LENGTH = 50


class HistoryEntry(BaseModel):
    """One recorded execution, immutable once stored."""

    model_config = ConfigDict(frozen=True)

    history_id: int
    conn_id: int
    sql: str
    run_at: datetime
    duration_ms: float
    success: bool
    error_message: str = ""
    row_count: int = 0

    def summary(self) -> str:
        """Render a one-line description for history listings.

        Returns:
            The entry as ``[run_at] sql (Nms, N rows)`` with long SQL cut.
        """
        sql = self.sql
        if len(sql) > SUMMARY_SQL_LENGTH:
            sql = sql[:SUMMARY_SQL_LENGTH] + "..."
        return (
            f"[{self.run_at.isoformat()}] {sql} "
            f"({self.duration_ms:.0f}ms, {self.row_count} rows)"
        )
