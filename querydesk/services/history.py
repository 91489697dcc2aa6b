"""In-memory query history."""

import logging
import threading
from typing import List, Optional

from querydesk.models.history import HistoryEntry
from querydesk.models.query import QueryResult

logger = logging.getLogger("querydesk.history")

DEFAULT_MAX_ENTRIES = 100


class QueryHistory:
    """Bounded, append-only log of executed queries.

    Features:
    - Ids start at 1 and are never reused, even after eviction
    - Oldest entry evicted once the log grows past ``max_entries``
    - Lookups by connection, recency, SQL text or id
    - Thread-safe: all access goes through one lock
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        """Initialize the history.

        Args:
            max_entries: Number of entries kept before the oldest is evicted.
        """
        self.max_entries = max_entries

        self._lock = threading.Lock()
        self._entries: List[HistoryEntry] = []
        self._next_id = 1

    def record(self, conn_id: int, result: QueryResult) -> HistoryEntry:
        """Record the outcome of an execution.

        Args:
            conn_id: Id of the connection the query ran on.
            result: The execution outcome.

        Returns:
            The stored entry.
        """
        with self._lock:
            entry = HistoryEntry(
                history_id=self._next_id,
                conn_id=conn_id,
                sql=result.sql,
                run_at=result.executed_at,
                duration_ms=result.execution_time_ms,
                success=result.success,
                error_message=result.error or "",
                row_count=result.row_count if result.success else 0
            )
            self._next_id += 1
            self._entries.append(entry)

            if len(self._entries) > self.max_entries:
                evicted = self._entries.pop(0)
                logger.debug("Evicted history entry %d", evicted.history_id)

            return entry

    def all(self) -> List[HistoryEntry]:
        """Get every entry, oldest first."""
        with self._lock:
            return list(self._entries)

    def for_connection(self, conn_id: int) -> List[HistoryEntry]:
        with self._lock:
            return [e for e in self._entries if e.conn_id == conn_id]

    def recent(self, count: int) -> List[HistoryEntry]:
        """Get the last ``count`` entries.

        Args:
            count: Maximum number of entries to return.

        Returns:
            Up to ``count`` entries, oldest to newest.
        """
        if count <= 0:
            return []
        with self._lock:
            return self._entries[-count:]

    def search(self, term: str) -> List[HistoryEntry]:
        """Find entries whose SQL contains ``term``, ignoring case."""
        needle = (term or "").lower()
        with self._lock:
            return [e for e in self._entries if needle in e.sql.lower()]

    def get(self, history_id: int) -> Optional[HistoryEntry]:
        with self._lock:
            for entry in self._entries:
                if entry.history_id == history_id:
                    return entry
            return None

    def clear(self) -> None:
        """Remove all entries and restart ids at 1."""
        with self._lock:
            self._entries.clear()
            self._next_id = 1
        logger.info("Query history cleared")

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    def __len__(self) -> int:
        return self.count
