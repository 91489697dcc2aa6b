"""Open connections, in-flight tracking and shared history."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Set

from querydesk.models.connection import ConnectionConfig, ConnectionStatus
from querydesk.models.query import QueryResult
from querydesk.services.classifier import StatementClassifier
from querydesk.services.database import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_PROBE_TIMEOUT,
    Connection,
    open_connection,
)
from querydesk.services.executor import QueryExecutor
from querydesk.services.history import QueryHistory
from querydesk.utils.exceptions import ConnectionNotFoundError, QueryInProgressError

logger = logging.getLogger("querydesk.workspace")


class Workspace:
    """Session state behind the tool surface.

    This class provides:
    - Open connections keyed by connection id
    - One query in flight per connection; a second submission is rejected
    - A shared QueryHistory that records every execution
    """

    def __init__(
        self,
        history: Optional[QueryHistory] = None,
        classifier: Optional[StatementClassifier] = None,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    ):
        self.history = history if history is not None else QueryHistory()
        self.classifier = classifier if classifier is not None else StatementClassifier()
        self.probe_timeout = probe_timeout
        self.connect_timeout = connect_timeout

        self._connections: Dict[int, Connection] = {}
        self._busy: Set[int] = set()

    async def connect(self, config: ConnectionConfig) -> Connection:
        """Open a connection and register it under its id.

        A config with ``conn_id`` 0 gets the next free id. An open
        connection already registered under the same id is closed first.

        Args:
            config: Connection configuration.

        Returns:
            The opened connection.
        """
        if config.conn_id == 0:
            config = config.model_copy(update={"conn_id": self._next_conn_id()})

        connection = await open_connection(
            config,
            probe_timeout=self.probe_timeout,
            connect_timeout=self.connect_timeout
        )

        previous = self._connections.get(config.conn_id)
        if previous is not None:
            logger.info("Replacing connection %d", config.conn_id)
            await previous.close()

        self._connections[config.conn_id] = connection
        return connection

    def get(self, conn_id: int) -> Connection:
        """Get an open connection.

        Raises:
            ConnectionNotFoundError: If no connection has the id.
        """
        connection = self._connections.get(conn_id)
        if connection is None:
            raise ConnectionNotFoundError(conn_id)
        return connection

    async def disconnect(self, conn_id: int) -> None:
        connection = self._connections.pop(conn_id, None)
        if connection is None:
            raise ConnectionNotFoundError(conn_id)
        await connection.close()

    def is_busy(self, conn_id: int) -> bool:
        return conn_id in self._busy

    async def run(
        self,
        conn_id: int,
        sql: str,
        parameters: Optional[Sequence[Any]] = None
    ) -> QueryResult:
        """Execute a query on a connection and record it in history.

        Args:
            conn_id: Connection to run on.
            sql: SQL text.
            parameters: Bind values; when given the parameterized path is used.

        Returns:
            The execution result.

        Raises:
            ConnectionNotFoundError: If no connection has the id.
            QueryInProgressError: If a query is already running on it.
        """
        connection = self.get(conn_id)
        if conn_id in self._busy:
            raise QueryInProgressError(conn_id)

        self._busy.add(conn_id)
        try:
            executor = QueryExecutor(connection, self.classifier)
            if parameters is None:
                result = await executor.execute(sql)
            else:
                result = await executor.execute_parameterized(sql, parameters)
        finally:
            self._busy.discard(conn_id)

        self.history.record(conn_id, result)
        return result

    async def statuses(self) -> List[ConnectionStatus]:
        return [await c.status() for c in self._connections.values()]

    async def close_all(self) -> None:
        """Close every open connection."""
        for conn_id, connection in list(self._connections.items()):
            await connection.close()
            logger.info("Closed connection %d", conn_id)
        self._connections.clear()

    @property
    def connection_ids(self) -> List[int]:
        return sorted(self._connections)

    def _next_conn_id(self) -> int:
        return max(self._connections, default=0) + 1
