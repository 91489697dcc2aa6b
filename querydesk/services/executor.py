"""Query execution services."""

import logging
import time
from typing import Any, Optional, Sequence

from querydesk.models.query import QueryFailure, QueryResult, QuerySuccess, StatementKind
from querydesk.services.classifier import StatementClassifier
from querydesk.services.database import Connection
from querydesk.services.sanitizer import sanitize
from querydesk.utils.constants import ROWS_AFFECTED_COLUMN
from querydesk.utils.exceptions import (
    ConnectionInvalidError,
    QueryDeskError,
    UnexpectedError,
    ValidationError,
)

logger = logging.getLogger("querydesk.executor")


class QueryExecutor:
    """Run SQL against one connection and wrap the outcome.

    Every call returns a QueryResult; errors never propagate to the caller.
    SELECT statements take the row-returning path, everything else the
    mutation path, which reports a single ``Rows Affected`` cell.
    """

    def __init__(
        self,
        connection: Connection,
        classifier: Optional[StatementClassifier] = None
    ):
        """Initialize the executor.

        Args:
            connection: The connection statements run on.
            classifier: Statement classifier; a default one if omitted.
        """
        self.connection = connection
        self.classifier = classifier if classifier is not None else StatementClassifier()

    async def execute(self, sql: str) -> QueryResult:
        """Validate, sanitize and run a statement.

        Args:
            sql: Raw SQL text as typed by the user.

        Returns:
            QuerySuccess, or QueryFailure carrying the error message.
        """
        start_time = time.perf_counter()

        try:
            if not self.classifier.is_valid_query(sql):
                raise ValidationError()

            sanitized_sql = sanitize(sql)

            if not await self.connection.is_valid():
                raise ConnectionInvalidError()

            kind = self.classifier.classify(sanitized_sql)
            return await self._run(sql, sanitized_sql, kind, (), start_time)

        except QueryDeskError as e:
            return self._failure(sql, e, start_time)
        except Exception as e:
            logger.exception("Unexpected failure executing query")
            return self._failure(sql, UnexpectedError(str(e)), start_time)

    async def execute_parameterized(
        self,
        sql: str,
        parameters: Sequence[Any]
    ) -> QueryResult:
        """Run a statement with positional bind values.

        The text is neither validated nor sanitized; the caller owns it.
        Values are bound in order to placeholders 1..n.

        Args:
            sql: SQL text with driver placeholders.
            parameters: Bind values in placeholder order.

        Returns:
            QuerySuccess, or QueryFailure carrying the error message.
        """
        start_time = time.perf_counter()

        try:
            if not await self.connection.is_valid():
                raise ConnectionInvalidError()

            kind = self.classifier.classify(sql)
            return await self._run(sql, sql, kind, list(parameters), start_time)

        except QueryDeskError as e:
            return self._failure(sql, e, start_time)
        except Exception as e:
            logger.exception("Unexpected failure executing parameterized query")
            return self._failure(sql, UnexpectedError(str(e)), start_time)

    async def _run(
        self,
        original_sql: str,
        sql: str,
        kind: StatementKind,
        params: Sequence[Any],
        start_time: float
    ) -> QuerySuccess:
        if kind == StatementKind.SELECT:
            columns, rows = await self.connection.fetch(sql, params)
        else:
            affected = await self.connection.execute(sql, params)
            columns, rows = [ROWS_AFFECTED_COLUMN], [[affected]]

        result = QuerySuccess(
            sql=original_sql,
            columns=columns,
            rows=rows,
            execution_time_ms=_elapsed_ms(start_time)
        )
        logger.info(
            "%s on %s returned %d row(s) in %.1fms",
            kind.value, self.connection.config.display_name,
            result.row_count, result.execution_time_ms
        )
        return result

    def _failure(self, sql: str, error: QueryDeskError, start_time: float) -> QueryFailure:
        result = QueryFailure(
            sql=sql if sql is not None else "",
            error=error.message,
            execution_time_ms=_elapsed_ms(start_time)
        )
        logger.warning(
            "Query failed on %s [%s]: %s",
            self.connection.config.display_name, error.code.value, error.message
        )
        return result


def _elapsed_ms(start_time: float) -> float:
    return (time.perf_counter() - start_time) * 1000
