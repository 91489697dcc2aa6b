"""MCP query tool implementation."""

from mcp.server.fastmcp import FastMCP
from querydesk.services.workspace import Workspace
from querydesk.utils.exceptions import QueryDeskError
from typing import Any, List


def register_query_tools(mcp: FastMCP, workspace: Workspace) -> None:
    """Register the query tools with the MCP server.

    Args:
        mcp: The FastMCP server instance.
        workspace: The workspace holding open connections.
    """

    @mcp.tool()
    async def execute_sql(conn_id: int, sql: str) -> dict:
        """
        Execute SQL on an open connection.

        SELECT statements return their rows; other statements return a
        single "Rows Affected" cell. Comments are stripped before execution.

        Args:
            conn_id: Id of the connection to run on.
            sql: SQL statement.

        Returns:
            Columns, rows and timing, or an error message.
        """
        try:
            result = await workspace.run(conn_id, sql)
        except QueryDeskError as e:
            return e.to_dict()
        return result.model_dump(mode="json")

    @mcp.tool()
    async def execute_parameterized_sql(
        conn_id: int,
        sql: str,
        parameters: List[Any]
    ) -> dict:
        """
        Execute SQL with positional bind values.

        Use $1, $2, ... placeholders for PostgreSQL and ? for SQLite.

        Args:
            conn_id: Id of the connection to run on.
            sql: SQL statement with placeholders.
            parameters: Values bound to the placeholders in order.

        Returns:
            Columns, rows and timing, or an error message.
        """
        try:
            result = await workspace.run(conn_id, sql, parameters)
        except QueryDeskError as e:
            return e.to_dict()
        return result.model_dump(mode="json")
