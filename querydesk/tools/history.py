"""MCP history tool implementation."""

from mcp.server.fastmcp import FastMCP
from querydesk.services.history import QueryHistory
from typing import Optional


def register_history_tools(mcp: FastMCP, history: QueryHistory) -> None:
    """Register the history tools with the MCP server.

    Args:
        mcp: The FastMCP server instance.
        history: The shared query history.
    """

    @mcp.tool()
    async def get_history(
        conn_id: Optional[int] = None,
        limit: Optional[int] = None
    ) -> dict:
        """
        Get executed queries, oldest first.

        Args:
            conn_id: Only entries for this connection (optional).
            limit: Only the most recent N entries (optional).

        Returns:
            History entries.
        """
        if conn_id is not None:
            entries = history.for_connection(conn_id)
            if limit is not None:
                entries = entries[-limit:] if limit > 0 else []
        elif limit is not None:
            entries = history.recent(limit)
        else:
            entries = history.all()

        return {
            "status": "success",
            "count": len(entries),
            "entries": [e.model_dump(mode="json") for e in entries]
        }

    @mcp.tool()
    async def search_history(term: str) -> dict:
        """
        Find executed queries whose SQL contains a term (case-insensitive).

        Args:
            term: Text to search for.

        Returns:
            Matching history entries.
        """
        entries = history.search(term)
        return {
            "status": "success",
            "count": len(entries),
            "entries": [e.model_dump(mode="json") for e in entries]
        }

    @mcp.tool()
    async def get_history_entry(history_id: int) -> dict:
        """
        Get one history entry by id.

        Args:
            history_id: Id of the entry.

        Returns:
            The entry, or an error if it is not (or no longer) stored.
        """
        entry = history.get(history_id)
        if entry is None:
            return {
                "status": "error",
                "error": f"History entry {history_id} not found"
            }
        return {
            "status": "success",
            "entry": entry.model_dump(mode="json"),
            "summary": entry.summary()
        }

    @mcp.tool()
    async def clear_history() -> dict:
        """
        Clear the query history and restart ids at 1.

        Returns:
            Success status.
        """
        history.clear()
        return {"status": "success"}
