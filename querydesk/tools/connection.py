"""MCP connection tool implementation."""

from mcp.server.fastmcp import FastMCP
from querydesk.config import Settings
from querydesk.models.connection import ConnectionConfig
from querydesk.services.drivers import available_drivers
from querydesk.services.workspace import Workspace
from querydesk.utils.exceptions import QueryDeskError
from typing import Optional


def register_connection_tools(
    mcp: FastMCP,
    workspace: Workspace,
    settings: Settings
) -> None:
    """Register the connection tools with the MCP server.

    Args:
        mcp: The FastMCP server instance.
        workspace: The workspace holding open connections.
        settings: Application settings (for saved connections).
    """

    @mcp.tool()
    async def connect(
        url: str,
        username: str,
        password: str = "",
        driver: str = "postgresql",
        name: str = "",
        conn_id: Optional[int] = None
    ) -> dict:
        """
        Open a database connection.

        Args:
            url: Connection URL, e.g. postgresql://host:5432/db or sqlite:///path.db.
            username: Database user.
            password: Database password.
            driver: Driver identifier ("postgresql" or "sqlite").
            name: Display name for the connection.
            conn_id: Connection id to use; the next free id when omitted.

        Returns:
            Connection status, or an error.
        """
        config = ConnectionConfig(
            conn_id=conn_id or 0,
            name=name,
            url=url,
            username=username,
            password=password,
            driver=driver
        )
        try:
            connection = await workspace.connect(config)
            status = await connection.status()
            return {"status": "success", "connection": status.model_dump(mode="json")}
        except QueryDeskError as e:
            return e.to_dict()

    @mcp.tool()
    async def connect_saved(conn_id: int) -> dict:
        """
        Open one of the connections saved in the configuration.

        Args:
            conn_id: Id of the saved connection.

        Returns:
            Connection status, or an error.
        """
        config = settings.get_saved_connection(conn_id)
        if config is None:
            return {
                "status": "error",
                "error": f"No saved connection with id {conn_id}"
            }
        try:
            connection = await workspace.connect(config)
            status = await connection.status()
            return {"status": "success", "connection": status.model_dump(mode="json")}
        except QueryDeskError as e:
            return e.to_dict()

    @mcp.tool()
    async def disconnect(conn_id: int) -> dict:
        """
        Close an open connection.

        Args:
            conn_id: Id of the connection to close.

        Returns:
            Success or error status.
        """
        try:
            await workspace.disconnect(conn_id)
            return {"status": "success", "conn_id": conn_id}
        except QueryDeskError as e:
            return e.to_dict()

    @mcp.tool()
    async def list_connections() -> dict:
        """
        List open connections with a fresh liveness check, plus saved
        connections and installed drivers.

        Returns:
            Open connection statuses, saved connections and drivers.
        """
        statuses = await workspace.statuses()
        saved = [
            c.model_dump(mode="json", exclude={"password"}) for c in settings.get_connections()
        ]
        return {
            "status": "success",
            "connections": [s.model_dump(mode="json") for s in statuses],
            "saved": saved,
            "drivers": available_drivers()
        }
