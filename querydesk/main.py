"""Main entry point for the querydesk server."""

import argparse
import asyncio
import logging
from mcp.server.fastmcp import FastMCP

from querydesk.config import Settings
from querydesk.services.classifier import StatementClassifier
from querydesk.services.history import QueryHistory
from querydesk.services.workspace import Workspace
from querydesk.utils.exceptions import QueryDeskError


logger = logging.getLogger("querydesk")


def build_workspace(settings: Settings) -> Workspace:
    """Create the workspace from settings.

    Args:
        settings: Application settings.

    Returns:
        A workspace with no open connections.
    """
    return Workspace(
        history=QueryHistory(max_entries=settings.history_limit),
        classifier=StatementClassifier(min_length=settings.min_query_length),
        probe_timeout=settings.probe_timeout,
        connect_timeout=settings.connect_timeout
    )


def create_mcp_app(settings: Settings, workspace: Workspace) -> FastMCP:
    """Create and configure the MCP application.

    Args:
        settings: Application settings.
        workspace: Workspace shared by all tools.

    Returns:
        Configured FastMCP instance.
    """
    from querydesk.tools.connection import register_connection_tools
    from querydesk.tools.query import register_query_tools
    from querydesk.tools.history import register_history_tools

    mcp = FastMCP("querydesk", host=settings.mcp_host, port=settings.mcp_port)

    register_connection_tools(mcp, workspace, settings)
    register_query_tools(mcp, workspace)
    register_history_tools(mcp, workspace.history)

    return mcp


async def run_server(settings: Settings) -> None:
    """Run the MCP server.

    Args:
        settings: Application settings.
    """
    workspace = build_workspace(settings)
    mcp = create_mcp_app(settings, workspace)

    default_config = settings.get_default_connection()
    if default_config is not None:
        try:
            await workspace.connect(default_config)
        except QueryDeskError as e:
            # The server still starts; the user can connect via the tools
            logger.error("Default connection failed: %s", e.message)

    logger.info("querydesk server ready (transport=%s)", settings.mcp_transport)

    try:
        if settings.mcp_transport == "sse":
            await mcp.run_sse_async()
        elif settings.mcp_transport == "streamable-http":
            await mcp.run_streamable_http_async()
        else:
            await mcp.run_stdio_async()
    finally:
        await workspace.close_all()


def main() -> None:
    """Main entry point for the server."""
    parser = argparse.ArgumentParser(description="Ad-hoc SQL query server")
    parser.add_argument("--url", type=str, help="Default connection URL")
    parser.add_argument("--username", type=str, help="Default connection user")
    parser.add_argument("--password", type=str, help="Default connection password")
    parser.add_argument(
        "--driver",
        type=str,
        help="Default connection driver (postgresql or sqlite)"
    )
    parser.add_argument(
        "--transport",
        type=str,
        choices=["stdio", "sse", "streamable-http"],
        help="MCP transport"
    )
    parser.add_argument("--log-level", type=str, help="Logging level")

    args = parser.parse_args()

    # Load settings; command line flags override the environment
    settings = Settings()
    if args.url:
        settings.default_url = args.url
    if args.username:
        settings.default_username = args.username
    if args.password:
        settings.default_password = args.password
    if args.driver:
        settings.default_driver = args.driver
    if args.transport:
        settings.mcp_transport = args.transport
    if args.log_level:
        settings.log_level = args.log_level

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

    logger.info("Starting querydesk server")

    asyncio.run(run_server(settings))


if __name__ == "__main__":
    main()
