"""MCP tools for querydesk."""

from querydesk.tools.connection import register_connection_tools
from querydesk.tools.query import register_query_tools
from querydesk.tools.history import register_history_tools

__all__ = [
    "register_connection_tools",
    "register_query_tools",
    "register_history_tools",
]
