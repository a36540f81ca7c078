"""MCP server for text2slack."""

from text2slack.server.mcp_server import (
    create_mcp_server,
    register_send_to_slack_tool,
    shutdown_server,
    start_server,
)
from text2slack.server.shutdown import ShutdownCoordinator

__all__ = [
    "ShutdownCoordinator",
    "create_mcp_server",
    "register_send_to_slack_tool",
    "shutdown_server",
    "start_server",
]
