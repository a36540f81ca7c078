"""MCP server exposing the send_to_slack tool over stdio."""

from __future__ import annotations

import asyncio
from typing import Annotated

from loguru import logger
from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from text2slack.delivery.client import SlackClient
from text2slack.server.shutdown import ShutdownCoordinator
from text2slack.server.tools import (
    MESSAGE_DESCRIPTION,
    TOOL_DESCRIPTION,
    TOOL_NAME,
    send_to_slack,
)

SERVER_NAME = "text2slack-mcp"
SERVER_INSTRUCTIONS = (
    "Posts plain-text messages to the chat webhook configured for this server "
    "(Slack, Discord, Mattermost). Use send_to_slack with the message text."
)


def create_mcp_server() -> FastMCP:
    """Create a FastMCP server for text2slack, ready for tool registration."""
    return FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS)


def register_send_to_slack_tool(server: FastMCP, client: SlackClient) -> None:
    """Register send_to_slack on ``server``, delivering through ``client``."""

    @server.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def send_to_slack_tool(
        message: Annotated[str, Field(description=MESSAGE_DESCRIPTION)],
    ) -> CallToolResult:
        response = await send_to_slack(client, message)
        # FastMCP passes a CallToolResult through unchanged.
        return CallToolResult.model_validate(response.to_dict())


async def shutdown_server(serve_task: asyncio.Task) -> None:
    """Stop serving and wait for the stdio transport to close."""
    logger.info("Shutting down MCP server...")
    serve_task.cancel()
    try:
        await serve_task
    except asyncio.CancelledError:
        pass
    except Exception as e:
        logger.error(f"Error during server shutdown: {e}")
        raise
    logger.info("MCP server shut down successfully")


async def start_server(
    server: FastMCP,
    coordinator: ShutdownCoordinator | None = None,
) -> int:
    """
    Serve MCP over stdio until the client disconnects or a signal arrives.

    Returns:
        Process exit code: 0 after a clean stop, 1 if graceful shutdown failed.
    """
    coordinator = coordinator or ShutdownCoordinator()
    serve_task = asyncio.create_task(server.run_stdio_async())
    coordinator.add_callback(lambda: shutdown_server(serve_task))
    coordinator.install()
    logger.info(f"{SERVER_NAME} server running on stdio")

    try:
        await serve_task
    except asyncio.CancelledError:
        if not coordinator.shutting_down:
            raise
    except Exception as e:
        if coordinator.shutting_down:
            return await coordinator.wait()
        logger.error(f"MCP server failed: {e}")
        raise

    if coordinator.shutting_down:
        return await coordinator.wait()
    return 0
