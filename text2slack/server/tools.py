"""The send_to_slack MCP tool."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from loguru import logger

from text2slack.delivery.client import SlackClient
from text2slack.delivery.errors import Text2SlackError

TOOL_NAME = "send_to_slack"
TOOL_DESCRIPTION = "Send a text message to Slack"
MESSAGE_DESCRIPTION = "The message to send to Slack"


@dataclass
class ToolResponse:
    """Text result of a tool call, mirroring MCP's CallToolResult."""

    text: str
    is_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"content": [{"type": "text", "text": self.text}]}
        if self.is_error:
            data["isError"] = True
        return data


async def send_to_slack(client: SlackClient, message: str) -> ToolResponse:
    """Deliver ``message`` and format the outcome for the tool caller."""
    try:
        result = await client.send_message(message)
    except Text2SlackError as e:
        return ToolResponse(f"Error sending to Slack: {e}", is_error=True)
    except Exception:
        logger.exception("Unexpected error in send_to_slack")
        return ToolResponse("Error sending to Slack: Unknown error", is_error=True)

    return ToolResponse(f"Successfully posted to Slack: {result.message}")
