"""Tests for the send_to_slack MCP tool and server wiring."""

from __future__ import annotations

import asyncio

import httpx
from mcp.types import CallToolResult

from text2slack.delivery.client import DeliveryResult, SlackClient
from text2slack.delivery.errors import FailureKind, PermanentDeliveryError, TransientDeliveryError
from text2slack.server.mcp_server import SERVER_NAME, create_mcp_server, register_send_to_slack_tool
from text2slack.server.tools import TOOL_NAME, ToolResponse, send_to_slack


class _FakeClient:
    def __init__(self, error: BaseException | None = None) -> None:
        self.error = error
        self.sent: list[str] = []

    async def send_message(self, message: str) -> DeliveryResult:
        self.sent.append(message)
        if self.error is not None:
            raise self.error
        return DeliveryResult(message=message)


def test_send_to_slack_success_text() -> None:
    client = _FakeClient()
    response = asyncio.run(send_to_slack(client, "Hello"))

    assert client.sent == ["Hello"]
    assert response == ToolResponse("Successfully posted to Slack: Hello")
    assert response.to_dict() == {
        "content": [{"type": "text", "text": "Successfully posted to Slack: Hello"}]
    }


def test_send_to_slack_formats_delivery_errors() -> None:
    client = _FakeClient(PermanentDeliveryError("Failed to send message to Slack. Status: 400", FailureKind.CLIENT_STATUS))
    response = asyncio.run(send_to_slack(client, "Hello"))

    assert response.is_error is True
    assert response.text == "Error sending to Slack: Failed to send message to Slack. Status: 400"
    assert response.to_dict()["isError"] is True


def test_send_to_slack_includes_attempt_count() -> None:
    err = TransientDeliveryError("Request to Slack timed out after 100ms", FailureKind.TIMEOUT, attempts=3)
    response = asyncio.run(send_to_slack(_FakeClient(err), "Hello"))

    assert response.is_error is True
    assert "timed out after 100ms (after 3 attempts)" in response.text


def test_send_to_slack_hides_unexpected_exceptions() -> None:
    response = asyncio.run(send_to_slack(_FakeClient(KeyError("boom")), "Hello"))

    assert response.is_error is True
    assert response.text == "Error sending to Slack: Unknown error"


def test_mcp_server_lists_send_to_slack_tool() -> None:
    server = create_mcp_server()
    register_send_to_slack_tool(server, SlackClient("https://hooks.slack.com/services/T/B/X"))

    tools = asyncio.run(server.list_tools())

    assert server.name == SERVER_NAME
    assert [tool.name for tool in tools] == [TOOL_NAME]
    tool = tools[0]
    assert tool.description == "Send a text message to Slack"
    assert tool.inputSchema["required"] == ["message"]
    assert tool.inputSchema["properties"]["message"]["type"] == "string"
    assert tool.inputSchema["properties"]["message"]["description"] == "The message to send to Slack"


def _server_for_status(status: int):
    client = SlackClient(
        "https://hooks.slack.com/services/T/B/X",
        transport=httpx.MockTransport(lambda request: httpx.Response(status)),
        retry=False,
    )
    server = create_mcp_server()
    register_send_to_slack_tool(server, client)
    return server


def test_call_tool_returns_success_envelope() -> None:
    server = _server_for_status(200)

    result = asyncio.run(server.call_tool(TOOL_NAME, {"message": "hi"}))

    assert isinstance(result, CallToolResult)
    assert result.isError is False
    assert [c.text for c in result.content] == ["Successfully posted to Slack: hi"]


def test_call_tool_returns_error_text_without_prefix() -> None:
    server = _server_for_status(400)

    result = asyncio.run(server.call_tool(TOOL_NAME, {"message": "hi"}))

    assert isinstance(result, CallToolResult)
    assert result.isError is True
    assert [c.text for c in result.content] == [
        "Error sending to Slack: Failed to send message to Slack. Status: 400"
    ]
