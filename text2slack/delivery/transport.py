"""HTTP transport for webhook deliveries.

One call to :meth:`WebhookTransport.post` is one delivery attempt. Failures are
raised as :class:`DeliveryError` subclasses tagged with a :class:`FailureKind`.
"""

from __future__ import annotations

import asyncio

import httpx

from text2slack import __version__
from text2slack.delivery.errors import FailureKind, delivery_error

USER_AGENT = f"text2slack-mcp/{__version__}"


def classify_status(status_code: int) -> FailureKind | None:
    """Map an HTTP status to a failure kind, or None for 2xx."""
    if 200 <= status_code < 300:
        return None
    if 500 <= status_code <= 599:
        return FailureKind.SERVER_STATUS
    return FailureKind.CLIENT_STATUS


class WebhookTransport:
    """Posts ``{"text": ...}`` payloads to a single webhook URL."""

    def __init__(
        self,
        url: str,
        *,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self._http_transport = http_transport

    async def post(self, text: str, timeout_ms: int) -> httpx.Response:
        """
        Send one request, bounded by ``timeout_ms``.

        Exceeding the timeout cancels the in-flight request.

        Raises:
            TransientDeliveryError: On timeout, connection failure or 5xx.
            PermanentDeliveryError: On any other non-2xx status.
            UnknownDeliveryError: On any other exception from the HTTP stack.
        """
        timeout_s = timeout_ms / 1000
        try:
            response = await asyncio.wait_for(self._send(text, timeout_s), timeout=timeout_s)
        except asyncio.TimeoutError:
            raise delivery_error(
                FailureKind.TIMEOUT, f"Request to Slack timed out after {timeout_ms}ms"
            )
        except httpx.TimeoutException as e:
            raise delivery_error(
                FailureKind.TIMEOUT, f"Request to Slack timed out after {timeout_ms}ms"
            ) from e
        except httpx.TransportError as e:
            raise delivery_error(
                FailureKind.CONNECTION,
                f"Failed to connect to Slack: {type(e).__name__}: {e}",
            ) from e
        except Exception as e:
            detail = str(e)
            raise delivery_error(
                FailureKind.UNRECOGNIZED,
                f"Unknown error: {detail}" if detail else "Unknown error",
            ) from e

        kind = classify_status(response.status_code)
        if kind is not None:
            raise delivery_error(
                kind,
                f"Failed to send message to Slack. Status: {response.status_code}",
                status_code=response.status_code,
            )
        return response

    async def _send(self, text: str, timeout_s: float) -> httpx.Response:
        async with httpx.AsyncClient(
            transport=self._http_transport,
            timeout=timeout_s,
            follow_redirects=False,
        ) as client:
            return await client.post(
                self.url,
                json={"text": text},
                headers={"Content-Type": "application/json", "User-Agent": USER_AGENT},
            )
