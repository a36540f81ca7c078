"""Client for sending messages to Slack-compatible Incoming Webhooks."""

from __future__ import annotations

import asyncio
import random
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Literal

import httpx
from loguru import logger

from text2slack.delivery.errors import ConfigError, DeliveryError
from text2slack.delivery.retry import (
    RetryConfig,
    RetrySetting,
    compute_backoff,
    normalize_retry_config,
)
from text2slack.delivery.transport import WebhookTransport
from text2slack.delivery.validation import (
    DEFAULT_MAX_MESSAGE_LENGTH,
    validate_message,
    validate_webhook_url,
)

DEFAULT_TIMEOUT_MS = 30_000


@dataclass(frozen=True)
class DeliveryResult:
    """Result of a successful delivery."""

    message: str
    success: bool = True


class AttemptOutcome(str, Enum):
    SUCCESS = "success"
    RETRYABLE = "retryable"
    FATAL = "fatal"


@dataclass
class DeliveryAttempt:
    """One try within a send_message call. Only used for logging."""

    index: int
    outcome: AttemptOutcome
    elapsed_ms: int
    error: str | None = None


class SlackClient:
    """
    Client for sending messages via Incoming Webhooks.

    Works with any webhook that accepts ``{"text": ...}`` JSON (Slack,
    Discord's Slack-compatible endpoint, Mattermost, ...). Transient failures
    (timeouts, connection errors, 5xx responses) are retried with exponential
    backoff and jitter; 4xx responses and unrecognized failures are not.

    Usage:
        client = SlackClient("https://hooks.slack.com/services/...")
        result = await client.send_message("Hello, Slack!")

        # Custom timeout and retry policy
        client = SlackClient(url, timeout_ms=10_000,
                             retry=RetryConfig(max_retries=5, base_delay_ms=500, max_delay_ms=5000))

        # Single attempt, no retries
        client = SlackClient(url, retry=False)
    """

    def __init__(
        self,
        webhook_url: str,
        *,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        retry: RetrySetting = None,
        max_message_length: int = DEFAULT_MAX_MESSAGE_LENGTH,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rand: Callable[[float, float], float] = random.uniform,
    ):
        if isinstance(webhook_url, str):
            # Env values often carry a trailing newline.
            webhook_url = webhook_url.strip()
        validate_webhook_url(webhook_url)
        if timeout_ms <= 0:
            raise ConfigError(f"Timeout must be positive (got {timeout_ms}ms)")
        if max_message_length <= 0:
            raise ConfigError(f"Max message length must be positive (got {max_message_length})")

        self._transport = WebhookTransport(webhook_url, http_transport=transport)
        self.timeout_ms = timeout_ms
        self.max_message_length = max_message_length
        self.retry_config: RetryConfig | Literal[False] = normalize_retry_config(retry)
        self._sleep = sleep
        self._rand = rand

    @property
    def webhook_url(self) -> str:
        return self._transport.url

    @property
    def max_attempts(self) -> int:
        if self.retry_config is False:
            return 1
        return self.retry_config.max_retries + 1

    async def send_message(self, message: str) -> DeliveryResult:
        """
        Send a text message, retrying transient failures.

        Raises:
            MessageValidationError: If the message is empty, not a string or
                too long. No attempt is made.
            TransientDeliveryError: If the last allowed attempt timed out,
                failed to connect or got a 5xx response.
            PermanentDeliveryError: On a 4xx (or other non-2xx) response.
            UnknownDeliveryError: On an unrecognized transport failure.
        """
        validate_message(message, self.max_message_length)

        retry_config = self.retry_config
        max_attempts = self.max_attempts
        start = time.monotonic()
        log = logger.bind(message_length=len(message), max_attempts=max_attempts)
        log.info(f"Sending message to Slack ({len(message)} chars)")

        for attempt in range(max_attempts):
            attempt_start = time.monotonic()
            try:
                await self._transport.post(message, self.timeout_ms)
            except DeliveryError as e:
                e.attempts = attempt + 1
                retryable = retry_config is not False and e.retryable
                record = DeliveryAttempt(
                    index=attempt,
                    outcome=AttemptOutcome.RETRYABLE if retryable else AttemptOutcome.FATAL,
                    elapsed_ms=_elapsed_ms(attempt_start),
                    error=str(e),
                )

                if not retryable:
                    log.bind(**_fields(record), duration=_elapsed_ms(start)).error(
                        f"Failed to send message ({e.kind.value}): {e}"
                    )
                    raise

                if attempt == max_attempts - 1:
                    log.bind(**_fields(record), duration=_elapsed_ms(start)).error(
                        f"Failed to send message after {max_attempts} attempts: {e}"
                    )
                    raise

                delay_ms = compute_backoff(attempt, retry_config, self._rand)
                log.bind(**_fields(record), delay_ms=delay_ms).warning(
                    f"Retrying after transient error (attempt {attempt + 1}/{max_attempts}, "
                    f"waiting {delay_ms}ms): {e}"
                )
                await self._sleep(delay_ms / 1000)
                continue

            record = DeliveryAttempt(
                index=attempt,
                outcome=AttemptOutcome.SUCCESS,
                elapsed_ms=_elapsed_ms(attempt_start),
            )
            log.bind(**_fields(record), duration=_elapsed_ms(start)).info(
                f"Message sent successfully (attempt {attempt + 1})"
            )
            return DeliveryResult(message=message)

        # Every branch above returns or raises.
        raise RuntimeError("Unexpected: retry loop completed without result")


def _elapsed_ms(since: float) -> int:
    return int((time.monotonic() - since) * 1000)


def _fields(record: DeliveryAttempt) -> dict[str, object]:
    fields: dict[str, object] = {
        "attempt": record.index + 1,
        "outcome": record.outcome.value,
        "elapsed_ms": record.elapsed_ms,
    }
    if record.error:
        fields["error"] = record.error
    return fields
