"""Errors raised while validating and delivering outbound messages.

Delivery failures are tagged with a :class:`FailureKind` by the transport so
the client can decide whether to retry without inspecting message text.
"""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    """Closed set of ways a single delivery attempt can fail."""

    TIMEOUT = "timeout"
    CONNECTION = "connection"
    SERVER_STATUS = "server_status"
    CLIENT_STATUS = "client_status"
    UNRECOGNIZED = "unrecognized"

    @property
    def retryable(self) -> bool:
        return self in (FailureKind.TIMEOUT, FailureKind.CONNECTION, FailureKind.SERVER_STATUS)


class Text2SlackError(Exception):
    """Base class for all text2slack errors."""


class ConfigError(Text2SlackError):
    """The webhook destination or client options fail policy."""


class MessageValidationError(Text2SlackError):
    """The message is empty, not text, or too long."""


class DeliveryError(Text2SlackError):
    """Base class for outbound delivery errors."""

    def __init__(
        self,
        message: str,
        kind: FailureKind,
        *,
        status_code: int | None = None,
        attempts: int = 1,
    ):
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code
        self.attempts = attempts

    @property
    def retryable(self) -> bool:
        return self.kind.retryable

    def __str__(self) -> str:
        base = super().__str__()
        if self.attempts > 1:
            return f"{base} (after {self.attempts} attempts)"
        return base


class TransientDeliveryError(DeliveryError):
    """A transient failure (timeout, network, 5xx). Safe to retry."""


class PermanentDeliveryError(DeliveryError):
    """A permanent failure (4xx, unexpected status). Do not retry."""


class UnknownDeliveryError(DeliveryError):
    """The transport failed in an unrecognized way. Treated as permanent."""

    def __init__(self, message: str = "Unknown error", *, attempts: int = 1):
        super().__init__(message, FailureKind.UNRECOGNIZED, attempts=attempts)


_ERROR_TYPES: dict[FailureKind, type[DeliveryError]] = {
    FailureKind.TIMEOUT: TransientDeliveryError,
    FailureKind.CONNECTION: TransientDeliveryError,
    FailureKind.SERVER_STATUS: TransientDeliveryError,
    FailureKind.CLIENT_STATUS: PermanentDeliveryError,
}


def delivery_error(
    kind: FailureKind,
    message: str,
    *,
    status_code: int | None = None,
) -> DeliveryError:
    """Build the error class matching a failure kind."""
    if kind is FailureKind.UNRECOGNIZED:
        return UnknownDeliveryError(message)
    return _ERROR_TYPES[kind](message, kind, status_code=status_code)
