"""Resilient webhook delivery: validation, retry policy and client."""

from text2slack.delivery.client import DEFAULT_TIMEOUT_MS, DeliveryResult, SlackClient
from text2slack.delivery.errors import (
    ConfigError,
    DeliveryError,
    FailureKind,
    MessageValidationError,
    PermanentDeliveryError,
    Text2SlackError,
    TransientDeliveryError,
    UnknownDeliveryError,
)
from text2slack.delivery.retry import (
    RetryConfig,
    compute_backoff,
    default_retry_config,
    normalize_retry_config,
)
from text2slack.delivery.validation import (
    DEFAULT_MAX_MESSAGE_LENGTH,
    validate_message,
    validate_webhook_url,
)

__all__ = [
    "DEFAULT_MAX_MESSAGE_LENGTH",
    "DEFAULT_TIMEOUT_MS",
    "ConfigError",
    "DeliveryError",
    "DeliveryResult",
    "FailureKind",
    "MessageValidationError",
    "PermanentDeliveryError",
    "RetryConfig",
    "SlackClient",
    "Text2SlackError",
    "TransientDeliveryError",
    "UnknownDeliveryError",
    "compute_backoff",
    "default_retry_config",
    "normalize_retry_config",
    "validate_message",
    "validate_webhook_url",
]
