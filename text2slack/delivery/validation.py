"""Validation for webhook URLs and outbound messages."""

from urllib.parse import urlparse

from text2slack.delivery.errors import ConfigError, MessageValidationError

# Slack's limit for a single message text.
DEFAULT_MAX_MESSAGE_LENGTH = 4000

LOCALHOST_ADDRESSES = frozenset({"localhost", "127.0.0.1", "::1", "[::1]"})


def is_localhost_address(hostname: str | None) -> bool:
    """Return True for IPv4/IPv6 loopback hostnames."""
    return (hostname or "").lower() in LOCALHOST_ADDRESSES


def validate_webhook_url(url: str) -> None:
    """
    Validate a webhook URL for format and transport security.

    Any host is accepted (Slack, Discord, Mattermost, ...), but the URL must
    use HTTPS. Plain HTTP is tolerated for loopback hosts only, for local
    development.

    Raises:
        ConfigError: If the URL is empty, unparsable or not HTTPS.
    """
    if not url or not isinstance(url, str):
        raise ConfigError("Webhook URL is required")

    try:
        parsed = urlparse(url.strip())
        # Accessing .port validates it.
        parsed.port
    except ValueError:
        parsed = None
    if parsed is None or not parsed.scheme or not parsed.hostname:
        raise ConfigError(
            "Webhook URL is not a valid URL. Expected format: https://hooks.example.com/..."
        )

    scheme = parsed.scheme.lower()
    if scheme == "https":
        return
    if scheme == "http" and is_localhost_address(parsed.hostname):
        return
    raise ConfigError("Webhook URL must use HTTPS for security. HTTP is not allowed.")


def validate_message(message: str, max_length: int = DEFAULT_MAX_MESSAGE_LENGTH) -> None:
    """
    Validate message content and length.

    Raises:
        MessageValidationError: If the message is empty, not a string, or
            longer than ``max_length`` characters.
    """
    if not message or not isinstance(message, str):
        raise MessageValidationError("Message must be a non-empty string")

    if len(message) > max_length:
        raise MessageValidationError(
            f"Message exceeds maximum length of {max_length} characters (got {len(message)})"
        )
