"""Configuration schema using Pydantic."""

from typing import Literal

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from text2slack.delivery.client import DEFAULT_TIMEOUT_MS
from text2slack.delivery.retry import RetryConfig
from text2slack.delivery.validation import DEFAULT_MAX_MESSAGE_LENGTH


class RetrySettings(BaseModel):
    """Retry configuration for webhook delivery."""
    enabled: bool = True
    max_retries: int = 3  # Clamped to [0, 10] by the client
    base_delay_ms: int = 1000
    max_delay_ms: int = 10000

    def to_retry_config(self) -> RetryConfig | Literal[False]:
        """Return the client retry setting (False when disabled)."""
        if not self.enabled:
            return False
        return RetryConfig(
            max_retries=self.max_retries,
            base_delay_ms=self.base_delay_ms,
            max_delay_ms=self.max_delay_ms,
        )


class Config(BaseSettings):
    """Root configuration for text2slack."""
    model_config = SettingsConfigDict(
        env_prefix="TEXT2SLACK_",
        env_nested_delimiter="__",
        populate_by_name=True,
        extra="ignore",
    )

    webhook_url: str = Field(
        default="",
        validation_alias=AliasChoices("SLACK_WEBHOOK_URL", "TEXT2SLACK_WEBHOOK_URL"),
    )
    timeout_ms: int = DEFAULT_TIMEOUT_MS  # Per-attempt request timeout
    max_message_length: int = DEFAULT_MAX_MESSAGE_LENGTH
    retry: RetrySettings = Field(default_factory=RetrySettings)
    # Generic env names, so any value is accepted here.
    debug: str = Field(default="", validation_alias="DEBUG")
    log_level: str = Field(default="", validation_alias="LOG_LEVEL")

    @property
    def webhook_configured(self) -> bool:
        return bool(self.webhook_url.strip())

    @property
    def debug_enabled(self) -> bool:
        return self.debug.strip().lower() == "true"
