"""Configuration module for text2slack."""

from text2slack.config.loader import get_env_path, load_config
from text2slack.config.schema import Config, RetrySettings

__all__ = ["Config", "RetrySettings", "get_env_path", "load_config"]
