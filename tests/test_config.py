"""Tests for environment and .env configuration loading."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from text2slack.config.loader import _load_dotenv, _parse_env_line, load_config
from text2slack.config.schema import Config, RetrySettings
from text2slack.delivery.retry import RetryConfig

_ENV_KEYS = [
    "SLACK_WEBHOOK_URL",
    "TEXT2SLACK_WEBHOOK_URL",
    "TEXT2SLACK_TIMEOUT_MS",
    "TEXT2SLACK_MAX_MESSAGE_LENGTH",
    "TEXT2SLACK_RETRY__ENABLED",
    "TEXT2SLACK_RETRY__MAX_RETRIES",
    "TEXT2SLACK_RETRY__BASE_DELAY_MS",
    "TEXT2SLACK_RETRY__MAX_DELAY_MS",
    "DEBUG",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path: Path):
    # setenv first so monkeypatch restores "unset" even if load_config injects values
    for key in _ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


def test_defaults() -> None:
    cfg = Config()
    assert cfg.webhook_url == ""
    assert cfg.webhook_configured is False
    assert cfg.timeout_ms == 30_000
    assert cfg.max_message_length == 4000
    assert cfg.retry == RetrySettings()
    assert cfg.retry.to_retry_config() == RetryConfig(3, 1000, 10000)
    assert cfg.debug_enabled is False


def test_reads_slack_webhook_url_and_overrides(monkeypatch) -> None:
    monkeypatch.setenv("SLACK_WEBHOOK_URL", "https://hooks.slack.com/services/A/B/C")
    monkeypatch.setenv("TEXT2SLACK_TIMEOUT_MS", "5000")
    monkeypatch.setenv("TEXT2SLACK_RETRY__MAX_RETRIES", "5")
    monkeypatch.setenv("TEXT2SLACK_RETRY__BASE_DELAY_MS", "250")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("DEBUG", "true")

    cfg = load_config()

    assert cfg.webhook_url == "https://hooks.slack.com/services/A/B/C"
    assert cfg.webhook_configured is True
    assert cfg.timeout_ms == 5000
    assert cfg.retry.to_retry_config() == RetryConfig(max_retries=5, base_delay_ms=250, max_delay_ms=10000)
    assert cfg.log_level == "debug"
    assert cfg.debug_enabled is True


def test_prefixed_webhook_url_alias(monkeypatch) -> None:
    monkeypatch.setenv("TEXT2SLACK_WEBHOOK_URL", "https://example.com/hook")
    assert load_config().webhook_url == "https://example.com/hook"


def test_retry_can_be_disabled(monkeypatch) -> None:
    monkeypatch.setenv("TEXT2SLACK_RETRY__ENABLED", "false")
    assert load_config().retry.to_retry_config() is False


def test_non_boolean_debug_value_is_tolerated(monkeypatch) -> None:
    monkeypatch.setenv("DEBUG", "express:*")
    assert load_config().debug_enabled is False


def test_dotenv_file_is_loaded(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# webhook\n"
        "SLACK_WEBHOOK_URL='https://hooks.slack.com/services/X/Y/Z'\n"
        "export TEXT2SLACK_TIMEOUT_MS=1234\n",
        encoding="utf-8",
    )

    cfg = load_config()

    assert cfg.webhook_url == "https://hooks.slack.com/services/X/Y/Z"
    assert cfg.timeout_ms == 1234


def test_real_environment_wins_over_dotenv(monkeypatch, tmp_path: Path) -> None:
    env_file = tmp_path / "custom.env"
    env_file.write_text("SLACK_WEBHOOK_URL=https://from-file.example.com/hook\n", encoding="utf-8")
    monkeypatch.setenv("SLACK_WEBHOOK_URL", "https://from-env.example.com/hook")

    cfg = load_config(env_file)

    assert cfg.webhook_url == "https://from-env.example.com/hook"
    assert os.environ["SLACK_WEBHOOK_URL"] == "https://from-env.example.com/hook"


def test_load_dotenv_parsing(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text('A=1\n\n# comment\nB = "two"\nnot a pair\nC=\n', encoding="utf-8")

    assert _load_dotenv(env_file) == {"A": "1", "B": "two", "C": ""}
    assert _load_dotenv(tmp_path / "missing.env") == {}


def test_parse_env_line() -> None:
    assert _parse_env_line("export KEY = 'v=1'") == ("KEY", "v=1")
    assert _parse_env_line("  # note") is None
    assert _parse_env_line("JUSTTEXT") is None
