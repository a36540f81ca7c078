"""Configuration loading utilities."""

import os
from pathlib import Path

from text2slack.config.schema import Config

_QUOTES = ('"', "'")


def get_env_path() -> Path:
    """Get the default .env file path (current working directory)."""
    return Path.cwd() / ".env"


def _parse_env_line(line: str) -> tuple[str, str] | None:
    """Parse one ``KEY=value`` line; None for blanks, comments and junk."""
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    # Shell-style files are accepted as-is.
    line = line.removeprefix("export ").lstrip()
    key, sep, value = line.partition("=")
    if not sep:
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        value = value[1:-1]
    return key.strip(), value


def _load_dotenv(env_path: Path) -> dict[str, str]:
    """Read a .env file into a dict. No interpolation or multi-line values."""
    if not env_path.exists():
        return {}
    lines = env_path.read_text(encoding="utf-8").splitlines()
    return dict(pair for pair in map(_parse_env_line, lines) if pair is not None)


def _inject_env(env_path: Path) -> None:
    """Copy .env values into os.environ without overriding real variables."""
    for key, value in _load_dotenv(env_path).items():
        os.environ.setdefault(key, value)


def load_config(env_path: Path | None = None) -> Config:
    """
    Load configuration from the environment and an optional .env file.

    Resolution order (highest priority wins):
      1. Real environment variables (e.g. export SLACK_WEBHOOK_URL=…)
      2. .env file (./.env unless ``env_path`` is given)
      3. Defaults

    Args:
        env_path: Optional path to a .env file.

    Returns:
        Loaded configuration object.
    """
    _inject_env(env_path or get_env_path())
    return Config()
