"""Retry configuration and exponential backoff with jitter."""

from __future__ import annotations

import math
import random
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import Any, Literal

MAX_RETRIES_LIMIT = 10


@dataclass(frozen=True)
class RetryConfig:
    """Retry behaviour for failed deliveries."""

    max_retries: int = 3
    base_delay_ms: int = 1000
    max_delay_ms: int = 10000

    def normalized(self) -> "RetryConfig":
        """Return a copy clamped to safe ranges.

        max_retries is kept in [0, 10], delays are non-negative and
        max_delay_ms is never below base_delay_ms.
        """
        max_retries = max(0, min(MAX_RETRIES_LIMIT, int(self.max_retries)))
        base_delay_ms = max(0, int(self.base_delay_ms))
        max_delay_ms = max(base_delay_ms, int(self.max_delay_ms))
        return replace(
            self,
            max_retries=max_retries,
            base_delay_ms=base_delay_ms,
            max_delay_ms=max_delay_ms,
        )


# ``False`` disables retries entirely.
RetrySetting = RetryConfig | Mapping[str, Any] | Literal[False] | None


def default_retry_config() -> RetryConfig:
    """Return a fresh default config (3 retries, 1s base, 10s cap)."""
    return RetryConfig()


def normalize_retry_config(retry: RetrySetting) -> RetryConfig | Literal[False]:
    """Turn a caller-supplied retry setting into an independent, clamped config."""
    if retry is False:
        return False
    if retry is None:
        return default_retry_config().normalized()
    if isinstance(retry, Mapping):
        defaults = default_retry_config()
        retry = RetryConfig(
            max_retries=retry.get("max_retries", defaults.max_retries),
            base_delay_ms=retry.get("base_delay_ms", defaults.base_delay_ms),
            max_delay_ms=retry.get("max_delay_ms", defaults.max_delay_ms),
        )
    return retry.normalized()


def compute_backoff(
    attempt: int,
    config: RetryConfig,
    rand: Callable[[float, float], float] = random.uniform,
) -> int:
    """
    Delay in milliseconds to wait after the given 0-indexed attempt.

    The exponential delay is capped at max_delay_ms, then scaled by a random
    factor in [0.5, 1.0] so concurrent callers do not retry in lockstep.
    """
    delay = config.base_delay_ms * 2**attempt
    capped = min(delay, config.max_delay_ms)
    return math.floor(capped * rand(0.5, 1.0))
