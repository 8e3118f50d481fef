"""Bounded retry with jittered backoff for fallible operations."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import replace
from typing import Any, Callable, TypeVar

from .models import RetryConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


def backoff_ms(config: RetryConfig, rng: random.Random | None = None) -> int:
    """Return the sleep before the next attempt, clamped at zero.

    The result always lies in ``[max(0, base - jitter), base + jitter]``.
    """
    rng = rng or random
    offset = rng.randint(-config.jitter_ms, config.jitter_ms) if config.jitter_ms else 0
    return max(0, config.base_delay_ms + offset)


def retry(config: RetryConfig, operation: Callable[..., T], *args: Any) -> T:
    """Call ``operation(*args)``, retrying up to ``config.max_retries`` times.

    Each failed attempt logs one line. Errors outside ``config.retry_on`` are
    raised immediately; once retries run out the last error is raised as is.
    """
    name = getattr(operation, "__name__", repr(operation))
    try:
        return operation(*args)
    except config.retry_on as exc:
        if config.max_retries <= 0:
            logger.error("%s failed, no retries left: %s", name, exc)
            raise
        error = exc

    sleep_ms = backoff_ms(config)
    logger.warning(
        "%s failed (%d retries left), sleeping %dms: %s",
        name,
        config.max_retries,
        sleep_ms,
        error,
    )
    time.sleep(sleep_ms / 1000)
    return retry(replace(config, max_retries=config.max_retries - 1), operation, *args)
