"""Retry policy applied by the calling layer around pipeline operations."""

from __future__ import annotations

import time
from typing import Any, Callable, TypeVar

from tenacity import Retrying, retry_if_exception, stop_after_attempt, wait_exponential

from seecat_enrichment.core.config import Settings, get_settings
from seecat_enrichment.core.exceptions import EnrichmentError
from seecat_enrichment.core.logging import get_logger

LOGGER = get_logger(__name__)

T = TypeVar("T")


def is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, EnrichmentError) and exc.retryable


def run_with_retry(
    func: Callable[..., T],
    *args: Any,
    settings: Settings | None = None,
    sleep: Callable[[float], None] = time.sleep,
    **kwargs: Any,
) -> T:
    """Call ``func`` and retry only errors flagged retryable (timeouts)."""
    resolved = settings or get_settings()
    retryer = Retrying(
        stop=stop_after_attempt(max(resolved.retry_attempts, 1)),
        wait=wait_exponential(
            multiplier=max(resolved.retry_backoff, 0.1),
            min=0.5,
            max=8,
        ),
        retry=retry_if_exception(is_retryable),
        sleep=sleep,
        reraise=True,
    )
    for attempt in retryer:
        with attempt:
            if attempt.retry_state.attempt_number > 1:
                LOGGER.warning(
                    "retry.attempt",
                    operation=getattr(func, "__name__", repr(func)),
                    attempt=attempt.retry_state.attempt_number,
                )
            return func(*args, **kwargs)
    raise RuntimeError("retry loop exited without a result")


__all__ = ["is_retryable", "run_with_retry"]
