"""Retry helper for stats fetches that hit a flaky backend."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any, Awaitable, Callable, TypeVar

from squadboard.engine.errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def backoff_delay(attempt: int, base_delay: float, max_delay: float) -> float:
    """Jittered delay before retry number *attempt* (0-based)."""
    return min(base_delay * (2 ** attempt), max_delay) * random.uniform(0.5, 1.0)


async def retry_with_backoff(
    fn: Callable[..., Awaitable[T]],
    *args: Any,
    max_attempts: int = 3,
    base_delay: float = 0.5,
    max_delay: float = 8.0,
    **kwargs: Any,
) -> T:
    """Await ``fn(*args, **kwargs)``, retrying on ``UpstreamUnavailableError``.

    ``NotFoundError`` and anything else propagate on the first failure.
    After *max_attempts* tries the last ``UpstreamUnavailableError`` is
    re-raised.
    """
    attempts = max(1, max_attempts)
    attempt = 0
    while True:
        try:
            return await fn(*args, **kwargs)
        except UpstreamUnavailableError as exc:
            attempt += 1
            if attempt >= attempts:
                logger.error(
                    "Giving up on player %s after %d attempts: %s",
                    exc.player_id,
                    attempts,
                    exc.reason,
                )
                raise
            delay = backoff_delay(attempt - 1, base_delay, max_delay)
            logger.warning(
                "Backend unavailable for player %s (%s), attempt %d/%d, "
                "retrying in %.1fs",
                exc.player_id,
                exc.reason,
                attempt,
                attempts,
                delay,
            )
            await asyncio.sleep(delay)
