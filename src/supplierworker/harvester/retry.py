"""Fixed-delay retry policy.

Every exception counts as a failed attempt; there is no backoff growth
and no jitter. Call sites pick their own attempts and delay.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, TypeVar

from ..exceptions import RetryError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryPolicy:
    """Retry an async operation up to ``max_attempts`` times."""

    max_attempts: int = 3
    delay: float = 2.0
    sleep: Callable[[float], Awaitable[Any]] = field(default=asyncio.sleep, repr=False)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    async def run(
        self,
        operation: Callable[..., Awaitable[T]],
        *args: Any,
        description: str = "operation",
    ) -> T:
        """Await ``operation(*args)`` until it succeeds.

        Raises:
            RetryError: all attempts failed; ``last_error`` holds the final cause
        """
        last_error = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await operation(*args)
            except Exception as e:
                last_error = e
                logger.warning(
                    f"{description} failed (attempt {attempt}/{self.max_attempts}): {e}"
                )
            if attempt < self.max_attempts:
                logger.info(f"Retrying {description} in {self.delay:.1f}s...")
                await self.sleep(self.delay)

        raise RetryError(
            f"{description} failed after {self.max_attempts} attempts: {last_error}",
            attempts=self.max_attempts,
            last_error=last_error,
        )
