import asyncio
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from randstats._internal.utils.logging import get_logger

logger = get_logger(__name__)


class UpstreamLimiter:
    """
    Admits at most `max_concurrency` upstream calls at a time and keeps
    the pause the upstream asks for between consecutive calls.

    With `max_concurrency=1` calls are strictly serialized, which is what
    random.org expects from a single client.
    """

    def __init__(self, max_concurrency: int = 1) -> None:
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be positive, got {max_concurrency}")
        self._max_concurrency = max_concurrency
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._not_before = 0.0

    @property
    def max_concurrency(self) -> int:
        return self._max_concurrency

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        async with self._semaphore:
            delay = self._not_before - time.monotonic()
            if delay > 0:
                logger.debug("Waiting %.3fs before the next upstream request", delay)
                await asyncio.sleep(delay)
            yield

    def defer(self, seconds: float) -> None:
        """
        Delays the calls that have not started yet by `seconds` from now.
        """
        if seconds <= 0:
            return
        self._not_before = max(self._not_before, time.monotonic() + seconds)
