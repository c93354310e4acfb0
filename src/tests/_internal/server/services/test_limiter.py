import asyncio
import time

import pytest

from randstats._internal.server.services.limiter import UpstreamLimiter


async def _count_concurrent(limiter: UpstreamLimiter, calls: int) -> int:
    active = 0
    max_active = 0

    async def call():
        nonlocal active, max_active
        async with limiter.slot():
            active += 1
            max_active = max(max_active, active)
            await asyncio.sleep(0.01)
            active -= 1

    await asyncio.gather(*(call() for _ in range(calls)))
    return max_active


class TestUpstreamLimiter:
    @pytest.mark.asyncio
    async def test_serializes_calls_by_default(self):
        assert await _count_concurrent(UpstreamLimiter(), calls=5) == 1

    @pytest.mark.asyncio
    async def test_bounded_concurrency(self):
        assert await _count_concurrent(UpstreamLimiter(max_concurrency=3), calls=6) == 3

    @pytest.mark.asyncio
    async def test_defer_delays_next_call(self):
        limiter = UpstreamLimiter()
        limiter.defer(0.1)
        start = time.monotonic()
        async with limiter.slot():
            pass
        assert time.monotonic() - start >= 0.09

    @pytest.mark.asyncio
    async def test_shorter_defer_does_not_shorten_delay(self):
        limiter = UpstreamLimiter()
        limiter.defer(0.1)
        limiter.defer(0.01)
        start = time.monotonic()
        async with limiter.slot():
            pass
        assert time.monotonic() - start >= 0.09

    @pytest.mark.asyncio
    async def test_non_positive_defer_is_ignored(self):
        limiter = UpstreamLimiter()
        limiter.defer(0)
        limiter.defer(-5)
        start = time.monotonic()
        async with limiter.slot():
            pass
        assert time.monotonic() - start < 0.05

    def test_invalid_max_concurrency(self):
        with pytest.raises(ValueError):
            UpstreamLimiter(max_concurrency=0)
