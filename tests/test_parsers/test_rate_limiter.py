"""Tests for RateLimiter pacing."""

import asyncio

import pytest

from src.parsers.rate_limiter import RateLimiter


@pytest.mark.asyncio
async def test_spaces_out_requests():
    limiter = RateLimiter(max_rps=20)  # 50ms interval
    loop = asyncio.get_running_loop()
    start = loop.time()
    for _ in range(3):
        await limiter.acquire()
    # first call is immediate, two more waits of ~50ms
    assert loop.time() - start >= 0.08


@pytest.mark.asyncio
async def test_concurrent_callers_serialized():
    limiter = RateLimiter(max_rps=20)
    loop = asyncio.get_running_loop()
    start = loop.time()
    await asyncio.gather(*(limiter.acquire() for _ in range(3)))
    assert loop.time() - start >= 0.08


def test_rejects_non_positive_rate():
    with pytest.raises(ValueError):
        RateLimiter(max_rps=0)
