"""Per-client request pacing for the upstream HTTP APIs (RPC, Rugcheck, Twitter)."""

import asyncio


class RateLimiter:
    """Minimum-interval limiter: at most max_rps acquisitions per second.

    Concurrent callers are serialized, so sub-analyzers running in
    parallel against the same client still respect the upstream quota.
    """

    def __init__(self, max_rps: float) -> None:
        if max_rps <= 0:
            raise ValueError(f"max_rps must be positive, got {max_rps}")
        self._min_interval = 1.0 / max_rps
        self._last_request = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        async with self._lock:
            loop = asyncio.get_running_loop()
            wait = self._min_interval - (loop.time() - self._last_request)
            if wait > 0:
                await asyncio.sleep(wait)
            self._last_request = loop.time()
