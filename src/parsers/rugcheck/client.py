"""Rugcheck.xyz client: LP lock status for the chain analyzer.

Rugcheck is an optional signal: any upstream problem yields None and the
chain analyzer scores the LP component as unknown instead of failing.
"""

import asyncio

import httpx
from loguru import logger

from src.parsers.rate_limiter import RateLimiter
from src.parsers.rugcheck.models import RugcheckReport

BASE_URL = "https://api.rugcheck.xyz/v1"
MAX_RETRIES = 2
RETRY_DELAYS = [2.0, 5.0]


class RugcheckClient:
    """Async client for the free, keyless Rugcheck API."""

    def __init__(self, max_rps: float = 2.0) -> None:
        self._rate_limiter = RateLimiter(max_rps)
        self._client = httpx.AsyncClient(base_url=BASE_URL, timeout=15.0)

    async def close(self) -> None:
        await self._client.aclose()

    async def get_token_report(self, mint: str) -> RugcheckReport | None:
        """Report summary for a mint, None when unknown or unavailable."""
        data = await self._fetch(f"/tokens/{mint}/report/summary")
        if data is None:
            return None
        report = RugcheckReport.from_summary(data, mint)
        logger.debug(
            f"[RUGCHECK] {mint[:12]}... score={report.score} "
            f"lp_locked={report.lp_locked_pct} dangers={len(report.danger_risks)}"
        )
        return report

    async def _fetch(self, path: str) -> dict | None:
        for attempt in range(MAX_RETRIES + 1):
            delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
            await self._rate_limiter.acquire()
            try:
                resp = await self._client.get(path)
            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt == MAX_RETRIES:
                    logger.warning(f"[RUGCHECK] {path} failed after {attempt + 1} attempts: {e}")
                    return None
                logger.debug(f"[RUGCHECK] {type(e).__name__}, retry in {delay}s")
                await asyncio.sleep(delay)
                continue

            if resp.status_code == 429 and attempt < MAX_RETRIES:
                logger.debug(f"[RUGCHECK] Rate limited, waiting {delay}s")
                await asyncio.sleep(delay)
                continue
            if resp.status_code != 200:
                if resp.status_code != 404:
                    logger.warning(f"[RUGCHECK] HTTP {resp.status_code} for {path}")
                return None
            return resp.json()

        return None
