"""TwitterAPI.io client: cashtag search for social signal analysis.

Uses TwitterAPI.io (not official X API) for affordable access.
Docs: https://docs.twitterapi.io/
"""

import asyncio

import httpx
from loguru import logger

from src.detector.exceptions import SubAnalyzerError
from src.parsers.rate_limiter import RateLimiter
from src.parsers.twitter.models import TwitterSearchResult, TwitterTweet


GENERIC_SYMBOLS = {"SOL", "BTC", "ETH", "USD", "USDT", "USDC"}

MAX_RETRIES = 2
RETRY_DELAYS = [1.0, 3.0]


class TwitterApiError(SubAnalyzerError):
    """TwitterAPI.io error."""


class TwitterClient:
    """HTTP client for TwitterAPI.io tweet search."""

    BASE_URL = "https://api.twitterapi.io"

    def __init__(self, api_key: str, max_rps: float = 1.0) -> None:
        self._rate_limiter = RateLimiter(max_rps)
        self._client = httpx.AsyncClient(
            base_url=self.BASE_URL,
            timeout=15.0,
            headers={
                "X-API-Key": api_key,
                "Accept": "application/json",
            },
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: object) -> dict:
        """Rate-limited request with retry on 429, 5xx and transport errors."""
        for attempt in range(MAX_RETRIES + 1):
            await self._rate_limiter.acquire()
            try:
                response = await self._client.request(method, path, **kwargs)
                if response.status_code == 429 or response.status_code >= 500:
                    if attempt < MAX_RETRIES:
                        await asyncio.sleep(RETRY_DELAYS[attempt])
                        continue
                response.raise_for_status()
                data = response.json()
                if data.get("status") == "error":
                    raise TwitterApiError(data.get("msg", "Unknown error"))
                return data
            except httpx.HTTPStatusError as e:
                raise TwitterApiError(
                    f"HTTP {e.response.status_code}: {e.response.text[:200]}"
                ) from e
            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt < MAX_RETRIES:
                    await asyncio.sleep(RETRY_DELAYS[attempt])
                    continue
                raise TwitterApiError(f"Request failed after {MAX_RETRIES + 1} attempts: {e}") from e
            except httpx.RequestError as e:
                raise TwitterApiError(f"Request failed: {e}") from e
        raise TwitterApiError("Max retries exceeded")

    async def search_token(self, symbol: str, mint_address: str = "") -> TwitterSearchResult:
        """Search recent tweets mentioning the token.

        Raises TwitterApiError on upstream failure.
        """
        query = self._build_query(symbol, mint_address)
        if not query:
            return TwitterSearchResult()

        data = await self._request(
            "GET",
            "/twitter/tweet/advanced_search",
            params={"query": query, "queryType": "Latest", "cursor": ""},
        )
        result = self._parse_search_response(data)
        logger.debug(
            f"[TWITTER] {symbol}: {result.total_tweets} tweets, "
            f"{result.low_follower_mentions} low-follower, {result.kol_mentions} KOL"
        )
        return result

    def _build_query(self, symbol: str, mint_address: str) -> str:
        """Cashtag query, falling back to the mint prefix for generic symbols."""
        parts = []
        clean_symbol = symbol.strip().upper()
        if len(clean_symbol) >= 2 and clean_symbol not in GENERIC_SYMBOLS:
            parts.append(f'"${clean_symbol}"')
        if not parts and mint_address:
            parts.append(f'"{mint_address[:12]}"')
        if not parts:
            return ""
        return " OR ".join(parts) + " -filter:retweets lang:en"

    def _parse_search_response(self, data: dict) -> TwitterSearchResult:
        # API returns {tweets: [...]} directly or {data: {tweets: [...]}}
        if "tweets" in data:
            raw_tweets = data.get("tweets") or []
        elif isinstance(data.get("data"), dict):
            raw_tweets = data["data"].get("tweets") or []
        elif isinstance(data.get("data"), list):
            raw_tweets = data["data"]
        else:
            raw_tweets = []

        tweets = [TwitterTweet.model_validate(raw) for raw in raw_tweets if isinstance(raw, dict)]
        return TwitterSearchResult.from_tweets(tweets)
