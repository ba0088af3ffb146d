"""Token symbol -> mint address resolution via public token lists.

Lists are tried in order; the first exact (case-insensitive) symbol or
name match with a valid address wins. Resolved symbols are cached for
the lifetime of the resolver.
"""

from typing import Any

import base58
import httpx
from loguru import logger

from src.detector.exceptions import SubAnalyzerError

TOKEN_LIST_URLS = [
    "https://raw.githubusercontent.com/solana-labs/token-list/main/src/tokens/solana.tokenlist.json",
    "https://api.raydium.io/v2/sdk/token",
    "https://tokens.jup.ag/tokens",
]

# Container keys seen across token list formats
_LIST_KEYS = ("tokens", "data", "official", "unOfficial")


class TokenListError(SubAnalyzerError):
    """A token list could not be fetched or parsed."""


def is_valid_address(value: str) -> bool:
    """True if value is a base58-encoded 32-byte Solana public key."""
    try:
        return len(base58.b58decode(value)) == 32
    except ValueError:
        return False


class TokenResolver:
    """Resolve symbols to mint addresses, with an in-process cache."""

    def __init__(
        self,
        token_list_urls: list[str] | None = None,
        jupiter_api_key: str = "",
    ) -> None:
        self._urls = token_list_urls if token_list_urls is not None else TOKEN_LIST_URLS
        headers: dict[str, str] = {}
        if jupiter_api_key:
            headers["x-api-key"] = jupiter_api_key
        self._client = httpx.AsyncClient(timeout=5.0, headers=headers)
        self._cache: dict[str, str] = {}

    async def close(self) -> None:
        await self._client.aclose()

    async def resolve(self, identifier: str) -> str | None:
        """Return the mint address for a symbol or address, None if unknown."""
        identifier = identifier.strip()
        if not identifier:
            return None
        if is_valid_address(identifier):
            return identifier

        key = identifier.lower()
        cached = self._cache.get(key)
        if cached:
            return cached

        for url in self._urls:
            try:
                mint = await self._search_list(url, key)
            except TokenListError as e:
                logger.warning(f"[RESOLVER] {e}")
                continue
            if mint:
                logger.debug(f"[RESOLVER] {identifier} -> {mint[:12]}... via {url}")
                self._cache[key] = mint
                return mint

        logger.info(f"[RESOLVER] Could not resolve symbol {identifier}")
        return None

    async def _search_list(self, url: str, key: str) -> str | None:
        try:
            resp = await self._client.get(url)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TokenListError(f"Failed to fetch token list {url}: {e}") from e

        for token in _extract_tokens(data):
            symbol = str(token.get("symbol") or "").lower()
            name = str(token.get("name") or "").lower()
            if key not in (symbol, name):
                continue
            address = token.get("address") or token.get("mint") or ""
            if address and is_valid_address(address):
                return address
        return None


def _extract_tokens(data: Any) -> list[dict]:
    """Flatten the various token list layouts into a list of token dicts."""
    if isinstance(data, list):
        return [t for t in data if isinstance(t, dict)]
    if not isinstance(data, dict):
        return []

    tokens: list[dict] = []
    for list_key in _LIST_KEYS:
        value = data.get(list_key)
        if isinstance(value, list):
            tokens.extend(t for t in value if isinstance(t, dict))
    if tokens:
        return tokens

    # Mapping of mint -> token dict
    return [t for t in data.values() if isinstance(t, dict)]
