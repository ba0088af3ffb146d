"""Solana JSON-RPC client: token supply, mint account data, largest holders."""

import asyncio
import base64
from typing import Any

import httpx
from loguru import logger

from src.detector.exceptions import SubAnalyzerError
from src.parsers.rate_limiter import RateLimiter
from src.parsers.solana_rpc.models import TokenAccountBalance, TokenSupply

MAX_RETRIES = 2
RETRY_DELAYS = [1.0, 3.0]

# "Invalid param": unknown account or not a token mint
RPC_INVALID_PARAMS = -32602


class SolanaRpcError(SubAnalyzerError):
    """Solana RPC transport or protocol failure."""


class SolanaRpcClient:
    """Async JSON-RPC client for a Solana endpoint (Helius or public)."""

    def __init__(self, rpc_url: str, max_rps: float = 5.0) -> None:
        self._rpc_url = rpc_url
        self._rate_limiter = RateLimiter(max_rps)
        self._client = httpx.AsyncClient(timeout=10.0)

    async def close(self) -> None:
        await self._client.aclose()

    async def _call(self, method: str, params: list[Any]) -> Any:
        """Send one JSON-RPC request.

        Returns the "result" field, or None when the node reports invalid
        params (unknown account). Raises SolanaRpcError otherwise.
        """
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        for attempt in range(MAX_RETRIES + 1):
            try:
                await self._rate_limiter.acquire()
                resp = await self._client.post(self._rpc_url, json=payload)

                if resp.status_code == 429 and attempt < MAX_RETRIES:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[RPC] Rate limited on {method}, waiting {delay}s")
                    await asyncio.sleep(delay)
                    continue
                if resp.status_code != 200:
                    raise SolanaRpcError(f"{method}: HTTP {resp.status_code}")

                data = resp.json()
                error = data.get("error")
                if error:
                    if error.get("code") == RPC_INVALID_PARAMS:
                        logger.debug(f"[RPC] {method} invalid params: {error.get('message')}")
                        return None
                    raise SolanaRpcError(f"{method}: RPC error {error}")
                return data.get("result")

            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt < MAX_RETRIES:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[RPC] {type(e).__name__} on {method}, retry in {delay}s")
                    await asyncio.sleep(delay)
                else:
                    raise SolanaRpcError(
                        f"{method}: failed after {MAX_RETRIES + 1} attempts: {e}"
                    ) from e

        raise SolanaRpcError(f"{method}: max retries exceeded")

    async def get_token_supply(self, mint: str) -> TokenSupply | None:
        result = await self._call("getTokenSupply", [mint, {"commitment": "confirmed"}])
        if not result or not result.get("value"):
            return None
        return TokenSupply.model_validate(result["value"])

    async def get_account_data(self, address: str) -> bytes | None:
        """Raw account data (base64-decoded), None if the account does not exist."""
        result = await self._call(
            "getAccountInfo",
            [address, {"encoding": "base64", "commitment": "confirmed"}],
        )
        if not result or not result.get("value"):
            return None
        raw = result["value"].get("data") or []
        if not raw:
            return None
        return base64.b64decode(raw[0])

    async def get_token_largest_accounts(self, mint: str) -> list[TokenAccountBalance]:
        result = await self._call(
            "getTokenLargestAccounts", [mint, {"commitment": "confirmed"}]
        )
        if not result:
            return []
        return [TokenAccountBalance.model_validate(acc) for acc in result.get("value", [])]
