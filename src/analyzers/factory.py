"""Analyzer wiring: picks fixture or live collaborators.

demo_mode is passed in explicitly by the caller; nothing here reads
process environment.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from config.settings import Settings
from src.analyzers.base import ChainAnalyzer, CodeAnalyzer, SocialAnalyzer
from src.analyzers.chain import LiveChainAnalyzer
from src.analyzers.code import LiveCodeAnalyzer
from src.analyzers.fixtures import (
    DemoScenario,
    FixtureChainAnalyzer,
    FixtureCodeAnalyzer,
    FixtureSocialAnalyzer,
    ScenarioBook,
)
from src.analyzers.social import LiveSocialAnalyzer
from src.detector.orchestrator import RugPullDetector
from src.parsers.rugcheck.client import RugcheckClient
from src.parsers.solana_rpc.client import SolanaRpcClient
from src.parsers.token_resolver import TokenResolver
from src.parsers.twitter.client import TwitterClient


@dataclass
class AnalyzerSet:
    chain: ChainAnalyzer
    social: SocialAnalyzer
    code: CodeAnalyzer
    clients: list[Any] = field(default_factory=list)

    async def close(self) -> None:
        """Close underlying HTTP clients (no-op for fixtures)."""
        for client in self.clients:
            await client.close()
        self.clients.clear()


def create_analyzers(
    demo_mode: bool,
    *,
    settings: Settings,
    scenarios: Mapping[str, DemoScenario] | None = None,
) -> AnalyzerSet:
    """Build the three collaborators.

    Live mode raises ValueError when the Twitter API key is missing.
    """
    if demo_mode:
        logger.info("[FACTORY] Demo mode: using fixture analyzers")
        book = ScenarioBook(scenarios)
        return AnalyzerSet(
            chain=FixtureChainAnalyzer(book),
            social=FixtureSocialAnalyzer(book),
            code=FixtureCodeAnalyzer(book),
        )

    if not settings.twitter_api_key:
        raise ValueError("TWITTER_API_KEY is required when demo_mode is off")

    logger.info(f"[FACTORY] Live mode: RPC {settings.rpc_url.split('?')[0]}")
    rpc = SolanaRpcClient(settings.rpc_url, max_rps=settings.rpc_max_rps)
    resolver = TokenResolver(jupiter_api_key=settings.jupiter_api_key)
    rugcheck = RugcheckClient(max_rps=settings.rugcheck_max_rps)
    twitter = TwitterClient(settings.twitter_api_key, max_rps=settings.twitter_max_rps)

    return AnalyzerSet(
        chain=LiveChainAnalyzer(
            rpc, resolver, rugcheck, lp_locked_min_pct=settings.lp_locked_min_pct
        ),
        social=LiveSocialAnalyzer(twitter, resolver),
        code=LiveCodeAnalyzer(rpc, resolver),
        clients=[rpc, resolver, rugcheck, twitter],
    )


def create_detector(analyzers: AnalyzerSet) -> RugPullDetector:
    return RugPullDetector(analyzers.chain, analyzers.social, analyzers.code)
