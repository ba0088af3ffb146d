"""Tests for analyzer wiring."""

import pytest

from config.settings import Settings
from src.analyzers.chain import LiveChainAnalyzer
from src.analyzers.code import LiveCodeAnalyzer
from src.analyzers.factory import create_analyzers, create_detector
from src.analyzers.fixtures import FixtureChainAnalyzer, FixtureSocialAnalyzer
from src.analyzers.social import LiveSocialAnalyzer
from src.detector.orchestrator import RugPullDetector


def _settings(**overrides: object) -> Settings:
    return Settings(_env_file=None, **overrides)


@pytest.mark.asyncio
async def test_demo_mode_uses_fixtures() -> None:
    analyzers = create_analyzers(True, settings=_settings(twitter_api_key=""))
    assert isinstance(analyzers.chain, FixtureChainAnalyzer)
    assert isinstance(analyzers.social, FixtureSocialAnalyzer)
    assert analyzers.clients == []
    await analyzers.close()


def test_live_mode_requires_twitter_key() -> None:
    with pytest.raises(ValueError, match="TWITTER_API_KEY"):
        create_analyzers(False, settings=_settings(twitter_api_key=""))


@pytest.mark.asyncio
async def test_live_mode_builds_clients() -> None:
    analyzers = create_analyzers(False, settings=_settings(twitter_api_key="key"))
    assert isinstance(analyzers.chain, LiveChainAnalyzer)
    assert isinstance(analyzers.social, LiveSocialAnalyzer)
    assert isinstance(analyzers.code, LiveCodeAnalyzer)
    assert len(analyzers.clients) == 4

    await analyzers.close()
    assert analyzers.clients == []


@pytest.mark.asyncio
async def test_detector_from_demo_analyzers() -> None:
    detector = create_detector(create_analyzers(True, settings=_settings()))
    assert isinstance(detector, RugPullDetector)
    report = await detector.analyze("RUGPULL")
    assert report.risk_score == 92


class TestRpcUrl:
    def test_explicit_helius_url(self) -> None:
        s = _settings(helius_rpc_url="https://custom.rpc", helius_api_key="k")
        assert s.rpc_url == "https://custom.rpc"

    def test_helius_key(self) -> None:
        s = _settings(helius_rpc_url="", helius_api_key="abc")
        assert s.rpc_url == "https://mainnet.helius-rpc.com/?api-key=abc"

    def test_public_fallback(self) -> None:
        s = _settings(helius_rpc_url="", helius_api_key="", solana_rpc_url="https://api.devnet.solana.com")
        assert s.rpc_url == "https://api.devnet.solana.com"
