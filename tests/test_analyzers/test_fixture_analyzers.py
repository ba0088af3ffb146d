"""Tests for demo-mode fixture analyzers."""

import pytest

from src.analyzers.factory import AnalyzerSet, create_detector
from src.analyzers.fixtures import (
    CRITICAL_SCENARIO,
    HIGH_SCENARIO,
    LOW_SCENARIO,
    DemoScenario,
    FixtureChainAnalyzer,
    FixtureCodeAnalyzer,
    FixtureSocialAnalyzer,
    ScenarioBook,
)
from src.detector.exceptions import NotFoundError
from src.detector.models import RiskTier, SubAnalysis


def _detector(book: ScenarioBook):
    return create_detector(
        AnalyzerSet(
            chain=FixtureChainAnalyzer(book),
            social=FixtureSocialAnalyzer(book),
            code=FixtureCodeAnalyzer(book),
        )
    )


class TestScenarioBook:
    @pytest.mark.parametrize(
        ("identifier", "scenario"),
        [
            ("FAKECOIN", CRITICAL_SCENARIO),
            ("rugme", CRITICAL_SCENARIO),
            ("MOONSHOT", HIGH_SCENARIO),
            ("shotgun", HIGH_SCENARIO),
            ("BONK", LOW_SCENARIO),
        ],
    )
    def test_keyword_rules(self, identifier: str, scenario: DemoScenario) -> None:
        assert ScenarioBook().lookup(identifier) is scenario

    def test_fake_wins_over_moon(self) -> None:
        assert ScenarioBook().lookup("FAKEMOON") is CRITICAL_SCENARIO

    def test_explicit_scenario_wins(self) -> None:
        custom = DemoScenario(
            on_chain=SubAnalysis(risk_score=1),
            social=SubAnalysis(risk_score=2),
            code=SubAnalysis(risk_score=3),
        )
        book = ScenarioBook({"FakeCoin": custom})
        assert book.lookup("fakecoin") is custom

    def test_unknown_tokens(self) -> None:
        book = ScenarioBook(unknown_tokens=["GHOST"])
        assert not book.is_known("ghost")
        assert book.is_known("BONK")


class TestFixtureAnalyzers:
    @pytest.mark.asyncio
    async def test_token_info(self) -> None:
        info = await FixtureChainAnalyzer(ScenarioBook()).get_token_info("Bonk")
        assert info is not None
        assert info.symbol == "BONK"
        assert info.mint_address == "bonk_mint_address"

    @pytest.mark.asyncio
    async def test_unknown_token_info(self) -> None:
        book = ScenarioBook(unknown_tokens=["GHOST"])
        assert await FixtureChainAnalyzer(book).get_token_info("GHOST") is None

    @pytest.mark.asyncio
    async def test_sub_analyses_from_scenario(self) -> None:
        book = ScenarioBook()
        assert await FixtureSocialAnalyzer(book).analyze_social_signals("RUG") == CRITICAL_SCENARIO.social
        assert await FixtureCodeAnalyzer(book).analyze_code("MOON") == HIGH_SCENARIO.code

    @pytest.mark.asyncio
    async def test_returns_fresh_copy(self) -> None:
        result = await FixtureChainAnalyzer(ScenarioBook()).analyze_token_economics("RUG")
        assert result == CRITICAL_SCENARIO.on_chain
        assert result is not CRITICAL_SCENARIO.on_chain
        assert result.red_flags is not CRITICAL_SCENARIO.on_chain.red_flags


class TestDemoReports:
    @pytest.mark.asyncio
    async def test_critical(self) -> None:
        report = await _detector(ScenarioBook()).analyze("FAKECOIN")
        assert report.risk_score == 92
        assert report.risk_level == RiskTier.CRITICAL
        assert report.recommendations[0] == "DO NOT BUY - HIGH RUG PULL RISK"
        assert "...and 1 more issues" in report.summary

    @pytest.mark.asyncio
    async def test_high(self) -> None:
        report = await _detector(ScenarioBook()).analyze("MOONSHOT")
        assert report.risk_score == 78
        assert report.risk_level == RiskTier.HIGH

    @pytest.mark.asyncio
    async def test_low(self) -> None:
        report = await _detector(ScenarioBook()).analyze("BONK")
        assert report.risk_score == 23
        assert report.risk_level == RiskTier.LOW
        assert report.red_flags == []
        assert report.summary.endswith("APPEARS SAFE")

    @pytest.mark.asyncio
    async def test_reports_do_not_share_flags(self) -> None:
        detector = _detector(ScenarioBook())
        first = await detector.analyze("RUGCOIN")
        first.analysis.on_chain.red_flags.append("injected")
        first.analysis.social.details["extra"] = True

        second = await detector.analyze("FAKETOKEN")

        assert "injected" not in second.red_flags
        assert "- injected" not in second.summary
        assert second.analysis.social.details == {}
        assert second.recommendations == first.recommendations
        assert CRITICAL_SCENARIO.on_chain.red_flags == [
            "Active mint authority - developers can create unlimited tokens",
            "Single wallet holds 95% of supply - extreme concentration",
        ]

    @pytest.mark.asyncio
    async def test_unknown_raises(self) -> None:
        with pytest.raises(NotFoundError):
            await _detector(ScenarioBook(unknown_tokens=["GHOST"])).analyze("GHOST")
