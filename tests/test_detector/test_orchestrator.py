"""Tests for RugPullDetector orchestration."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from src.detector.exceptions import NotFoundError, SubAnalyzerError
from src.detector.models import RiskTier, SubAnalysis, TokenInfo
from src.detector.orchestrator import RugPullDetector
from src.detector.scoring import CODE_WARNING, MINT_AUTHORITY_WARNING, SOCIAL_WARNING


class TestAnalyze:
    @pytest.mark.asyncio
    async def test_full_report(self, detector: RugPullDetector) -> None:
        """80/60/40 -> 40 + 18 + 8 = 66, HIGH."""
        report = await detector.analyze("TEST")

        assert report.token == "TEST"
        assert report.mint_address == "TestMint111"
        assert report.risk_score == 66
        assert report.risk_level == RiskTier.HIGH
        assert report.timestamp.year == 2024
        assert report.recommendations == [
            "EXTREME CAUTION - High risk detected",
            "Only invest what you can afford to lose",
            MINT_AUTHORITY_WARNING,
            SOCIAL_WARNING,
            CODE_WARNING,
        ]
        assert report.summary.startswith(
            "🚨 RUG PULL ALERT: This token has HIGH RUG PULL RISK (66/100)"
        )
        assert "- Suspicious social activity" in report.summary

    @pytest.mark.asyncio
    async def test_sub_analyses_embedded_unchanged(
        self, detector: RugPullDetector, chain: AsyncMock, social: AsyncMock, code: AsyncMock,
    ) -> None:
        report = await detector.analyze("TEST")
        assert report.analysis.on_chain is chain.analyze_token_economics.return_value
        assert report.analysis.social is social.analyze_social_signals.return_value
        assert report.analysis.code is code.analyze_code.return_value

    @pytest.mark.asyncio
    async def test_identifier_passed_to_every_analyzer(
        self, detector: RugPullDetector, chain: AsyncMock, social: AsyncMock, code: AsyncMock,
    ) -> None:
        await detector.analyze("So11111111111111111111111111111111111111112")
        ident = "So11111111111111111111111111111111111111112"
        chain.get_token_info.assert_awaited_once_with(ident)
        chain.analyze_token_economics.assert_awaited_once_with(ident)
        social.analyze_social_signals.assert_awaited_once_with(ident)
        code.analyze_code.assert_awaited_once_with(ident)

    @pytest.mark.asyncio
    async def test_falls_back_to_identifier(
        self, detector: RugPullDetector, chain: AsyncMock,
    ) -> None:
        chain.get_token_info.return_value = TokenInfo()
        report = await detector.analyze("bonk")
        assert report.token == "bonk"
        assert report.mint_address == "bonk"

    @pytest.mark.asyncio
    async def test_half_point_rounds_up(
        self, detector: RugPullDetector, chain: AsyncMock, social: AsyncMock, code: AsyncMock,
    ) -> None:
        chain.analyze_token_economics.return_value = SubAnalysis(risk_score=60)
        social.analyze_social_signals.return_value = SubAnalysis(risk_score=45)
        code.analyze_code.return_value = SubAnalysis(risk_score=30)

        report = await detector.analyze("TEST")

        assert report.risk_score == 50
        assert report.risk_level == RiskTier.MEDIUM
        assert "KEY RED FLAGS" not in report.summary


class TestFailures:
    @pytest.mark.asyncio
    async def test_not_found_skips_sub_analyzers(
        self, detector: RugPullDetector, chain: AsyncMock, social: AsyncMock, code: AsyncMock,
    ) -> None:
        chain.get_token_info.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await detector.analyze("NOPE")

        assert exc_info.value.identifier == "NOPE"
        assert "Token not found or invalid: NOPE" in str(exc_info.value)
        chain.analyze_token_economics.assert_not_awaited()
        social.analyze_social_signals.assert_not_awaited()
        code.analyze_code.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_sub_analyzer_error_propagates_unchanged(
        self, detector: RugPullDetector, social: AsyncMock,
    ) -> None:
        error = SubAnalyzerError("twitter down")
        social.analyze_social_signals.side_effect = error

        with pytest.raises(SubAnalyzerError) as exc_info:
            await detector.analyze("TEST")

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_arbitrary_exception_not_wrapped(
        self, detector: RugPullDetector, code: AsyncMock,
    ) -> None:
        code.analyze_code.side_effect = KeyError("boom")
        with pytest.raises(KeyError):
            await detector.analyze("TEST")

    @pytest.mark.asyncio
    async def test_info_lookup_error_propagates(
        self, detector: RugPullDetector, chain: AsyncMock, social: AsyncMock,
    ) -> None:
        chain.get_token_info.side_effect = SubAnalyzerError("rpc down")
        with pytest.raises(SubAnalyzerError, match="rpc down"):
            await detector.analyze("TEST")
        social.analyze_social_signals.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_cancels_pending_analyzers(
        self, chain: AsyncMock, social: AsyncMock,
    ) -> None:
        """A slow sub-analyzer is cancelled when a sibling fails."""
        cancelled = asyncio.Event()

        async def slow_code(identifier: str) -> SubAnalysis:
            try:
                await asyncio.sleep(30)
            except asyncio.CancelledError:
                cancelled.set()
                raise
            return SubAnalysis(risk_score=0)

        code = AsyncMock()
        code.analyze_code.side_effect = slow_code
        social.analyze_social_signals.side_effect = SubAnalyzerError("social failed")
        detector = RugPullDetector(chain, social, code)

        with pytest.raises(SubAnalyzerError, match="social failed"):
            await detector.analyze("TEST")

        # Siblings are joined before the error reaches the caller
        assert cancelled.is_set()

    @pytest.mark.asyncio
    async def test_cancelled_sibling_cleanup_completes_before_raise(
        self, chain: AsyncMock, social: AsyncMock,
    ) -> None:
        cleaned_up = []

        async def slow_code(identifier: str) -> SubAnalysis:
            try:
                await asyncio.sleep(30)
            finally:
                await asyncio.sleep(0)
                cleaned_up.append(identifier)
            return SubAnalysis(risk_score=0)

        code = AsyncMock()
        code.analyze_code.side_effect = slow_code
        social.analyze_social_signals.side_effect = SubAnalyzerError("social failed")

        with pytest.raises(SubAnalyzerError):
            await RugPullDetector(chain, social, code).analyze("TEST")

        assert cleaned_up == ["TEST"]

    @pytest.mark.asyncio
    async def test_no_report_built_on_failure(
        self, detector: RugPullDetector, chain: AsyncMock,
    ) -> None:
        chain.analyze_token_economics.side_effect = SubAnalyzerError("chain failed")
        with pytest.raises(SubAnalyzerError):
            await detector.analyze("TEST")
