"""Tests for detector models."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from src.detector.models import AnalysisBreakdown, AnalysisReport, RiskTier, SubAnalysis


class TestSubAnalysis:
    def test_defaults(self) -> None:
        analysis = SubAnalysis(risk_score=10)
        assert analysis.red_flags == []
        assert analysis.green_flags == []
        assert analysis.details == {}

    def test_out_of_range_accepted(self) -> None:
        """Clamping happens at aggregation time, not on construction."""
        assert SubAnalysis(risk_score=150).risk_score == 150
        assert SubAnalysis(risk_score=-5).risk_score == -5

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, value: float) -> None:
        with pytest.raises(ValidationError):
            SubAnalysis(risk_score=value)

    def test_extra_fields_kept(self) -> None:
        analysis = SubAnalysis(risk_score=20, liquidity_usd=1234.5)
        assert analysis.model_extra == {"liquidity_usd": 1234.5}

    def test_frozen(self) -> None:
        analysis = SubAnalysis(risk_score=20)
        with pytest.raises(ValidationError):
            analysis.risk_score = 90

    def test_flag_lists_not_shared(self) -> None:
        a = SubAnalysis(risk_score=1)
        b = SubAnalysis(risk_score=2)
        assert a.red_flags is not b.red_flags


class TestAnalysisReport:
    def _report(self) -> AnalysisReport:
        return AnalysisReport(
            token="TEST",
            mint_address="TestMint111",
            timestamp=datetime(2024, 6, 1, tzinfo=UTC),
            risk_score=66,
            risk_level=RiskTier.HIGH,
            analysis=AnalysisBreakdown(
                on_chain=SubAnalysis(risk_score=80, red_flags=["chain"]),
                social=SubAnalysis(risk_score=60, red_flags=["social"]),
                code=SubAnalysis(risk_score=40, red_flags=["code"]),
            ),
            recommendations=["EXTREME CAUTION - High risk detected"],
            summary="summary",
        )

    def test_red_flags_in_source_order(self) -> None:
        assert self._report().red_flags == ["chain", "social", "code"]

    def test_json_dump(self) -> None:
        data = self._report().model_dump(mode="json")
        assert data["risk_level"] == "HIGH"
        assert data["analysis"]["on_chain"]["risk_score"] == 80
        assert data["timestamp"].startswith("2024-06-01T00:00:00")

    def test_tier_is_string_enum(self) -> None:
        assert RiskTier("CRITICAL") is RiskTier.CRITICAL
        assert RiskTier.MEDIUM == "MEDIUM"
