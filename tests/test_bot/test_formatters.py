"""Tests for Telegram report formatting."""

from datetime import UTC, datetime

from src.bot.formatters import format_report, format_short
from src.detector.models import AnalysisBreakdown, AnalysisReport, RiskTier, SubAnalysis


def _report(**overrides) -> AnalysisReport:
    fields = dict(
        token="MOONSHOT",
        mint_address="moonshot_mint_address",
        timestamp=datetime(2024, 6, 1, tzinfo=UTC),
        risk_score=78,
        risk_level=RiskTier.HIGH,
        analysis=AnalysisBreakdown(
            on_chain=SubAnalysis(risk_score=85, red_flags=["LP tokens not locked"]),
            social=SubAnalysis(risk_score=75, red_flags=["Suspicious Telegram activity"]),
            code=SubAnalysis(risk_score=65),
        ),
        recommendations=["EXTREME CAUTION - High risk detected", "Only invest what you can afford to lose"],
        summary="",
    )
    fields.update(overrides)
    return AnalysisReport(**fields)


def test_format_report_sections():
    text = format_report(_report())
    assert "⚠️ <b>RUG PULL ANALYSIS: $MOONSHOT</b>" in text
    assert "Risk Score: 78/100</b> (HIGH)" in text
    assert "ON-CHAIN ISSUES" in text
    assert "• LP tokens not locked" in text
    assert "SOCIAL RED FLAGS" in text
    assert "CODE VULNERABILITIES" not in text  # no code flags
    assert "RECOMMENDATION: EXTREME CAUTION - High risk detected" in text
    assert "<code>moonshot_mint_address</code>" in text


def test_format_report_escapes_html():
    report = _report(
        token="<b>X",
        analysis=AnalysisBreakdown(
            on_chain=SubAnalysis(risk_score=1, red_flags=["a < b & c"]),
            social=SubAnalysis(risk_score=1),
            code=SubAnalysis(risk_score=1),
        ),
    )
    text = format_report(report)
    assert "$&lt;b&gt;X" in text
    assert "a &lt; b &amp; c" in text


def test_format_short():
    text = format_short(_report(risk_score=92, risk_level=RiskTier.CRITICAL))
    assert text.startswith("🚨 $MOONSHOT Risk Score: 92/100 (CRITICAL)")
    assert "💡 EXTREME CAUTION" in text
