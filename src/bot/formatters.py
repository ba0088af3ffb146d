"""Format analysis reports into Telegram HTML messages."""

import html

from src.detector.models import AnalysisReport, RiskTier

RISK_EMOJI = {
    RiskTier.CRITICAL: "🚨",
    RiskTier.HIGH: "⚠️",
    RiskTier.MEDIUM: "🟡",
    RiskTier.LOW: "✅",
    RiskTier.SAFE: "✅",
}

START_TEXT = (
    "👋 <b>Welcome to Solana Rug Pull Detector!</b>\n\n"
    "I help you avoid rug pulls on Solana.\n\n"
    "Use /check &lt;TOKEN_SYMBOL&gt; to analyze any token before buying.\n"
    "Example: /check BONK\n\n"
    "Stay safe! 🛡️"
)

HELP_TEXT = (
    "🛡️ <b>Solana Rug Pull Detector Bot</b>\n\n"
    "Available commands:\n"
    "• /check &lt;TOKEN&gt; - Analyze token for rug pull risk\n"
    "• /alerts - Info about real-time alerts\n"
    "• /help - Show this help message\n\n"
    "You can also just send a symbol, e.g. <code>BONK</code>\n\n"
    "⚠️ <b>Disclaimer</b>: This is an automated analysis. Always do your own research!"
)

ALERTS_TEXT = (
    "🔔 <b>Real-Time Alerts</b>\n\n"
    "High risk tokens (score 80+) are flagged as CRITICAL.\n"
    "Automatic push alerts are not enabled yet, "
    "check any token manually with /check."
)

_SECTIONS = (
    ("🔴", "ON-CHAIN ISSUES", "on_chain"),
    ("🟡", "SOCIAL RED FLAGS", "social"),
    ("🟠", "CODE VULNERABILITIES", "code"),
)


def format_report(report: AnalysisReport) -> str:
    """Full /check reply: score, per-source issues, recommendation."""
    emoji = RISK_EMOJI[report.risk_level]
    symbol = html.escape(report.token)
    lines = [
        f"{emoji} <b>RUG PULL ANALYSIS: ${symbol}</b>\n",
        f"📊 <b>Risk Score: {report.risk_score}/100</b> ({report.risk_level.value})\n",
    ]

    for icon, title, attr in _SECTIONS:
        flags = getattr(report.analysis, attr).red_flags
        if not flags:
            continue
        lines.append(f"{icon} <b>{title}:</b>")
        lines.extend(f"• {html.escape(flag)}" for flag in flags)
        lines.append("")

    lines.append(f"💡 <b>RECOMMENDATION: {html.escape(report.recommendations[0])}</b>")
    lines.append(f"\n<code>{html.escape(report.mint_address)}</code>")
    return "\n".join(lines)


def format_short(report: AnalysisReport) -> str:
    """One-liner reply for plain-text symbol lookups."""
    emoji = RISK_EMOJI[report.risk_level]
    return (
        f"{emoji} ${html.escape(report.token)} Risk Score: {report.risk_score}/100 "
        f"({report.risk_level.value})\n\n💡 {html.escape(report.recommendations[0])}"
    )
