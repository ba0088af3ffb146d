"""Rug pull risk scoring: weighted aggregation, tiers, recommendations, summary.

Composite = 50% on-chain + 30% social + 20% code, each sub-score clamped
to 0-100 first. The composite is rounded half-up to an integer and every
downstream decision (tier, recommendations, summary) uses that integer, so
a report never shows a score and a tier that disagree.
"""

import math
from decimal import ROUND_HALF_UP, Decimal

from src.detector.models import RiskTier, SubAnalysis

ON_CHAIN_WEIGHT = Decimal("0.5")
SOCIAL_WEIGHT = Decimal("0.3")
CODE_WEIGHT = Decimal("0.2")

# Inclusive lower bounds, checked top-down
TIER_THRESHOLDS: list[tuple[int, RiskTier]] = [
    (80, RiskTier.CRITICAL),
    (60, RiskTier.HIGH),
    (40, RiskTier.MEDIUM),
    (20, RiskTier.LOW),
]

# LOW and SAFE share the "appears legitimate" band
HEADLINE_RECOMMENDATIONS: dict[RiskTier, tuple[str, str]] = {
    RiskTier.CRITICAL: (
        "DO NOT BUY - HIGH RUG PULL RISK",
        "Avoid this token completely",
    ),
    RiskTier.HIGH: (
        "EXTREME CAUTION - High risk detected",
        "Only invest what you can afford to lose",
    ),
    RiskTier.MEDIUM: (
        "MODERATE CAUTION - Some red flags present",
        "Research thoroughly before investing",
    ),
    RiskTier.LOW: (
        "APPEARS LEGITIMATE - Low risk detected",
        "Still exercise normal caution with new tokens",
    ),
    RiskTier.SAFE: (
        "APPEARS LEGITIMATE - Low risk detected",
        "Still exercise normal caution with new tokens",
    ),
}

SUMMARY_RECOMMENDATIONS: dict[RiskTier, str] = {
    RiskTier.CRITICAL: "DO NOT BUY",
    RiskTier.HIGH: "EXTREME CAUTION",
    RiskTier.MEDIUM: "MODERATE CAUTION",
    RiskTier.LOW: "APPEARS SAFE",
    RiskTier.SAFE: "APPEARS SAFE",
}

MINT_AUTHORITY_WARNING = "Mint authority not renounced - unlimited token creation possible"
LIQUIDITY_WARNING = "Liquidity not locked - developers can remove funds anytime"
CONCENTRATION_WARNING = "High token concentration - single wallet controls majority supply"
SOCIAL_WARNING = "Social media shows suspicious activity"
CODE_WARNING = "Contract contains potential vulnerabilities"

# On-chain flag substrings (case-sensitive) -> recommendation
ON_CHAIN_FLAG_RULES: list[tuple[tuple[str, ...], str]] = [
    (("mint authority",), MINT_AUTHORITY_WARNING),
    (("liquidity", "LP"), LIQUIDITY_WARNING),
    (("concentration", "distribution"), CONCENTRATION_WARNING),
]

SUMMARY_MAX_FLAGS = 5


def normalize(score: float) -> float:
    """Clamp a raw sub-score into [0, 100].

    NaN raises ValueError rather than being clamped to a value that would
    look like a real score. SubAnalysis validation rejects it earlier, so
    this only fires for models built without validation.
    """
    if math.isnan(score):
        raise ValueError("risk score is NaN")
    return min(100.0, max(0.0, score))


def _to_decimal(score: float) -> Decimal:
    # str() keeps the shortest repr, so 45 * 0.3 is exactly 13.5
    return Decimal(str(normalize(score)))


def aggregate(on_chain: SubAnalysis, social: SubAnalysis, code: SubAnalysis) -> int:
    """Weighted composite score (0-100), rounded half-up.

    Raises ValueError if any sub-score is NaN.
    """
    weighted = (
        _to_decimal(on_chain.risk_score) * ON_CHAIN_WEIGHT
        + _to_decimal(social.risk_score) * SOCIAL_WEIGHT
        + _to_decimal(code.risk_score) * CODE_WEIGHT
    )
    return int(weighted.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def classify(score: float) -> RiskTier:
    """Map a composite score to its risk tier."""
    for threshold, tier in TIER_THRESHOLDS:
        if score >= threshold:
            return tier
    return RiskTier.SAFE


def recommend(
    score: float,
    on_chain: SubAnalysis,
    social: SubAnalysis,
    code: SubAnalysis,
) -> list[str]:
    """Build the ordered recommendation list.

    Two tier headlines first, then one entry per matching on-chain flag
    (repeats are kept), then at most one social and one code warning.
    """
    recommendations = list(HEADLINE_RECOMMENDATIONS[classify(score)])

    for flag in on_chain.red_flags:
        for needles, warning in ON_CHAIN_FLAG_RULES:
            if any(needle in flag for needle in needles):
                recommendations.append(warning)

    if social.red_flags:
        recommendations.append(SOCIAL_WARNING)
    if code.red_flags:
        recommendations.append(CODE_WARNING)

    return recommendations


def summarize(
    score: float,
    on_chain: SubAnalysis,
    social: SubAnalysis,
    code: SubAnalysis,
) -> str:
    """Render a short narrative report for chat and dashboard output."""
    level = classify(score)
    summary = (
        f"🚨 RUG PULL ALERT: This token has {level.value} RUG PULL RISK "
        f"({round_half_up(score)}/100)\n\n"
    )

    all_flags = on_chain.red_flags + social.red_flags + code.red_flags
    if all_flags:
        summary += "🔴 KEY RED FLAGS:\n"
        for flag in all_flags[:SUMMARY_MAX_FLAGS]:
            summary += f"- {flag}\n"
        if len(all_flags) > SUMMARY_MAX_FLAGS:
            summary += f"- ...and {len(all_flags) - SUMMARY_MAX_FLAGS} more issues\n"
        summary += "\n"

    summary += f"💡 RECOMMENDATION: {SUMMARY_RECOMMENDATIONS[level]}"
    return summary


def round_half_up(score: float) -> int:
    """Round to the nearest integer, .5 always away from zero."""
    return int(Decimal(str(score)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
