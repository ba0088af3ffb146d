"""Pydantic models for sub-analysis results and the final risk report."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RiskTier(str, Enum):
    """Risk tiers, declared from least to most severe."""

    SAFE = "SAFE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def severity(self) -> int:
        return list(RiskTier).index(self)


class SubAnalysis(BaseModel):
    """Result of one sub-analyzer (chain, social or code).

    risk_score: 0 = safest, 100 = most dangerous. Values outside 0-100 are
    accepted and clamped during aggregation; NaN and infinities are rejected.
    Extra fields are kept as-is and ignored by the scoring functions.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    risk_score: float = Field(allow_inf_nan=False)
    red_flags: list[str] = []
    green_flags: list[str] = []
    details: dict[str, Any] = {}


class TokenInfo(BaseModel):
    """Basic token metadata resolved before analysis."""

    symbol: str = ""
    mint_address: str = ""
    name: str = ""
    total_supply: str | None = None
    decimals: int | None = None


class AnalysisBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    on_chain: SubAnalysis
    social: SubAnalysis
    code: SubAnalysis


class AnalysisReport(BaseModel):
    """Final rug pull risk report for a single analysis request."""

    model_config = ConfigDict(frozen=True)

    token: str
    mint_address: str
    timestamp: datetime
    risk_score: int
    risk_level: RiskTier
    analysis: AnalysisBreakdown
    recommendations: list[str]
    summary: str

    @property
    def red_flags(self) -> list[str]:
        """All red flags in report order: on-chain, social, code."""
        return (
            self.analysis.on_chain.red_flags
            + self.analysis.social.red_flags
            + self.analysis.code.red_flags
        )
