"""Rugcheck.xyz report summary, trimmed to what the chain analyzer uses."""

from typing import Any

from pydantic import BaseModel, Field


class RugcheckRisk(BaseModel):
    name: str = "unknown"
    description: str = ""
    level: str = "info"  # info | warn | danger
    score: int = 0


class RugcheckReport(BaseModel):
    """GET /tokens/{mint}/report/summary.

    lp_locked_pct: share of LP tokens locked or burned (0-100), None when
    Rugcheck has no pool data for the token.
    """

    mint: str = ""
    score: int = 0
    risks: list[RugcheckRisk] = []
    lp_locked_pct: float | None = Field(default=None, alias="lpLockedPct")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @classmethod
    def from_summary(cls, data: dict[str, Any], mint: str) -> "RugcheckReport":
        # Rugcheck sends "risks": null for tokens without findings
        return cls.model_validate({**data, "mint": mint, "risks": data.get("risks") or []})

    @property
    def danger_risks(self) -> list[RugcheckRisk]:
        return [r for r in self.risks if r.level == "danger"]
