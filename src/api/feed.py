"""In-memory feed of recent analyses for the dashboard live feed.

Single event loop, so no locking. Contents are lost on restart.
"""

from __future__ import annotations

from collections import deque
from datetime import datetime

from pydantic import BaseModel

from src.detector.models import AnalysisReport, RiskTier


class FeedEntry(BaseModel):
    token: str
    mint_address: str
    risk_score: int
    risk_level: RiskTier
    red_flags: list[str]
    timestamp: datetime


class LiveFeed:
    """Bounded, newest-first list of recent reports."""

    def __init__(self, max_size: int = 20) -> None:
        self._entries: deque[FeedEntry] = deque(maxlen=max_size)

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, report: AnalysisReport) -> None:
        self._entries.appendleft(
            FeedEntry(
                token=report.token,
                mint_address=report.mint_address,
                risk_score=report.risk_score,
                risk_level=report.risk_level,
                red_flags=report.red_flags,
                timestamp=report.timestamp,
            )
        )

    def recent(self, limit: int = 10) -> list[FeedEntry]:
        return list(self._entries)[:limit]
