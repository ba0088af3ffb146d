"""Shared test fixtures."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from src.detector.models import SubAnalysis, TokenInfo
from src.detector.orchestrator import RugPullDetector

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


def make_analysis(score: float, *flags: str) -> SubAnalysis:
    return SubAnalysis(risk_score=score, red_flags=list(flags))


@pytest.fixture
def chain() -> AsyncMock:
    """Chain collaborator that resolves every token as TEST."""
    mock = AsyncMock()
    mock.get_token_info.return_value = TokenInfo(symbol="TEST", mint_address="TestMint111")
    mock.analyze_token_economics.return_value = make_analysis(
        80, "Active mint authority - developers can create unlimited tokens"
    )
    return mock


@pytest.fixture
def social() -> AsyncMock:
    mock = AsyncMock()
    mock.analyze_social_signals.return_value = make_analysis(60, "Suspicious social activity")
    return mock


@pytest.fixture
def code() -> AsyncMock:
    mock = AsyncMock()
    mock.analyze_code.return_value = make_analysis(40, "Potential backdoor function")
    return mock


@pytest.fixture
def detector(chain: AsyncMock, social: AsyncMock, code: AsyncMock) -> RugPullDetector:
    return RugPullDetector(chain, social, code, clock=lambda: FIXED_NOW)
