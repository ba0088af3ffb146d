"""Deterministic fixture analyzers for demo mode and tests.

No network access. Each identifier maps to a DemoScenario: explicit
scenarios first, then keyword rules ("fake"/"rug" critical, "moon"/"shot"
high, anything else low). Every call returns a fresh copy of the
scenario's sub-analysis, so one report never shares flag lists with
another.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass

from src.detector.models import SubAnalysis, TokenInfo


@dataclass(frozen=True)
class DemoScenario:
    on_chain: SubAnalysis
    social: SubAnalysis
    code: SubAnalysis
    name: str = ""


# 0.5*95 + 0.3*90 + 0.2*85 = 91.5 -> 92
CRITICAL_SCENARIO = DemoScenario(
    on_chain=SubAnalysis(
        risk_score=95,
        red_flags=[
            "Active mint authority - developers can create unlimited tokens",
            "Single wallet holds 95% of supply - extreme concentration",
        ],
    ),
    social=SubAnalysis(
        risk_score=90,
        red_flags=["Bot activity detected", "Fake influencer campaigns"],
    ),
    code=SubAnalysis(
        risk_score=85,
        red_flags=["Backdoor functions found", "Upgradeable contract without timelock"],
    ),
)

# 0.5*85 + 0.3*75 + 0.2*65 = 78
HIGH_SCENARIO = DemoScenario(
    on_chain=SubAnalysis(
        risk_score=85,
        red_flags=["LP tokens not locked - liquidity can be pulled at any time"],
    ),
    social=SubAnalysis(
        risk_score=75,
        red_flags=["Suspicious Telegram activity"],
    ),
    code=SubAnalysis(risk_score=65),
)

# 0.5*20 + 0.3*30 + 0.2*20 = 23
LOW_SCENARIO = DemoScenario(
    on_chain=SubAnalysis(
        risk_score=20,
        green_flags=["LP locked", "Mint authority renounced"],
    ),
    social=SubAnalysis(risk_score=30),
    code=SubAnalysis(risk_score=20, green_flags=["Audited", "No upgradeable functions"]),
)

KEYWORD_SCENARIOS: list[tuple[tuple[str, ...], DemoScenario]] = [
    (("fake", "rug"), CRITICAL_SCENARIO),
    (("moon", "shot"), HIGH_SCENARIO),
]


class ScenarioBook:
    """Looks up the scenario for a token identifier."""

    def __init__(
        self,
        scenarios: Mapping[str, DemoScenario] | None = None,
        *,
        unknown_tokens: Collection[str] = (),
    ) -> None:
        self._scenarios = {k.lower(): v for k, v in (scenarios or {}).items()}
        self._unknown = {t.lower() for t in unknown_tokens}

    def is_known(self, identifier: str) -> bool:
        return identifier.lower() not in self._unknown

    def lookup(self, identifier: str) -> DemoScenario:
        key = identifier.lower()
        explicit = self._scenarios.get(key)
        if explicit is not None:
            return explicit
        for keywords, scenario in KEYWORD_SCENARIOS:
            if any(word in key for word in keywords):
                return scenario
        return LOW_SCENARIO


class FixtureChainAnalyzer:
    def __init__(self, book: ScenarioBook) -> None:
        self._book = book

    async def get_token_info(self, identifier: str) -> TokenInfo | None:
        if not self._book.is_known(identifier):
            return None
        return TokenInfo(
            symbol=identifier.upper(),
            mint_address=f"{identifier.lower()}_mint_address",
        )

    async def analyze_token_economics(self, identifier: str) -> SubAnalysis:
        return self._book.lookup(identifier).on_chain.model_copy(deep=True)


class FixtureSocialAnalyzer:
    def __init__(self, book: ScenarioBook) -> None:
        self._book = book

    async def analyze_social_signals(self, identifier: str) -> SubAnalysis:
        return self._book.lookup(identifier).social.model_copy(deep=True)


class FixtureCodeAnalyzer:
    def __init__(self, book: ScenarioBook) -> None:
        self._book = book

    async def analyze_code(self, identifier: str) -> SubAnalysis:
        return self._book.lookup(identifier).code.model_copy(deep=True)
