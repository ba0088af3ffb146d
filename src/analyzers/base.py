"""Collaborator contracts consumed by the rug pull detector.

Each analyzer produces a SubAnalysis for a token identifier (mint address
or symbol). Implementations must be safe to call concurrently.
"""

from typing import Protocol

from src.detector.models import SubAnalysis, TokenInfo


class ChainAnalyzer(Protocol):
    async def get_token_info(self, identifier: str) -> TokenInfo | None: ...

    async def analyze_token_economics(self, identifier: str) -> SubAnalysis: ...


class SocialAnalyzer(Protocol):
    async def analyze_social_signals(self, identifier: str) -> SubAnalysis: ...


class CodeAnalyzer(Protocol):
    async def analyze_code(self, identifier: str) -> SubAnalysis: ...
