"""RugPullDetector: runs the three sub-analyzers and builds the report.

Flow per request:
1. Resolve token metadata via the chain analyzer (fail fast if unknown)
2. Run chain, social and code analysis concurrently
3. Aggregate, classify, recommend, summarize

All-or-nothing: if any sub-analyzer raises, the remaining ones are
cancelled and that exception propagates unchanged. No retries.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime

from loguru import logger

from src.analyzers.base import ChainAnalyzer, CodeAnalyzer, SocialAnalyzer
from src.detector.exceptions import NotFoundError
from src.detector.models import AnalysisBreakdown, AnalysisReport
from src.detector.scoring import aggregate, classify, recommend, summarize


class RugPullDetector:
    """Combines on-chain, social and code analysis into one risk report."""

    def __init__(
        self,
        chain: ChainAnalyzer,
        social: SocialAnalyzer,
        code: CodeAnalyzer,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._chain = chain
        self._social = social
        self._code = code
        self._clock = clock or (lambda: datetime.now(UTC))

    async def analyze(self, identifier: str) -> AnalysisReport:
        """Analyze a token (mint address or symbol) for rug pull risk.

        Raises NotFoundError if the token cannot be resolved; any
        sub-analyzer exception is re-raised as-is.
        """
        logger.info(f"[DETECTOR] Analyzing token: {identifier}")

        token_info = await self._chain.get_token_info(identifier)
        if token_info is None:
            raise NotFoundError(identifier)

        tasks = [
            asyncio.create_task(self._chain.analyze_token_economics(identifier)),
            asyncio.create_task(self._social.analyze_social_signals(identifier)),
            asyncio.create_task(self._code.analyze_code(identifier)),
        ]
        try:
            on_chain, social, code = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            # Wait for cancelled siblings to finish their cleanup
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        risk_score = aggregate(on_chain, social, code)
        report = AnalysisReport(
            token=token_info.symbol or identifier,
            mint_address=token_info.mint_address or identifier,
            timestamp=self._clock(),
            risk_score=risk_score,
            risk_level=classify(risk_score),
            analysis=AnalysisBreakdown(on_chain=on_chain, social=social, code=code),
            recommendations=recommend(risk_score, on_chain, social, code),
            summary=summarize(risk_score, on_chain, social, code),
        )

        logger.info(
            f"[DETECTOR] Analysis complete for {report.token}: "
            f"score={report.risk_score} level={report.risk_level.value}"
        )
        return report
