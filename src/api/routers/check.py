"""Token check endpoints: single, bulk, live feed."""

import asyncio

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from loguru import logger
from pydantic import BaseModel, Field

from config.settings import settings
from src.api.app import limiter
from src.api.dependencies import get_detector, get_feed
from src.api.feed import FeedEntry, LiveFeed
from src.detector.exceptions import NotFoundError, SubAnalyzerError
from src.detector.models import AnalysisReport
from src.detector.orchestrator import RugPullDetector

router = APIRouter(prefix="/api/v1", tags=["check"])

MAX_SYMBOL_LEN = 64


class BulkCheckRequest(BaseModel):
    symbols: list[str] = Field(min_length=1)


class BulkCheckItem(BaseModel):
    symbol: str
    report: AnalysisReport | None = None
    error: str | None = None


class BulkCheckResponse(BaseModel):
    results: list[BulkCheckItem]


class LiveFeedResponse(BaseModel):
    detections: list[FeedEntry]


async def _analyze(detector: RugPullDetector, feed: LiveFeed, symbol: str) -> AnalysisReport:
    """Run one analysis, mapping detector errors to HTTP errors."""
    try:
        report = await asyncio.wait_for(
            detector.analyze(symbol), timeout=settings.analysis_timeout_sec
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Token not found") from e
    except SubAnalyzerError as e:
        logger.error(f"[API] Analysis of {symbol} failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Analysis failed") from e
    except TimeoutError as e:
        logger.error(f"[API] Analysis of {symbol} timed out")
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail="Analysis timed out") from e

    feed.record(report)
    return report


@router.get("/check/{symbol}", response_model=AnalysisReport)
@limiter.limit("60/minute")
async def check_token(
    request: Request,
    symbol: str,
    detector: RugPullDetector = Depends(get_detector),
    feed: LiveFeed = Depends(get_feed),
) -> AnalysisReport:
    """Rug pull risk report for a symbol or mint address."""
    return await _analyze(detector, feed, symbol.strip()[:MAX_SYMBOL_LEN])


@router.post("/bulk-check", response_model=BulkCheckResponse)
@limiter.limit("10/minute")
async def bulk_check(
    request: Request,
    body: BulkCheckRequest,
    detector: RugPullDetector = Depends(get_detector),
    feed: LiveFeed = Depends(get_feed),
) -> BulkCheckResponse:
    """Analyze up to bulk_check_max_symbols tokens, one after another."""
    results: list[BulkCheckItem] = []
    for symbol in body.symbols[: settings.bulk_check_max_symbols]:
        try:
            report = await _analyze(detector, feed, symbol.strip()[:MAX_SYMBOL_LEN])
        except HTTPException as e:
            results.append(BulkCheckItem(symbol=symbol, error=e.detail))
            continue
        results.append(BulkCheckItem(symbol=symbol, report=report))
    return BulkCheckResponse(results=results)


@router.get("/live-feed", response_model=LiveFeedResponse)
async def live_feed(
    limit: int = Query(20, ge=1, le=100),
    feed: LiveFeed = Depends(get_feed),
) -> LiveFeedResponse:
    """Most recent analyses, newest first."""
    return LiveFeedResponse(detections=feed.recent(limit))
