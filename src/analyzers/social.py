"""Social signal analyzer: cashtag mentions on Twitter.

Heuristic: a token pushed mostly by tiny accounts, or by a handful of
accounts posting repeatedly, looks like a shill/bot campaign. Known KOLs
and verified accounts lower the score.
"""

from src.analyzers.chain import resolve_mint
from src.detector.models import SubAnalysis
from src.detector.scoring import round_half_up
from src.parsers.token_resolver import TokenResolver, is_valid_address
from src.parsers.twitter.client import TwitterClient
from src.parsers.twitter.models import TwitterSearchResult

NO_MENTIONS_RISK = 60
LOW_FOLLOWER_WEIGHT = 70
REPEAT_AUTHOR_WEIGHT = 30
KOL_DISCOUNT, KOL_DISCOUNT_MAX = 10, 20
VERIFIED_DISCOUNT, VERIFIED_DISCOUNT_MAX = 5, 10


def score_mentions(result: TwitterSearchResult) -> SubAnalysis:
    if result.total_tweets == 0:
        score = NO_MENTIONS_RISK
    else:
        repeat_share = 1 - result.unique_authors / result.total_tweets
        raw = (
            LOW_FOLLOWER_WEIGHT * result.low_follower_share
            + REPEAT_AUTHOR_WEIGHT * repeat_share
            - min(KOL_DISCOUNT_MAX, KOL_DISCOUNT * result.kol_mentions)
            - min(VERIFIED_DISCOUNT_MAX, VERIFIED_DISCOUNT * result.verified_mentions)
        )
        score = max(0, min(100, round_half_up(raw)))

    red_flags: list[str] = []
    if score > 70:
        red_flags.append("Suspicious social media activity detected")
        red_flags.append("Potential bot network promoting token")
    elif score > 50:
        red_flags.append("Limited genuine community engagement")

    return SubAnalysis(
        risk_score=score,
        red_flags=red_flags,
        details={
            "tweets": result.total_tweets,
            "unique_authors": result.unique_authors,
            "low_follower_mentions": result.low_follower_mentions,
            "kol_mentions": result.kol_mentions,
            "engagement": result.total_engagement,
        },
    )


class LiveSocialAnalyzer:
    """Social collaborator backed by TwitterAPI.io search."""

    def __init__(self, twitter: TwitterClient, resolver: TokenResolver) -> None:
        self._twitter = twitter
        self._resolver = resolver

    async def analyze_social_signals(self, identifier: str) -> SubAnalysis:
        mint_address = await resolve_mint(self._resolver, identifier)
        symbol = "" if is_valid_address(identifier) else identifier
        result = await self._twitter.search_token(symbol, mint_address)
        return score_mentions(result)
