"""TwitterAPI.io search models and mention aggregation."""

from pydantic import BaseModel

KOL_FOLLOWER_THRESHOLD = 50_000
# Accounts this small are typical of shill/bot networks
LOW_FOLLOWER_THRESHOLD = 100


class TwitterAuthor(BaseModel):
    id: str = ""
    userName: str = ""
    followers: int = 0
    isBlueVerified: bool = False

    model_config = {"extra": "ignore"}

    @property
    def key(self) -> str:
        return self.id or self.userName


class TwitterTweet(BaseModel):
    id: str = ""
    text: str = ""
    likeCount: int = 0
    retweetCount: int = 0
    replyCount: int = 0
    quoteCount: int = 0
    author: TwitterAuthor = TwitterAuthor()

    model_config = {"extra": "ignore"}

    @property
    def engagement(self) -> int:
        return self.likeCount + self.retweetCount + self.replyCount + self.quoteCount


class TwitterSearchResult(BaseModel):
    """Cashtag mentions rolled up for social scoring."""

    total_tweets: int = 0
    unique_authors: int = 0
    low_follower_mentions: int = 0
    kol_mentions: int = 0
    verified_mentions: int = 0
    total_engagement: int = 0

    @classmethod
    def from_tweets(cls, tweets: list[TwitterTweet]) -> "TwitterSearchResult":
        return cls(
            total_tweets=len(tweets),
            unique_authors=len({t.author.key for t in tweets}),
            low_follower_mentions=sum(
                1 for t in tweets if t.author.followers < LOW_FOLLOWER_THRESHOLD
            ),
            kol_mentions=sum(1 for t in tweets if t.author.followers >= KOL_FOLLOWER_THRESHOLD),
            verified_mentions=sum(1 for t in tweets if t.author.isBlueVerified),
            total_engagement=sum(t.engagement for t in tweets),
        )

    @property
    def low_follower_share(self) -> float:
        if not self.total_tweets:
            return 0.0
        return self.low_follower_mentions / self.total_tweets
