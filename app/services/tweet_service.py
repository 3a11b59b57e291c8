# ============================================================================
# FILE: app/services/tweet_service.py
# ============================================================================
from typing import Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.db.models.tweet import Tweet
from app.db.models.user import User
from app.schemas.response import Page
from app.schemas.tweet import TweetCard, TweetResponse
from app.core.exceptions import NotFoundError
from app.services.base import ensure_owner, get_or_404
from app.services.feed import is_liked_by, likes_count, owner_summary, paginate
import logging

logger = logging.getLogger(__name__)


def _tweet_card(row) -> TweetCard:
    base = TweetResponse.model_validate(row.Tweet).model_dump()
    return TweetCard(
        **base,
        owner=owner_summary(row.User),
        likes_count=row.likes_count or 0,
        is_liked=bool(row.is_liked),
    )


class TweetService:
    """Service layer for tweet operations"""

    def create_tweet(self, db: Session, owner_id: int, content: str) -> Tweet:
        try:
            tweet = Tweet(owner_id=owner_id, content=content)
            db.add(tweet)
            db.commit()
            db.refresh(tweet)
            logger.info(f"Tweet created: {tweet.id} by user {owner_id}")
            return tweet
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating tweet: {e}")
            raise

    def list_user_tweets(self, db: Session, user_id: int, actor_id: Optional[int], page: int = 1, limit: int = 10) -> Page[TweetCard]:
        get_or_404(db, User, user_id, "User not found")
        statement = (
            select(
                Tweet,
                User,
                likes_count(Tweet.id).label("likes_count"),
                is_liked_by(Tweet.id, actor_id).label("is_liked"),
            )
            .join(User, Tweet.owner_id == User.id)
            .order_by(Tweet.created_at.desc(), Tweet.id.desc())
        )
        return paginate(db, statement, [Tweet.owner_id == user_id], Tweet, page, limit, _tweet_card)

    def get_owned_tweet(self, db: Session, tweet_id: int, actor_id: int) -> Tweet:
        tweet = db.get(Tweet, tweet_id)
        if tweet is None:
            raise NotFoundError("Tweet not found")
        ensure_owner(tweet, actor_id, "Only the owner can modify this tweet")
        return tweet

    def update_tweet(self, db: Session, tweet_id: int, actor_id: int, content: str) -> Tweet:
        tweet = self.get_owned_tweet(db, tweet_id, actor_id)
        tweet.content = content
        db.commit()
        db.refresh(tweet)
        logger.info(f"Tweet updated: {tweet_id}")
        return tweet

    def delete_tweet(self, db: Session, tweet_id: int, actor_id: int) -> None:
        tweet = self.get_owned_tweet(db, tweet_id, actor_id)
        db.delete(tweet)
        db.commit()
        logger.info(f"Tweet deleted: {tweet_id}")

# Create singleton instance
tweet_service = TweetService()
