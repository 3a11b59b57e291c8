# ============================================================================
# FILE: app/services/dashboard_service.py
# ============================================================================
from sqlalchemy import func, select
from sqlalchemy.orm import Session
from app.db.models.comment import Comment
from app.db.models.like import Like
from app.db.models.subscription import Subscription
from app.db.models.tweet import Tweet
from app.db.models.video import Video
from app.schemas.dashboard import ChannelStats

class DashboardService:
    """Aggregated numbers for a channel owner's dashboard"""

    def _likes_on(self, db: Session, like_column, model, owner_id: int) -> int:
        return db.scalar(
            select(func.count(Like.id))
            .select_from(Like)
            .join(model, like_column == model.id)
            .where(model.owner_id == owner_id)
        ) or 0

    def get_channel_stats(self, db: Session, owner_id: int) -> ChannelStats:
        total_videos, total_views = db.execute(
            select(func.count(Video.id), func.coalesce(func.sum(Video.views), 0))
            .where(Video.owner_id == owner_id)
        ).one()
        total_subscribers = db.scalar(
            select(func.count(Subscription.id)).where(Subscription.channel_id == owner_id)
        ) or 0
        return ChannelStats(
            total_videos=total_videos,
            total_views=total_views,
            total_subscribers=total_subscribers,
            total_video_likes=self._likes_on(db, Like.video_id, Video, owner_id),
            total_comment_likes=self._likes_on(db, Like.comment_id, Comment, owner_id),
            total_tweet_likes=self._likes_on(db, Like.tweet_id, Tweet, owner_id),
        )

# Create singleton instance
dashboard_service = DashboardService()
