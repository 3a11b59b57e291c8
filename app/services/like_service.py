# ============================================================================
# FILE: app/services/like_service.py
# ============================================================================
from sqlalchemy import func, select
from sqlalchemy.orm import Session
from app.db.models.comment import Comment
from app.db.models.like import Like
from app.db.models.tweet import Tweet
from app.schemas.like import LikeResponse, LikeToggleResult
from app.schemas.response import Page
from app.schemas.video import VideoCard
from app.services.base import get_or_404
from app.services.toggle import toggle_relation
from app.services.video_service import video_service
import logging

logger = logging.getLogger(__name__)

class LikeService:
    """Like/unlike toggles for videos, comments and tweets"""

    def _toggle(self, db: Session, subject_field: str, subject_id: int, user_id: int) -> LikeToggleResult:
        outcome = toggle_relation(db, Like, {subject_field: subject_id, "liked_by_id": user_id})
        count = db.scalar(
            select(func.count(Like.id)).where(getattr(Like, subject_field) == subject_id)
        )
        return LikeToggleResult(
            liked=outcome.added,
            like=LikeResponse.model_validate(outcome.record) if outcome.added else None,
            likes_count=count or 0,
        )

    def toggle_video_like(self, db: Session, video_id: int, user_id: int) -> LikeToggleResult:
        video_service.get_visible_video(db, video_id, user_id)
        return self._toggle(db, "video_id", video_id, user_id)

    def toggle_comment_like(self, db: Session, comment_id: int, user_id: int) -> LikeToggleResult:
        comment = get_or_404(db, Comment, comment_id, "Comment not found")
        # Comments on a hidden video are hidden too
        video_service.get_visible_video(db, comment.video_id, user_id)
        return self._toggle(db, "comment_id", comment_id, user_id)

    def toggle_tweet_like(self, db: Session, tweet_id: int, user_id: int) -> LikeToggleResult:
        get_or_404(db, Tweet, tweet_id, "Tweet not found")
        return self._toggle(db, "tweet_id", tweet_id, user_id)

    def list_liked_videos(self, db: Session, user_id: int, page: int = 1, limit: int = 10) -> Page[VideoCard]:
        return video_service.list_videos(
            db, user_id, page=page, limit=limit, sort_by="created_at", sort_type="desc", liked_by=user_id
        )

# Create singleton instance
like_service = LikeService()
