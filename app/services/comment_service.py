# ============================================================================
# FILE: app/services/comment_service.py
# ============================================================================
from typing import Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.db.models.comment import Comment
from app.db.models.user import User
from app.schemas.comment import CommentCard, CommentResponse
from app.schemas.response import Page
from app.core.exceptions import NotFoundError
from app.services.base import ensure_owner
from app.services.feed import is_liked_by, likes_count, owner_summary, paginate
from app.services.video_service import video_service
import logging

logger = logging.getLogger(__name__)


def _comment_card(row) -> CommentCard:
    base = CommentResponse.model_validate(row.Comment).model_dump()
    return CommentCard(
        **base,
        owner=owner_summary(row.User),
        likes_count=row.likes_count or 0,
        is_liked=bool(row.is_liked),
    )


class CommentService:
    """Service layer for comment operations"""

    def list_comments(self, db: Session, video_id: int, actor_id: Optional[int], page: int = 1, limit: int = 10) -> Page[CommentCard]:
        """Newest first; a video without comments yields an empty page"""
        video_service.get_visible_video(db, video_id, actor_id)
        statement = (
            select(
                Comment,
                User,
                likes_count(Comment.id).label("likes_count"),
                is_liked_by(Comment.id, actor_id).label("is_liked"),
            )
            .join(User, Comment.owner_id == User.id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        return paginate(db, statement, [Comment.video_id == video_id], Comment, page, limit, _comment_card)

    def add_comment(self, db: Session, video_id: int, owner_id: int, content: str) -> Comment:
        video = video_service.get_visible_video(db, video_id, owner_id)
        try:
            comment = Comment(video_id=video.id, owner_id=owner_id, content=content)
            db.add(comment)
            db.commit()
            db.refresh(comment)
            logger.info(f"Comment {comment.id} added to video {video_id}")
            return comment
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating comment: {e}")
            raise

    def get_owned_comment(self, db: Session, comment_id: int, actor_id: int) -> Comment:
        comment = db.get(Comment, comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        ensure_owner(comment, actor_id, "Only the owner can modify this comment")
        return comment

    def update_comment(self, db: Session, comment_id: int, actor_id: int, content: str) -> Comment:
        comment = self.get_owned_comment(db, comment_id, actor_id)
        comment.content = content
        db.commit()
        db.refresh(comment)
        logger.info(f"Comment updated: {comment_id}")
        return comment

    def delete_comment(self, db: Session, comment_id: int, actor_id: int) -> None:
        comment = self.get_owned_comment(db, comment_id, actor_id)
        db.delete(comment)
        db.commit()
        logger.info(f"Comment deleted: {comment_id}")

# Create singleton instance
comment_service = CommentService()
