
# ============================================================================
# FILE: app/db/models/like.py
# ============================================================================
from sqlalchemy import CheckConstraint, Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from app.db.base import Base

class Like(Base):
    """A user's like on exactly one of a video, a comment or a tweet"""
    __tablename__ = "likes"
    __table_args__ = (
        # One like per (subject, user); NULL subjects never collide
        UniqueConstraint("video_id", "liked_by_id", name="uq_like_video_user"),
        UniqueConstraint("comment_id", "liked_by_id", name="uq_like_comment_user"),
        UniqueConstraint("tweet_id", "liked_by_id", name="uq_like_tweet_user"),
        CheckConstraint(
            "(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END)"
            " + (CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END)"
            " + (CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="ck_like_single_subject",
        ),
    )
    
    id = Column(Integer, primary_key=True, index=True)
    video_id = Column(Integer, ForeignKey("videos.id"), nullable=True, index=True)
    comment_id = Column(Integer, ForeignKey("comments.id"), nullable=True, index=True)
    tweet_id = Column(Integer, ForeignKey("tweets.id"), nullable=True, index=True)
    liked_by_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    video = relationship("Video", back_populates="likes")
    comment = relationship("Comment", back_populates="likes")
    tweet = relationship("Tweet", back_populates="likes")
