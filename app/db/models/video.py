
# ============================================================================
# FILE: app/db/models/video.py
# ============================================================================
from sqlalchemy import Boolean, Column, Integer, Float, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from app.db.base import Base

class Video(Base):
    """Uploaded video; media bytes live in the media storage service"""
    __tablename__ = "videos"
    
    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    video_url = Column(String, nullable=False)
    thumbnail_url = Column(String, nullable=False)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    duration = Column(Float, nullable=False, default=0)
    views = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    owner = relationship("User", back_populates="videos")
    comments = relationship("Comment", back_populates="video", cascade="all, delete-orphan")
    likes = relationship("Like", back_populates="video", cascade="all, delete-orphan")
    playlist_entries = relationship("PlaylistVideo", back_populates="video", cascade="all, delete-orphan")
    history_entries = relationship("WatchHistory", back_populates="video", cascade="all, delete-orphan")

    def is_visible_to(self, user_id) -> bool:
        """Unpublished videos only exist for their owner"""
        return bool(self.is_published) or self.owner_id == user_id
