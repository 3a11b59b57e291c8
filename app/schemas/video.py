# ============================================================================
# FILE: app/schemas/video.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from app.schemas.user import OwnerSummary

class VideoResponse(BaseModel):
    """Schema for a stored video record"""
    id: int
    owner_id: int
    video_url: str
    thumbnail_url: str
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class VideoCard(VideoResponse):
    """Denormalised video as shown in feeds"""
    owner: Optional[OwnerSummary] = None
    likes_count: int = 0
    comments_count: int = 0
    is_liked: bool = False

class PublishStatus(BaseModel):
    id: int
    is_published: bool
