# ============================================================================
# FILE: app/schemas/like.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class LikeResponse(BaseModel):
    id: int
    video_id: Optional[int] = None
    comment_id: Optional[int] = None
    tweet_id: Optional[int] = None
    liked_by_id: int
    created_at: datetime

    class Config:
        from_attributes = True

class LikeToggleResult(BaseModel):
    """Outcome of a like toggle; like is None when the like was removed"""
    liked: bool
    like: Optional[LikeResponse] = None
    likes_count: int
