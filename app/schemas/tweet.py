# ============================================================================
# FILE: app/schemas/tweet.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.schemas.user import OwnerSummary

class TweetCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=280)

    class Config:
        str_strip_whitespace = True

class TweetUpdate(TweetCreate):
    pass

class TweetResponse(BaseModel):
    id: int
    owner_id: int
    content: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class TweetCard(TweetResponse):
    owner: Optional[OwnerSummary] = None
    likes_count: int = 0
    is_liked: bool = False
