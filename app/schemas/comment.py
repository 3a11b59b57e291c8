# ============================================================================
# FILE: app/schemas/comment.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.schemas.user import OwnerSummary

class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)

    class Config:
        str_strip_whitespace = True

class CommentUpdate(CommentCreate):
    pass

class CommentResponse(BaseModel):
    id: int
    video_id: int
    owner_id: int
    content: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class CommentCard(CommentResponse):
    owner: Optional[OwnerSummary] = None
    likes_count: int = 0
    is_liked: bool = False
