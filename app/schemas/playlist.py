
# ============================================================================
# FILE: app/schemas/playlist.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from app.schemas.video import VideoCard

class PlaylistCreate(BaseModel):
    """Schema for creating a playlist"""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = ""

    class Config:
        str_strip_whitespace = True

class PlaylistUpdate(BaseModel):
    """Schema for updating a playlist"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None

    class Config:
        str_strip_whitespace = True

class PlaylistResponse(BaseModel):
    """Schema for playlist response"""
    id: int
    owner_id: int
    name: str
    description: str
    created_at: datetime
    updated_at: datetime
    video_count: int = 0
    
    class Config:
        from_attributes = True

class PlaylistDetail(PlaylistResponse):
    """Playlist with its visible videos in playlist order"""
    videos: List[VideoCard] = []
