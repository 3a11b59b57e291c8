# ============================================================================
# FILE: app/api/v1/endpoints/dashboard.py
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.api.dependencies import require_current_user
from app.schemas.dashboard import ChannelStats
from app.schemas.response import ApiResponse
from app.schemas.video import VideoCard
from app.services.dashboard_service import dashboard_service
from app.services.video_service import video_service
from app.db.models.user import User

router = APIRouter()

@router.get("/stats", response_model=ApiResponse[ChannelStats])
def get_channel_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """Totals for the current user's channel"""
    stats = dashboard_service.get_channel_stats(db, current_user.id)
    return ApiResponse(data=stats, message="Channel stats fetched successfully")

@router.get("/videos", response_model=ApiResponse[List[VideoCard]])
def get_channel_videos(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """All videos of the current user's channel, including unpublished ones"""
    videos = video_service.list_channel_videos(db, current_user.id)
    return ApiResponse(data=videos, message="Channel videos fetched successfully")
