# ============================================================================
# FILE: app/api/v1/endpoints/like.py
# ============================================================================
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.api.dependencies import require_current_user
from app.schemas.like import LikeToggleResult
from app.schemas.response import ApiResponse, Page
from app.schemas.video import VideoCard
from app.services.like_service import like_service
from app.db.models.user import User

router = APIRouter()

def _toggle_message(result: LikeToggleResult, subject: str) -> str:
    return f"{subject} liked" if result.liked else f"{subject} unliked"

@router.post("/toggle/v/{video_id}", response_model=ApiResponse[LikeToggleResult])
def toggle_video_like(
    video_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    result = like_service.toggle_video_like(db, video_id, current_user.id)
    return ApiResponse(data=result, message=_toggle_message(result, "Video"))

@router.post("/toggle/c/{comment_id}", response_model=ApiResponse[LikeToggleResult])
def toggle_comment_like(
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    result = like_service.toggle_comment_like(db, comment_id, current_user.id)
    return ApiResponse(data=result, message=_toggle_message(result, "Comment"))

@router.post("/toggle/t/{tweet_id}", response_model=ApiResponse[LikeToggleResult])
def toggle_tweet_like(
    tweet_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    result = like_service.toggle_tweet_like(db, tweet_id, current_user.id)
    return ApiResponse(data=result, message=_toggle_message(result, "Tweet"))

@router.get("/videos", response_model=ApiResponse[Page[VideoCard]])
def get_liked_videos(
    page: int = Query(1),
    limit: int = Query(10),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """Videos liked by the current user"""
    videos = like_service.list_liked_videos(db, current_user.id, page=page, limit=limit)
    return ApiResponse(data=videos, message="Liked videos fetched successfully")
