# ============================================================================
# FILE: app/api/v1/endpoints/video.py
# ============================================================================
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session
from typing import Optional
from app.db.session import get_db
from app.api.dependencies import actor_id, require_current_user
from app.core.media_storage import MediaStorage, get_media_storage
from app.schemas.response import ApiResponse, Page
from app.schemas.video import PublishStatus, VideoCard, VideoResponse
from app.services.video_service import video_service
from app.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/", response_model=ApiResponse[Page[VideoCard]])
def list_videos(
    page: int = Query(1, description="Page number, starting at 1"),
    limit: int = Query(10, description="Page size"),
    query: Optional[str] = Query(None, description="Match against the title"),
    sort_by: Optional[str] = Query(None, description="created_at, views, duration or title"),
    sort_type: Optional[str] = Query("desc", description="asc or desc"),
    user_id: Optional[int] = Query(None, description="Only videos of this channel"),
    db: Session = Depends(get_db),
    viewer_id: Optional[int] = Depends(actor_id)
):
    """
    Paginated video feed with owner, like/comment counts and liked flag
    Available to all users (authenticated and anonymous)
    """
    videos = video_service.list_videos(
        db, viewer_id, page=page, limit=limit, query=query,
        sort_by=sort_by, sort_type=sort_type, owner_id=user_id
    )
    return ApiResponse(data=videos, message="Videos fetched successfully")

@router.post("/", response_model=ApiResponse[VideoResponse], status_code=status.HTTP_201_CREATED)
def publish_video(
    title: str = Form(...),
    description: str = Form(""),
    video_file: Optional[UploadFile] = File(None),
    thumbnail: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Upload a video with its thumbnail
    Requires authentication
    """
    video = video_service.publish_video(db, storage, current_user, title, description, video_file, thumbnail)
    return ApiResponse(
        status_code=status.HTTP_201_CREATED,
        data=VideoResponse.model_validate(video),
        message="Video uploaded successfully"
    )

@router.get("/{video_id}", response_model=ApiResponse[VideoCard])
def get_video(
    video_id: int,
    db: Session = Depends(get_db),
    viewer_id: Optional[int] = Depends(actor_id)
):
    """
    Get a video and count the view
    Views by authenticated users are added to their watch history
    """
    video = video_service.view_video(db, video_id, viewer_id)
    return ApiResponse(data=video, message="Video fetched successfully")

@router.patch("/{video_id}", response_model=ApiResponse[VideoResponse])
def update_video(
    video_id: int,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    thumbnail: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Update title, description and/or thumbnail
    Requires authentication and ownership
    """
    video = video_service.update_video(
        db, storage, video_id, current_user.id, title=title, description=description, thumbnail=thumbnail
    )
    return ApiResponse(data=VideoResponse.model_validate(video), message="Video updated successfully")

@router.delete("/{video_id}", response_model=ApiResponse[dict])
def delete_video(
    video_id: int,
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a video with its comments and likes
    Requires authentication and ownership
    """
    video_service.delete_video(db, storage, video_id, current_user.id)
    return ApiResponse(data={}, message="Video deleted successfully")

@router.patch("/toggle/publish/{video_id}", response_model=ApiResponse[PublishStatus])
def toggle_publish_status(
    video_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    video = video_service.toggle_publish(db, video_id, current_user.id)
    return ApiResponse(
        data=PublishStatus(id=video.id, is_published=video.is_published),
        message="Publish status toggled successfully"
    )
