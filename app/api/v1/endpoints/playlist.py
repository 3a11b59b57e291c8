# ============================================================================
# FILE: app/api/v1/endpoints/playlist.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.api.dependencies import actor_id, require_current_user
from app.schemas.playlist import (
    PlaylistCreate,
    PlaylistDetail,
    PlaylistUpdate,
    PlaylistResponse,
)
from app.schemas.response import ApiResponse
from app.services.playlist_service import playlist_service
from app.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/", response_model=ApiResponse[PlaylistResponse], status_code=status.HTTP_201_CREATED)
def create_playlist(
    playlist_data: PlaylistCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Create a new playlist
    Requires authentication
    """
    playlist = playlist_service.create_playlist(db, current_user.id, playlist_data)
    return ApiResponse(
        status_code=status.HTTP_201_CREATED,
        data=playlist_service.to_response(db, playlist, current_user.id),
        message="Playlist created successfully"
    )

@router.get("/user/{user_id}", response_model=ApiResponse[List[PlaylistResponse]])
def get_user_playlists(
    user_id: int,
    db: Session = Depends(get_db),
    viewer_id: Optional[int] = Depends(actor_id)
):
    """
    Get all playlists of a user
    """
    playlists = playlist_service.get_user_playlists(db, user_id, viewer_id)
    return ApiResponse(data=playlists, message="User playlists fetched successfully")

@router.get("/{playlist_id}", response_model=ApiResponse[PlaylistDetail])
def get_playlist(
    playlist_id: int,
    db: Session = Depends(get_db),
    viewer_id: Optional[int] = Depends(actor_id)
):
    """
    Get a specific playlist with its videos
    Unpublished videos are only listed for their owner
    """
    playlist = playlist_service.get_playlist_detail(db, playlist_id, viewer_id)
    return ApiResponse(data=playlist, message="Playlist fetched successfully")

@router.patch("/{playlist_id}", response_model=ApiResponse[PlaylistResponse])
def update_playlist(
    playlist_id: int,
    update_data: PlaylistUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Update playlist details (name, description)
    Requires authentication and ownership
    """
    playlist = playlist_service.update_playlist(db, playlist_id, current_user.id, update_data)
    return ApiResponse(data=playlist_service.to_response(db, playlist, current_user.id), message="Playlist updated successfully")

@router.delete("/{playlist_id}", response_model=ApiResponse[dict])
def delete_playlist(
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a playlist
    Requires authentication and ownership
    """
    playlist_service.delete_playlist(db, playlist_id, current_user.id)
    return ApiResponse(data={}, message="Playlist deleted successfully")

@router.patch("/add/{video_id}/{playlist_id}", response_model=ApiResponse[PlaylistResponse])
def add_video_to_playlist(
    video_id: int,
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Add a video to a playlist
    Requires authentication and ownership
    """
    playlist, added = playlist_service.add_video_to_playlist(
        db, playlist_id, current_user.id, video_id
    )
    message = "Video added to playlist" if added else "Video already in playlist"
    return ApiResponse(data=playlist_service.to_response(db, playlist, current_user.id), message=message)

@router.patch("/remove/{video_id}/{playlist_id}", response_model=ApiResponse[PlaylistResponse])
def remove_video_from_playlist(
    video_id: int,
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Remove a video from a playlist
    Requires authentication and ownership
    """
    playlist = playlist_service.remove_video_from_playlist(
        db, playlist_id, current_user.id, video_id
    )
    return ApiResponse(data=playlist_service.to_response(db, playlist, current_user.id), message="Video removed from playlist")
