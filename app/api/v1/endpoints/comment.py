# ============================================================================
# FILE: app/api/v1/endpoints/comment.py
# ============================================================================
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from app.db.session import get_db
from app.api.dependencies import actor_id, require_current_user
from app.schemas.comment import CommentCard, CommentCreate, CommentResponse, CommentUpdate
from app.schemas.response import ApiResponse, Page
from app.services.comment_service import comment_service
from app.db.models.user import User

router = APIRouter()

@router.get("/{video_id}", response_model=ApiResponse[Page[CommentCard]])
def get_video_comments(
    video_id: int,
    page: int = Query(1),
    limit: int = Query(10),
    db: Session = Depends(get_db),
    viewer_id: Optional[int] = Depends(actor_id)
):
    """Comments of a video, newest first"""
    comments = comment_service.list_comments(db, video_id, viewer_id, page=page, limit=limit)
    return ApiResponse(data=comments, message="Comments fetched successfully")

@router.post("/{video_id}", response_model=ApiResponse[CommentResponse], status_code=status.HTTP_201_CREATED)
def add_comment(
    video_id: int,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    comment = comment_service.add_comment(db, video_id, current_user.id, payload.content)
    return ApiResponse(
        status_code=status.HTTP_201_CREATED,
        data=CommentResponse.model_validate(comment),
        message="Comment added successfully"
    )

@router.patch("/c/{comment_id}", response_model=ApiResponse[CommentResponse])
def update_comment(
    comment_id: int,
    payload: CommentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    comment = comment_service.update_comment(db, comment_id, current_user.id, payload.content)
    return ApiResponse(data=CommentResponse.model_validate(comment), message="Comment updated successfully")

@router.delete("/c/{comment_id}", response_model=ApiResponse[dict])
def delete_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    comment_service.delete_comment(db, comment_id, current_user.id)
    return ApiResponse(data={}, message="Comment deleted successfully")
