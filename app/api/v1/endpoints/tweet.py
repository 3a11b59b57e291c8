# ============================================================================
# FILE: app/api/v1/endpoints/tweet.py
# ============================================================================
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from app.db.session import get_db
from app.api.dependencies import actor_id, require_current_user
from app.schemas.response import ApiResponse, Page
from app.schemas.tweet import TweetCard, TweetCreate, TweetResponse, TweetUpdate
from app.services.tweet_service import tweet_service
from app.db.models.user import User

router = APIRouter()

@router.post("/", response_model=ApiResponse[TweetResponse], status_code=status.HTTP_201_CREATED)
def create_tweet(
    payload: TweetCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    tweet = tweet_service.create_tweet(db, current_user.id, payload.content)
    return ApiResponse(
        status_code=status.HTTP_201_CREATED,
        data=TweetResponse.model_validate(tweet),
        message="Tweet created successfully"
    )

@router.get("/user/{user_id}", response_model=ApiResponse[Page[TweetCard]])
def get_user_tweets(
    user_id: int,
    page: int = Query(1),
    limit: int = Query(10),
    db: Session = Depends(get_db),
    viewer_id: Optional[int] = Depends(actor_id)
):
    tweets = tweet_service.list_user_tweets(db, user_id, viewer_id, page=page, limit=limit)
    return ApiResponse(data=tweets, message="User tweets fetched successfully")

@router.patch("/{tweet_id}", response_model=ApiResponse[TweetResponse])
def update_tweet(
    tweet_id: int,
    payload: TweetUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    tweet = tweet_service.update_tweet(db, tweet_id, current_user.id, payload.content)
    return ApiResponse(data=TweetResponse.model_validate(tweet), message="Tweet updated successfully")

@router.delete("/{tweet_id}", response_model=ApiResponse[dict])
def delete_tweet(
    tweet_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    tweet_service.delete_tweet(db, tweet_id, current_user.id)
    return ApiResponse(data={}, message="Tweet deleted successfully")
