# ============================================================================
# FILE: app/api/v1/endpoints/subscription.py
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.api.dependencies import require_current_user
from app.schemas.response import ApiResponse
from app.schemas.subscription import SubscriptionToggleResult
from app.schemas.user import OwnerSummary
from app.services.subscription_service import subscription_service
from app.db.models.user import User

router = APIRouter()

@router.post("/c/{channel_id}", response_model=ApiResponse[SubscriptionToggleResult])
def toggle_subscription(
    channel_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """Subscribe to a channel, or unsubscribe if already subscribed"""
    result = subscription_service.toggle_subscription(db, channel_id, current_user.id)
    return ApiResponse(data=result, message="Subscribed" if result.subscribed else "Unsubscribed")

@router.get("/c/{channel_id}", response_model=ApiResponse[List[OwnerSummary]])
def get_channel_subscribers(
    channel_id: int,
    db: Session = Depends(get_db)
):
    subscribers = subscription_service.list_subscribers(db, channel_id)
    return ApiResponse(data=subscribers, message="Subscribers fetched")

@router.get("/u/{subscriber_id}", response_model=ApiResponse[List[OwnerSummary]])
def get_subscribed_channels(
    subscriber_id: int,
    db: Session = Depends(get_db)
):
    channels = subscription_service.list_subscribed_channels(db, subscriber_id)
    return ApiResponse(data=channels, message="Subscribed channels fetched")
