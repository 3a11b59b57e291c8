# ============================================================================
# FILE: app/schemas/subscription.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class SubscriptionResponse(BaseModel):
    id: int
    subscriber_id: int
    channel_id: int
    created_at: datetime

    class Config:
        from_attributes = True

class SubscriptionToggleResult(BaseModel):
    subscribed: bool
    subscription: Optional[SubscriptionResponse] = None
    subscriber_count: int
