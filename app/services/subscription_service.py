# ============================================================================
# FILE: app/services/subscription_service.py
# ============================================================================
from typing import List
from sqlalchemy import func, select
from sqlalchemy.orm import Session
from app.db.models.subscription import Subscription
from app.db.models.user import User
from app.schemas.subscription import SubscriptionResponse, SubscriptionToggleResult
from app.schemas.user import OwnerSummary
from app.core.exceptions import BadRequestError
from app.services.base import get_or_404
from app.services.toggle import toggle_relation
import logging

logger = logging.getLogger(__name__)

class SubscriptionService:
    """
    Channel subscriptions

    Subscriber counts are always derived from the subscriptions table;
    nothing is denormalised onto users.
    """

    def subscriber_count(self, db: Session, channel_id: int) -> int:
        return db.scalar(
            select(func.count(Subscription.id)).where(Subscription.channel_id == channel_id)
        ) or 0

    def toggle_subscription(self, db: Session, channel_id: int, subscriber_id: int) -> SubscriptionToggleResult:
        if channel_id == subscriber_id:
            raise BadRequestError("You cannot subscribe to your own channel")
        get_or_404(db, User, channel_id, "Channel not found")

        outcome = toggle_relation(
            db, Subscription, {"subscriber_id": subscriber_id, "channel_id": channel_id}
        )
        return SubscriptionToggleResult(
            subscribed=outcome.added,
            subscription=SubscriptionResponse.model_validate(outcome.record) if outcome.added else None,
            subscriber_count=self.subscriber_count(db, channel_id),
        )

    def list_subscribers(self, db: Session, channel_id: int) -> List[OwnerSummary]:
        get_or_404(db, User, channel_id, "Channel not found")
        users = db.scalars(
            select(User)
            .join(Subscription, Subscription.subscriber_id == User.id)
            .where(Subscription.channel_id == channel_id)
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        ).all()
        return [OwnerSummary.model_validate(user) for user in users]

    def list_subscribed_channels(self, db: Session, subscriber_id: int) -> List[OwnerSummary]:
        get_or_404(db, User, subscriber_id, "User not found")
        channels = db.scalars(
            select(User)
            .join(Subscription, Subscription.channel_id == User.id)
            .where(Subscription.subscriber_id == subscriber_id)
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        ).all()
        return [OwnerSummary.model_validate(channel) for channel in channels]

# Create singleton instance
subscription_service = SubscriptionService()
