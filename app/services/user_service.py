# ============================================================================
# FILE: app/services/user_service.py
# ============================================================================
from datetime import datetime
from typing import List, Optional
from fastapi import UploadFile
from sqlalchemy import exists, false, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.db.models.history import WatchHistory
from app.db.models.subscription import Subscription
from app.db.models.user import User
from app.db.models.video import Video
from app.schemas.user import AccountUpdate, ChannelProfile, PasswordChange, TokenPair, UserCreate
from app.schemas.video import VideoCard
from app.core.exceptions import BadRequestError, ConflictError, NotFoundError, UnauthorizedError
from app.core.media_storage import MediaStorage, delete_quietly
from app.core.security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    get_password_hash,
    verify_password,
)
from app.core.uploads import store_upload
from app.services.feed import to_video_card, video_card_statement, visible_videos_filter
import logging

logger = logging.getLogger(__name__)

class UserService:
    """Service layer for user operations"""
    
    def register_user(
        self,
        db: Session,
        storage: MediaStorage,
        user_data: UserCreate,
        avatar: Optional[UploadFile],
        cover_image: Optional[UploadFile] = None,
    ) -> User:
        """Create a new user account with avatar and optional cover image"""
        username = user_data.username.lower()
        taken = db.scalar(
            select(User.id).where(or_(User.username == username, User.email == user_data.email))
        )
        if taken:
            raise ConflictError("User with this username or email already exists")
        if avatar is None:
            raise BadRequestError("Avatar image is required")

        avatar_url = store_upload(storage, avatar)["url"]
        cover_url = None
        if cover_image is not None:
            try:
                cover_url = store_upload(storage, cover_image)["url"]
            except Exception:
                delete_quietly(storage, avatar_url)
                raise

        try:
            user = User(
                username=username,
                email=user_data.email,
                full_name=user_data.full_name,
                avatar_url=avatar_url,
                cover_image_url=cover_url,
                hashed_password=get_password_hash(user_data.password),
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info(f"User created: {user.username}")
            return user
        except IntegrityError:
            db.rollback()
            delete_quietly(storage, avatar_url)
            delete_quietly(storage, cover_url)
            raise ConflictError("User with this username or email already exists")
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating user: {e}")
            delete_quietly(storage, avatar_url)
            delete_quietly(storage, cover_url)
            raise
    
    def get_user(self, db: Session, user_id: int) -> Optional[User]:
        return db.get(User, user_id)

    def get_user_by_username(self, db: Session, username: str) -> Optional[User]:
        """Get user by username"""
        return db.query(User).filter(User.username == username.lower()).first()
    
    def get_user_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email).first()
    
    def authenticate_user(self, db: Session, username: Optional[str], email: Optional[str], password: str) -> User:
        """Authenticate user with username or email and password"""
        if not (username or email):
            raise BadRequestError("Username or email is required")
        user = None
        if username:
            user = self.get_user_by_username(db, username)
        if user is None and email:
            user = self.get_user_by_email(db, email)
        if user is None:
            raise NotFoundError("User does not exist")
        if not verify_password(password, user.hashed_password):
            raise UnauthorizedError("Invalid user credentials")
        return user

    def issue_tokens(self, db: Session, user: User) -> TokenPair:
        """Create an access/refresh pair and remember the refresh token"""
        access_token = create_access_token(
            data={"sub": str(user.id), "username": user.username, "email": user.email}
        )
        refresh_token = create_refresh_token(data={"sub": str(user.id)})
        user.refresh_token = refresh_token
        db.commit()
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    def refresh_tokens(self, db: Session, incoming_token: Optional[str]) -> TokenPair:
        """Rotate tokens; a refresh token is valid only while it is the stored one"""
        if not incoming_token:
            raise UnauthorizedError("Unauthorized request")
        payload = decode_refresh_token(incoming_token)
        user = self.get_user(db, int(payload["sub"]))
        if user is None:
            raise UnauthorizedError("Invalid refresh token")
        if user.refresh_token != incoming_token:
            raise UnauthorizedError("Refresh token is expired or used")
        return self.issue_tokens(db, user)

    def logout(self, db: Session, user: User) -> None:
        user.refresh_token = None
        db.commit()
        logger.info(f"User logged out: {user.username}")

    def change_password(self, db: Session, user: User, data: PasswordChange) -> None:
        if not verify_password(data.old_password, user.hashed_password):
            raise UnauthorizedError("Invalid old password")
        if data.new_password != data.confirm_password:
            raise BadRequestError("Passwords do not match")
        user.hashed_password = get_password_hash(data.new_password)
        db.commit()
        logger.info(f"Password changed for user {user.id}")

    def update_account(self, db: Session, user: User, data: AccountUpdate) -> User:
        email_owner = self.get_user_by_email(db, data.email)
        if email_owner is not None and email_owner.id != user.id:
            raise ConflictError("Email already in use")
        user.full_name = data.full_name
        user.email = data.email
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("Email already in use")
        db.refresh(user)
        return user

    def update_image(self, db: Session, storage: MediaStorage, user: User, upload: UploadFile, field: str) -> User:
        """Replace avatar_url or cover_image_url; the old media is removed afterwards"""
        previous_url = getattr(user, field)
        new_url = store_upload(storage, upload)["url"]
        if not new_url:
            raise BadRequestError("Error while uploading image")
        setattr(user, field, new_url)
        db.commit()
        db.refresh(user)
        delete_quietly(storage, previous_url)
        logger.info(f"Updated {field} for user {user.id}")
        return user

    def get_channel_profile(self, db: Session, username: str, actor_id: Optional[int]) -> ChannelProfile:
        """Channel header with subscription counts derived live from subscriptions"""
        if not username or not username.strip():
            raise BadRequestError("Username is missing")

        subscriber_count = (
            select(func.count(Subscription.id))
            .where(Subscription.channel_id == User.id)
            .scalar_subquery()
        )
        subscribed_to_count = (
            select(func.count(Subscription.id))
            .where(Subscription.subscriber_id == User.id)
            .scalar_subquery()
        )
        if actor_id is None:
            is_subscribed = false()
        else:
            is_subscribed = exists().where(
                Subscription.channel_id == User.id,
                Subscription.subscriber_id == actor_id,
            )
        row = db.execute(
            select(
                User,
                subscriber_count.label("subscriber_count"),
                subscribed_to_count.label("subscribed_to_count"),
                is_subscribed.label("is_subscribed"),
            ).where(User.username == username.strip().lower())
        ).first()
        if row is None:
            raise NotFoundError("Channel does not exist")

        user = row.User
        return ChannelProfile(
            id=user.id,
            username=user.username,
            full_name=user.full_name,
            email=user.email,
            avatar_url=user.avatar_url,
            cover_image_url=user.cover_image_url,
            subscriber_count=row.subscriber_count,
            channels_subscribed_to_count=row.subscribed_to_count,
            is_subscribed=bool(row.is_subscribed),
        )

    def record_watch(self, db: Session, user_id: int, video_id: int) -> None:
        """Move the video to the top of the user's history"""
        entry = db.query(WatchHistory).filter(
            WatchHistory.user_id == user_id,
            WatchHistory.video_id == video_id
        ).first()
        if entry:
            entry.watched_at = datetime.utcnow()
        else:
            db.add(WatchHistory(user_id=user_id, video_id=video_id))

    def get_watch_history(self, db: Session, user: User) -> List[VideoCard]:
        rows = db.execute(
            video_card_statement(user.id)
            .join(WatchHistory, WatchHistory.video_id == Video.id)
            .where(WatchHistory.user_id == user.id, visible_videos_filter(user.id))
            .order_by(WatchHistory.watched_at.desc(), WatchHistory.id.desc())
        ).all()
        return [to_video_card(row) for row in rows]

# Create singleton instance
user_service = UserService()
