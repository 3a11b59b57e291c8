# ============================================================================
# FILE: app/services/video_service.py
# ============================================================================
from typing import List, Optional
from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.db.models.like import Like
from app.db.models.user import User
from app.db.models.video import Video
from app.schemas.response import Page
from app.schemas.video import VideoCard
from app.core.exceptions import BadRequestError, NotFoundError
from app.core.media_storage import MediaStorage, delete_quietly
from app.core.uploads import store_upload
from app.services.base import ensure_owner
from app.services.feed import (
    paginate,
    to_video_card,
    video_card_statement,
    video_sort_order,
    visible_videos_filter,
)
from app.services.user_service import user_service
import logging

logger = logging.getLogger(__name__)

class VideoService:
    """Service layer for video operations"""

    def get_visible_video(self, db: Session, video_id: int, actor_id: Optional[int]) -> Video:
        """Fetch a video; unpublished videos are treated as absent for non-owners"""
        video = db.get(Video, video_id)
        if video is None or not video.is_visible_to(actor_id):
            raise NotFoundError("Video not found")
        return video

    def get_owned_video(self, db: Session, video_id: int, actor_id: int) -> Video:
        video = db.get(Video, video_id)
        if video is None:
            raise NotFoundError("Video not found")
        ensure_owner(video, actor_id, "Only the owner can modify this video")
        return video

    def list_videos(
        self,
        db: Session,
        actor_id: Optional[int],
        page: int = 1,
        limit: int = 10,
        query: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_type: Optional[str] = None,
        owner_id: Optional[int] = None,
        liked_by: Optional[int] = None,
    ) -> Page[VideoCard]:
        """
        Paginated video feed

        Filters (visibility, owner, title match, liked-by) are applied first,
        then the owner join, live counts, liked flag, sort and page window.
        """
        filters = [visible_videos_filter(actor_id)]
        if owner_id is not None:
            filters.append(Video.owner_id == owner_id)
        if query:
            filters.append(Video.title.icontains(query, autoescape=True))
        if liked_by is not None:
            filters.append(Video.id.in_(select(Like.video_id).where(Like.liked_by_id == liked_by)))

        statement = video_card_statement(actor_id).order_by(*video_sort_order(sort_by, sort_type))
        return paginate(db, statement, filters, Video, page, limit, to_video_card)

    def get_video_card(self, db: Session, video_id: int, actor_id: Optional[int]) -> VideoCard:
        row = db.execute(video_card_statement(actor_id).where(Video.id == video_id)).first()
        if row is None:
            raise NotFoundError("Video not found")
        return to_video_card(row)

    def view_video(self, db: Session, video_id: int, actor_id: Optional[int]) -> VideoCard:
        """Count a view, remember it in the viewer's history and return the card"""
        video = self.get_visible_video(db, video_id, actor_id)
        video.views = Video.views + 1
        if actor_id is not None:
            user_service.record_watch(db, actor_id, video.id)
        db.commit()
        return self.get_video_card(db, video.id, actor_id)

    def publish_video(
        self,
        db: Session,
        storage: MediaStorage,
        owner: User,
        title: str,
        description: str,
        video_file: Optional[UploadFile],
        thumbnail: Optional[UploadFile],
    ) -> Video:
        """Upload the media and create the video record"""
        if not title or not title.strip():
            raise BadRequestError("Title is required")
        if video_file is None or thumbnail is None:
            raise BadRequestError("Video file and thumbnail are required")

        uploaded_video = store_upload(storage, video_file)
        try:
            uploaded_thumbnail = store_upload(storage, thumbnail)
        except Exception:
            delete_quietly(storage, uploaded_video["url"])
            raise

        try:
            video = Video(
                owner_id=owner.id,
                title=title.strip(),
                description=(description or "").strip(),
                video_url=uploaded_video["url"],
                thumbnail_url=uploaded_thumbnail["url"],
                duration=uploaded_video.get("duration") or 0,
            )
            db.add(video)
            db.commit()
            db.refresh(video)
            logger.info(f"Video published: {video.id} by user {owner.id}")
            return video
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating video: {e}")
            delete_quietly(storage, uploaded_video["url"])
            delete_quietly(storage, uploaded_thumbnail["url"])
            raise

    def update_video(
        self,
        db: Session,
        storage: MediaStorage,
        video_id: int,
        actor_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        thumbnail: Optional[UploadFile] = None,
    ) -> Video:
        video = self.get_owned_video(db, video_id, actor_id)
        if title is not None:
            if not title.strip():
                raise BadRequestError("Title cannot be empty")
            video.title = title.strip()
        if description is not None:
            video.description = description.strip()

        previous_thumbnail = None
        if thumbnail is not None:
            previous_thumbnail = video.thumbnail_url
            video.thumbnail_url = store_upload(storage, thumbnail)["url"]

        db.commit()
        db.refresh(video)
        delete_quietly(storage, previous_thumbnail)
        logger.info(f"Video updated: {video_id}")
        return video

    def delete_video(self, db: Session, storage: MediaStorage, video_id: int, actor_id: int) -> None:
        """Delete the video with its comments, likes and playlist entries"""
        video = self.get_owned_video(db, video_id, actor_id)
        media_urls = [video.video_url, video.thumbnail_url]
        try:
            db.delete(video)
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting video {video_id}: {e}")
            raise
        for url in media_urls:
            delete_quietly(storage, url)
        logger.info(f"Video deleted: {video_id}")

    def toggle_publish(self, db: Session, video_id: int, actor_id: int) -> Video:
        video = self.get_owned_video(db, video_id, actor_id)
        video.is_published = not video.is_published
        db.commit()
        db.refresh(video)
        logger.info(f"Video {video_id} published={video.is_published}")
        return video

    def list_channel_videos(self, db: Session, owner_id: int) -> List[VideoCard]:
        """All of a channel's own videos, newest first, including unpublished ones"""
        rows = db.execute(
            video_card_statement(owner_id)
            .where(Video.owner_id == owner_id)
            .order_by(Video.created_at.desc(), Video.id.desc())
        ).all()
        return [to_video_card(row) for row in rows]

# Create singleton instance
video_service = VideoService()
