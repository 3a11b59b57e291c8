# ============================================================================
# FILE: app/services/feed.py
# Building blocks for feed queries: live counts, the "liked by me" probe,
# sorting and page-window selection
# ============================================================================
from math import ceil
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple
from sqlalchemy import Select, false, func, select
from sqlalchemy.orm import Session
from app.config import settings
from app.db.models.comment import Comment
from app.db.models.like import Like
from app.db.models.user import User
from app.db.models.video import Video
from app.schemas.response import Page
from app.schemas.user import OwnerSummary
from app.schemas.video import VideoCard, VideoResponse

# Largest row offset a SQL backend accepts (signed 64-bit)
MAX_OFFSET = 2 ** 63 - 1

VIDEO_SORT_FIELDS = {
    "created_at": Video.created_at,
    "views": Video.views,
    "duration": Video.duration,
    "title": Video.title,
}


def clamp_pagination(page: Optional[int], limit: Optional[int]) -> Tuple[int, int]:
    """Untrusted page/limit values: page >= 1, 1 <= limit <= MAX_PAGE_SIZE, offset within MAX_OFFSET"""
    limit = int(limit or settings.DEFAULT_PAGE_SIZE)
    limit = min(max(limit, 1), settings.MAX_PAGE_SIZE)
    page = max(int(page or 1), 1)
    page = min(page, MAX_OFFSET // limit)
    return page, limit


def likes_count(subject_column) -> Any:
    """Correlated count of likes whose subject is subject_column (e.g. Video.id)"""
    like_column = _like_column_for(subject_column)
    return (
        select(func.count(Like.id))
        .where(like_column == subject_column)
        .scalar_subquery()
    )


def is_liked_by(subject_column, user_id: Optional[int]) -> Any:
    """Boolean probe: has user_id liked the subject; always false for anonymous callers"""
    if user_id is None:
        return false()
    like_column = _like_column_for(subject_column)
    return (
        select(Like.id)
        .where(like_column == subject_column, Like.liked_by_id == user_id)
        .exists()
    )


def comments_count() -> Any:
    return (
        select(func.count(Comment.id))
        .where(Comment.video_id == Video.id)
        .scalar_subquery()
    )


def _like_column_for(subject_column):
    table = subject_column.class_.__tablename__
    return {
        "videos": Like.video_id,
        "comments": Like.comment_id,
        "tweets": Like.tweet_id,
    }[table]


def owner_summary(user: User) -> OwnerSummary:
    return OwnerSummary.model_validate(user)


def visible_videos_filter(actor_id: Optional[int]):
    """Published videos, plus the actor's own unpublished ones"""
    if actor_id is None:
        return Video.is_published.is_(True)
    return (Video.is_published.is_(True)) | (Video.owner_id == actor_id)


def video_card_statement(actor_id: Optional[int]) -> Select:
    """Video joined with its owner, live like/comment counts and the liked flag"""
    return (
        select(
            Video,
            User,
            likes_count(Video.id).label("likes_count"),
            comments_count().label("comments_count"),
            is_liked_by(Video.id, actor_id).label("is_liked"),
        )
        .join(User, Video.owner_id == User.id)
    )


def to_video_card(row) -> VideoCard:
    base = VideoResponse.model_validate(row.Video).model_dump()
    return VideoCard(
        **base,
        owner=owner_summary(row.User),
        likes_count=row.likes_count or 0,
        comments_count=row.comments_count or 0,
        is_liked=bool(row.is_liked),
    )


def video_sort_order(sort_by: Optional[str], sort_type: Optional[str]) -> List[Any]:
    """Requested order with id as tie-break; insertion order when unspecified"""
    descending = (sort_type or "desc").lower() == "desc"
    column = VIDEO_SORT_FIELDS.get(sort_by or "")
    if column is None:
        return [Video.id.asc()]
    if descending:
        return [column.desc(), Video.id.desc()]
    return [column.asc(), Video.id.asc()]


def paginate(
    db: Session,
    statement: Select,
    filters: Sequence[Any],
    count_from,
    page: int,
    limit: int,
    to_item: Callable[[Any], Any],
) -> Page:
    """
    Apply filters, count the filtered set, then take one page window

    Filters are applied before the joins and computed columns are evaluated;
    the count is taken on the filtered base table alone.
    """
    page, limit = clamp_pagination(page, limit)
    total = db.scalar(select(func.count()).select_from(count_from).where(*filters)) or 0
    rows = db.execute(
        statement.where(*filters).offset((page - 1) * limit).limit(limit)
    ).all()
    return build_page([to_item(row) for row in rows], total, page, limit)


def build_page(items: List[Any], total: int, page: int, limit: int) -> Page:
    total_pages = ceil(total / limit) if total else 0
    return Page(
        items=items,
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )
