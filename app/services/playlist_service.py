# ============================================================================
# FILE: app/services/playlist_service.py
# ============================================================================
from typing import List, Optional, Tuple
from sqlalchemy import func, select
from sqlalchemy.orm import Session
from app.db.models.playlist import Playlist, PlaylistVideo
from app.db.models.user import User
from app.db.models.video import Video
from app.schemas.playlist import PlaylistCreate, PlaylistDetail, PlaylistResponse, PlaylistUpdate
from app.core.exceptions import NotFoundError
from app.services.base import ensure_owner, get_or_404
from app.services.feed import to_video_card, video_card_statement, visible_videos_filter
from app.services.video_service import video_service
import logging

logger = logging.getLogger(__name__)

class PlaylistService:
    """Service layer for playlist operations"""
    
    def create_playlist(self, db: Session, owner_id: int, playlist_data: PlaylistCreate) -> Playlist:
        """Create a new playlist for a user"""
        try:
            playlist = Playlist(
                owner_id=owner_id,
                name=playlist_data.name,
                description=playlist_data.description or ""
            )
            db.add(playlist)
            db.commit()
            db.refresh(playlist)
            logger.info(f"Playlist created: {playlist.id} for user {owner_id}")
            return playlist
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating playlist: {e}")
            raise

    def to_response(self, db: Session, playlist: Playlist, actor_id: Optional[int]) -> PlaylistResponse:
        """video_count covers only the entries actor_id may see"""
        video_count = db.scalar(
            select(func.count(PlaylistVideo.id))
            .join(Video, PlaylistVideo.video_id == Video.id)
            .where(PlaylistVideo.playlist_id == playlist.id, visible_videos_filter(actor_id))
        ) or 0
        return PlaylistResponse(
            **PlaylistResponse.model_validate(playlist).model_dump(exclude={"video_count"}),
            video_count=video_count,
        )
    
    def get_user_playlists(self, db: Session, user_id: int, actor_id: Optional[int] = None) -> List[PlaylistResponse]:
        """Get all playlists for a user; none is an empty list"""
        get_or_404(db, User, user_id, "User not found")
        playlists = db.query(Playlist).filter(
            Playlist.owner_id == user_id
        ).order_by(Playlist.created_at.desc(), Playlist.id.desc()).all()
        return [self.to_response(db, playlist, actor_id) for playlist in playlists]
    
    def get_playlist(self, db: Session, playlist_id: int) -> Playlist:
        return get_or_404(db, Playlist, playlist_id, "Playlist not found")

    def get_owned_playlist(self, db: Session, playlist_id: int, user_id: int) -> Playlist:
        """Get a specific playlist (verify ownership)"""
        playlist = self.get_playlist(db, playlist_id)
        ensure_owner(playlist, user_id, "Only the owner can modify this playlist")
        return playlist

    def get_playlist_detail(self, db: Session, playlist_id: int, actor_id: Optional[int]) -> PlaylistDetail:
        """Playlist with the videos the caller may see, in playlist order"""
        playlist = self.get_playlist(db, playlist_id)
        rows = db.execute(
            video_card_statement(actor_id)
            .join(PlaylistVideo, PlaylistVideo.video_id == Video.id)
            .where(PlaylistVideo.playlist_id == playlist.id, visible_videos_filter(actor_id))
            .order_by(PlaylistVideo.position.asc(), PlaylistVideo.id.asc())
        ).all()
        response = self.to_response(db, playlist, actor_id)
        return PlaylistDetail(**response.model_dump(), videos=[to_video_card(row) for row in rows])
    
    def update_playlist(self, db: Session, playlist_id: int, user_id: int, update_data: PlaylistUpdate) -> Playlist:
        """Update playlist details"""
        playlist = self.get_owned_playlist(db, playlist_id, user_id)
        
        try:
            if update_data.name is not None:
                playlist.name = update_data.name
            if update_data.description is not None:
                playlist.description = update_data.description
            
            db.commit()
            db.refresh(playlist)
            logger.info(f"Playlist updated: {playlist_id}")
            return playlist
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating playlist: {e}")
            raise
    
    def delete_playlist(self, db: Session, playlist_id: int, user_id: int) -> None:
        """Delete a playlist"""
        playlist = self.get_owned_playlist(db, playlist_id, user_id)
        
        try:
            db.delete(playlist)
            db.commit()
            logger.info(f"Playlist deleted: {playlist_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting playlist: {e}")
            raise
    
    def add_video_to_playlist(self, db: Session, playlist_id: int, user_id: int, video_id: int) -> Tuple[Playlist, bool]:
        """Append a video; returns (playlist, added) where added is False for a duplicate"""
        playlist = self.get_owned_playlist(db, playlist_id, user_id)
        video_service.get_visible_video(db, video_id, user_id)
        
        # Check if video already exists in playlist
        existing = db.query(PlaylistVideo).filter(
            PlaylistVideo.playlist_id == playlist_id,
            PlaylistVideo.video_id == video_id
        ).first()
        
        if existing:
            logger.info(f"Video already in playlist {playlist_id}: {video_id}")
            return playlist, False
        
        try:
            last_position = db.scalar(
                select(func.max(PlaylistVideo.position)).where(PlaylistVideo.playlist_id == playlist_id)
            )
            entry = PlaylistVideo(
                playlist_id=playlist_id,
                video_id=video_id,
                position=0 if last_position is None else last_position + 1,
            )
            db.add(entry)
            db.commit()
            db.refresh(playlist)
            logger.info(f"Video added to playlist {playlist_id}: {video_id}")
            return playlist, True
        except Exception as e:
            db.rollback()
            logger.error(f"Error adding video to playlist: {e}")
            raise
    
    def remove_video_from_playlist(self, db: Session, playlist_id: int, user_id: int, video_id: int) -> Playlist:
        """Remove a video from a playlist"""
        playlist = self.get_owned_playlist(db, playlist_id, user_id)
        
        entry = db.query(PlaylistVideo).filter(
            PlaylistVideo.playlist_id == playlist_id,
            PlaylistVideo.video_id == video_id
        ).first()
        if entry is None:
            raise NotFoundError("Video does not exist in the playlist")
        
        try:
            db.delete(entry)
            db.commit()
            db.refresh(playlist)
            logger.info(f"Video removed from playlist {playlist_id}: {video_id}")
            return playlist
        except Exception as e:
            db.rollback()
            logger.error(f"Error removing video from playlist: {e}")
            raise

# Create singleton instance
playlist_service = PlaylistService()
