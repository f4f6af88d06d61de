# ============================================================================
# FILE: moodtune/services/playlist_service.py
# ============================================================================
from typing import List
from sqlalchemy.orm import Session
from moodtune.db.models.playlist import Playlist

class PlaylistService:
    """Service layer for playlist operations"""
    
    def get_user_playlists(self, db: Session, user_id: int) -> List[Playlist]:
        """Get all playlists for a user"""
        return db.query(Playlist).filter(Playlist.user_id == user_id).order_by(Playlist.id).all()

# Create singleton instance
playlist_service = PlaylistService()
