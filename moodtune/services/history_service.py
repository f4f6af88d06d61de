# ============================================================================
# FILE: moodtune/services/history_service.py
# ============================================================================
from sqlalchemy.orm import Session
from moodtune.db.models.history import History
import logging

logger = logging.getLogger(__name__)

class HistoryService:
    """Service layer for play history"""
    
    def track_playback(self, db: Session, user_id: int, song_id: int) -> History:
        """Append one play event to the user's history"""
        try:
            history_entry = History(user_id=user_id, song_id=song_id)
            db.add(history_entry)
            db.commit()
            db.refresh(history_entry)
            logger.info(f"Playback tracked for user {user_id}: song {song_id}")
            return history_entry
        except Exception as e:
            db.rollback()
            logger.error(f"Error tracking playback: {e}")
            raise

# Create singleton instance
history_service = HistoryService()
