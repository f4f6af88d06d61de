# ============================================================================
# FILE: moodtune/services/recommendation_service.py
# ============================================================================
from typing import Iterable, List
from sqlalchemy import func
from sqlalchemy.orm import Session
from moodtune.db.models.history import History
from moodtune.db.models.song import Song
import logging

logger = logging.getLogger(__name__)

def distinct_moods(moods: Iterable[str]) -> List[str]:
    """Collapse duplicate moods keeping first-seen order; blank moods are dropped"""
    seen = []
    for mood in moods:
        if mood and mood not in seen:
            seen.append(mood)
    return seen

class RecommendationService:
    """Naive mood matching against the user's latest plays"""
    
    def recent_moods(self, db: Session, user_id: int, depth: int = 3) -> List[str]:
        """Moods of the user's most recent plays, newest first"""
        rows = (
            db.query(Song.mood)
            .join(History, History.song_id == Song.id)
            .filter(History.user_id == user_id)
            .order_by(History.played_at.desc(), History.id.desc())
            .limit(depth)
            .all()
        )
        return distinct_moods(row.mood for row in rows)
    
    def songs_for_moods(self, db: Session, moods: List[str], limit: int = 10) -> List[Song]:
        """Random sample of songs whose mood is one of the given moods"""
        if not moods:
            return []
        return (
            db.query(Song)
            .filter(Song.mood.in_(moods))
            .order_by(func.random())
            .limit(limit)
            .all()
        )
    
    def recommend(self, db: Session, user_id: int, depth: int = 3, limit: int = 10) -> List[Song]:
        moods = self.recent_moods(db, user_id, depth)
        logger.info(f"Recommending for user {user_id} from moods {moods}")
        return self.songs_for_moods(db, moods, limit)

# Create singleton instance
recommendation_service = RecommendationService()
