# ============================================================================
# FILE: moodtune/api/endpoints/song.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from moodtune.db.session import get_db
from moodtune.db.models.song import Song
from moodtune.schemas.song import PlayRequest, PlayResponse
from moodtune.services.history_service import history_service
from moodtune.services.user_service import user_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/play", response_model=PlayResponse)
async def track_play(
    play: PlayRequest,
    db: Session = Depends(get_db)
):
    """
    Record that a user played a song
    """
    try:
        user = user_service.get_user(db, play.user_id)
        song = db.get(Song, play.song_id)
    except SQLAlchemyError as e:
        logger.error(f"Play lookup error: {e}")
        raise HTTPException(status_code=500, detail="Failed to record play")
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if not song:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Song not found")
    
    try:
        history_service.track_playback(db, play.user_id, play.song_id)
    except Exception as e:
        logger.error(f"Play tracking error: {e}")
        raise HTTPException(status_code=500, detail="Failed to record play")
    return {"success": True}
