# ============================================================================
# FILE: moodtune/api/endpoints/playlist.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List
from moodtune.db.session import get_db
from moodtune.schemas.playlist import PlaylistSummary
from moodtune.services.playlist_service import playlist_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=List[PlaylistSummary])
async def get_playlists(
    user_id: int = Query(..., alias="userId"),
    db: Session = Depends(get_db)
):
    """
    Get all playlists owned by a user
    """
    try:
        return playlist_service.get_user_playlists(db, user_id)
    except Exception as e:
        logger.error(f"Playlist listing error: {e}")
        raise HTTPException(status_code=500, detail="Failed to load playlists")
