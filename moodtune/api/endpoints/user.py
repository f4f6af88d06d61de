# ============================================================================
# FILE: moodtune/api/endpoints/user.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List
from moodtune.api.dependencies import get_settings
from moodtune.config import Settings
from moodtune.db.session import get_db
from moodtune.schemas.song import SongResponse
from moodtune.services.recommendation_service import recommendation_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/recommendations", response_model=List[SongResponse])
async def get_recommendations(
    user_id: int = Query(..., alias="userId"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """
    Songs sharing a mood with the user's most recent plays
    """
    try:
        return recommendation_service.recommend(
            db,
            user_id,
            depth=settings.RECOMMENDATION_HISTORY_DEPTH,
            limit=settings.RECOMMENDATION_LIMIT,
        )
    except Exception as e:
        logger.error(f"Recommendation error: {e}")
        raise HTTPException(status_code=500, detail="Failed to load recommendations")
