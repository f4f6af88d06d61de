# ============================================================================
# FILE: moodtune/api/endpoints/upload.py
# ============================================================================
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Optional
from moodtune.api.dependencies import get_upload_pipeline
from moodtune.db.session import get_db
from moodtune.schemas.song import SongResponse, UploadFields, UploadResponse
from moodtune.services.upload_pipeline import UploadPipeline
from moodtune.services.user_service import user_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/song", response_model=UploadResponse)
async def upload_song(
    song: UploadFile = File(..., description="Audio file"),
    title: Optional[str] = Form(None),
    artist: Optional[str] = Form(None),
    album: Optional[str] = Form(None),
    genre: Optional[str] = Form(None),
    mood: Optional[str] = Form(None),
    language: Optional[str] = Form(None),
    user_id: Optional[int] = Form(None, alias="userId"),
    db: Session = Depends(get_db),
    pipeline: UploadPipeline = Depends(get_upload_pipeline)
):
    """
    Upload a song; title, artist, album and genre are auto-filled
    from the file's embedded tags when present
    """
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="userId is required")
    
    try:
        owner = user_service.get_user(db, user_id)
    except SQLAlchemyError as e:
        logger.error(f"Upload owner lookup error: {e}")
        raise HTTPException(status_code=500, detail="Upload failed")
    if not owner:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    
    fields = UploadFields(
        title=title,
        artist=artist,
        album=album,
        genre=genre,
        mood=mood,
        language=language,
        user_id=user_id,
    )
    result = await pipeline.run(song.filename, song.file, fields)
    if not result.ok:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": result.error, "details": result.details},
        )
    
    return {
        "success": True,
        "message": "Song uploaded with metadata!",
        "song": SongResponse.model_validate(result.value),
    }
