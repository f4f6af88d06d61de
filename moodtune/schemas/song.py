# ============================================================================
# FILE: moodtune/schemas/song.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional

class UploadFields(BaseModel):
    """Optional descriptive fields sent alongside an uploaded file"""
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    genre: Optional[str] = None
    mood: Optional[str] = None
    language: Optional[str] = None
    user_id: int

class SongResponse(BaseModel):
    """Schema for a stored song"""
    id: int
    title: str
    artist: str
    album: str
    mood: str
    genre: str
    language: Optional[str] = None
    file_path: str
    user_id: int
    bitrate: float
    duration: float
    thumbnail: Optional[str] = None
    
    class Config:
        from_attributes = True

class UploadResponse(BaseModel):
    """Schema for a successful upload"""
    success: bool = True
    message: str
    song: SongResponse

class PlayRequest(BaseModel):
    """Schema for recording a play event"""
    user_id: int = Field(..., alias="userId")
    song_id: int = Field(..., alias="songId")
    
    class Config:
        populate_by_name = True

class PlayResponse(BaseModel):
    success: bool = True
