# ============================================================================
# FILE: moodtune/schemas/playlist.py
# ============================================================================
from pydantic import BaseModel

class PlaylistSummary(BaseModel):
    """Schema for playlist listing entries"""
    id: int
    name: str
    
    class Config:
        from_attributes = True
