# ============================================================================
# FILE: moodtune/db/models/song.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, Float, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from moodtune.db.base import Base

class Song(Base):
    """Uploaded song with its resolved metadata (immutable once written)"""
    __tablename__ = "songs"
    
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    artist = Column(String, nullable=False)
    album = Column(String, nullable=False)
    mood = Column(String, nullable=False, default="", index=True)
    genre = Column(String, nullable=False)
    language = Column(String, nullable=True)
    file_path = Column(String, nullable=False)  # Relative to the static mount, e.g. uploads/songs/...
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    bitrate = Column(Float, nullable=False, default=0)  # bits per second
    duration = Column(Float, nullable=False, default=0)  # seconds
    thumbnail = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    owner = relationship("User", back_populates="songs")
    plays = relationship("History", back_populates="song")
