# ============================================================================
# FILE: moodtune/db/models/user.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from moodtune.db.base import Base

class User(Base):
    """User model for signup and login"""
    __tablename__ = "users"
    
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    songs = relationship("Song", back_populates="owner")
    playlists = relationship("Playlist", back_populates="user")
    history = relationship("History", back_populates="user")
