# ============================================================================
# FILE: moodtune/api/router.py
# ============================================================================
from fastapi import APIRouter
from moodtune.api.endpoints import auth, upload, playlist, song, user

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(upload.router, prefix="/upload", tags=["upload"])
api_router.include_router(playlist.router, prefix="/playlists", tags=["playlist"])
api_router.include_router(song.router, prefix="/song", tags=["song"])
api_router.include_router(user.router, prefix="/user", tags=["user"])
