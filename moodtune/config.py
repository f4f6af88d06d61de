# ============================================================================
# FILE: moodtune/config.py
# ============================================================================
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""
    
    # App settings
    APP_NAME: str = "Moodtune Music Backend"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    
    # Database
    DATABASE_URL: str = "sqlite:///./moodtune.db"  # Change to PostgreSQL in production
    DB_TIMEOUT_SECONDS: float = 10.0
    
    # Uploaded artifacts (songs/ and covers/ live below this directory)
    UPLOAD_DIR: str = "./uploads"
    EXTRACTION_TIMEOUT_SECONDS: float = 30.0
    KEEP_FAILED_UPLOADS: bool = False
    
    # Recommendations
    RECOMMENDATION_HISTORY_DEPTH: int = 3
    RECOMMENDATION_LIMIT: int = 10
    
    # CORS
    CORS_ORIGINS: List[str] = ["*"]
    
    class Config:
        env_file = ".env"
        case_sensitive = True
