# ============================================================================
# FILE: moodtune/api/dependencies.py
# ============================================================================
from fastapi import Request
from moodtune.config import Settings
from moodtune.services.upload_pipeline import UploadPipeline

def get_settings(request: Request) -> Settings:
    """Settings the running application was created with"""
    return request.app.state.settings

def get_upload_pipeline(request: Request) -> UploadPipeline:
    return request.app.state.upload_pipeline
