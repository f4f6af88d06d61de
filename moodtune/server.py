# ============================================================================
# FILE: moodtune/server.py
# ============================================================================
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Callable, Optional
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from moodtune.api.router import api_router
from moodtune.config import Settings
from moodtune.core.logging import setup_logging
from moodtune.core.metadata import AudioMetadata, extract_metadata
from moodtune.db.base import Base
from moodtune.db.session import build_engine, build_session_factory
from moodtune.services.upload_pipeline import STATIC_PREFIX, UploadPipeline
# Register every model on Base.metadata before create_all
from moodtune.db.models import history, playlist, song, user  # noqa: F401
import logging

logger = logging.getLogger(__name__)

def _register_error_handlers(app: FastAPI) -> None:
    """Render every error as a JSON body with an `error` field"""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

def create_app(
    settings: Optional[Settings] = None,
    extractor: Callable[[str], AudioMetadata] = extract_metadata,
) -> FastAPI:
    """
    Build the application from one settings object

    The engine, session factory and upload pipeline live on app.state so
    that several apps (e.g. one per test) can coexist in a process.
    """
    settings = settings or Settings()
    setup_logging(settings.LOG_LEVEL, debug=settings.DEBUG)
    engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.APP_NAME}")
        Base.metadata.create_all(bind=engine)
        yield
        logger.info(f"Shutting down {settings.APP_NAME}")
        engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Music backend with song uploads, play history and mood recommendations",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.upload_pipeline = UploadPipeline(settings, app.state.session_factory, extractor=extractor)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)

    # Include API router
    app.include_router(api_router, prefix="/api")

    # Serve stored songs and covers read-only; subdirectories appear on first upload
    upload_root = Path(settings.UPLOAD_DIR)
    upload_root.mkdir(parents=True, exist_ok=True)
    app.mount(f"/{STATIC_PREFIX}", StaticFiles(directory=str(upload_root)), name=STATIC_PREFIX)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app
