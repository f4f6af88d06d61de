# ============================================================================
# FILE: moodtune/services/upload_pipeline.py
# ============================================================================
import asyncio
import os
import shutil
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Generic, List, Optional, TypeVar

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from moodtune.config import Settings
from moodtune.core.metadata import AudioMetadata, MetadataExtractionError, extract_metadata
from moodtune.db.models.song import Song
from moodtune.schemas.song import UploadFields
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")

# URL prefix the static file server exposes UPLOAD_DIR under
STATIC_PREFIX = "uploads"
SONGS_DIR = "songs"
COVERS_DIR = "covers"
COVER_SUFFIX = "-cover.jpg"

DEFAULT_ARTIST = "Unknown Artist"
DEFAULT_ALBUM = "Unknown Album"
DEFAULT_GENRE = "Unknown"

@dataclass
class Result(Generic[T]):
    """Outcome of one pipeline step: a value, or an error with details"""
    value: Optional[T] = None
    error: Optional[str] = None
    details: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str, details: Optional[str] = None) -> "Result[T]":
        return cls(error=error, details=details)

@dataclass
class StoredArtifact:
    """A file written below UPLOAD_DIR"""
    path: Path  # absolute location on disk
    relative_path: str  # what gets stored in the database
    original_name: str

    @property
    def stem(self) -> str:
        return os.path.splitext(self.original_name)[0]

@dataclass
class ResolvedFields:
    title: str
    artist: str
    album: str
    genre: str
    mood: str
    language: Optional[str]

def _pick(*candidates: Optional[str]) -> Optional[str]:
    """First candidate that is a non-empty string"""
    for candidate in candidates:
        if candidate:
            return candidate
    return None

def resolve_fields(metadata: AudioMetadata, fields: UploadFields, fallback_title: str) -> ResolvedFields:
    """
    Pick the final value of each descriptive field

    Embedded tag wins, then the client supplied value, then the default.
    Empty strings count as not supplied.
    """
    return ResolvedFields(
        title=_pick(metadata.title, fields.title) or fallback_title,
        artist=_pick(metadata.artist, fields.artist) or DEFAULT_ARTIST,
        album=_pick(metadata.album, fields.album) or DEFAULT_ALBUM,
        genre=_pick(metadata.genre, fields.genre) or DEFAULT_GENRE,
        mood=fields.mood or "",
        language=fields.language or None,
    )

def unique_name(filename: str) -> str:
    """Collision free storage name that keeps the original filename readable"""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex}-{filename}"

class UploadPipeline:
    """
    Turns one uploaded audio file into one stored song

    Steps run strictly in order: store the raw file, extract metadata,
    resolve fields, write the cover image, insert the song row. The first
    failing step short-circuits the rest.
    """

    def __init__(
        self,
        settings: Settings,
        session_factory: sessionmaker,
        extractor: Callable[[str], AudioMetadata] = extract_metadata,
    ):
        self.settings = settings
        self.session_factory = session_factory
        self.extractor = extractor
        self.upload_root = Path(settings.UPLOAD_DIR)

    async def run(self, filename: str, stream: BinaryIO, fields: UploadFields) -> Result[Song]:
        """Execute the whole pipeline for one upload"""
        written: List[Path] = []

        stored = await self.store_artifact(filename, stream)
        if not stored.ok:
            return Result.failure(stored.error, stored.details)
        artifact = stored.value
        written.append(artifact.path)

        try:
            result = await self._process(artifact, fields, written)
        except Exception as e:
            # Steps report expected failures as results; this only guards cleanup
            logger.exception(f"Unexpected error while processing {artifact.original_name}")
            result = Result.failure("Upload failed", str(e))
        if not result.ok:
            logger.error(f"Upload of {artifact.original_name} failed: {result.details}")
            self._discard(written)
        return result

    async def _process(
        self, artifact: StoredArtifact, fields: UploadFields, written: List[Path]
    ) -> Result[Song]:
        extracted = await self.extract(artifact)
        if not extracted.ok:
            return Result.failure(extracted.error, extracted.details)
        metadata = extracted.value

        resolved = resolve_fields(metadata, fields, fallback_title=artifact.stem)

        cover = await self.save_cover(metadata, artifact)
        if not cover.ok:
            return Result.failure(cover.error, cover.details)
        if cover.value is not None:
            written.append(cover.value.path)
        thumbnail = cover.value.relative_path if cover.value is not None else None

        return await self.commit(resolved, metadata, artifact, thumbnail, fields.user_id)

    async def store_artifact(self, filename: str, stream: BinaryIO) -> Result[StoredArtifact]:
        """Step 1: persist the raw bytes before anything reads them"""
        original_name = os.path.basename(filename or "") or "upload"
        name = unique_name(original_name)
        target = self.upload_root / SONGS_DIR / name

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "wb") as out:
                shutil.copyfileobj(stream, out)

        try:
            await run_in_threadpool(_write)
        except OSError as e:
            # Drop whatever part of the file made it to disk
            target.unlink(missing_ok=True)
            return Result.failure("Upload failed", f"Could not store {original_name}: {e}")

        logger.info(f"Stored upload {original_name} as {target}")
        return Result.success(StoredArtifact(
            path=target,
            relative_path=f"{STATIC_PREFIX}/{SONGS_DIR}/{name}",
            original_name=original_name,
        ))

    async def extract(self, artifact: StoredArtifact) -> Result[AudioMetadata]:
        """Step 2: parse embedded tags with a hard timeout"""
        timeout = self.settings.EXTRACTION_TIMEOUT_SECONDS
        try:
            metadata = await asyncio.wait_for(
                asyncio.to_thread(self.extractor, str(artifact.path)),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            return Result.failure(
                "Upload failed",
                f"Metadata extraction for {artifact.original_name} timed out after {timeout}s",
            )
        except MetadataExtractionError as e:
            return Result.failure(
                "Upload failed",
                f"Could not read metadata from {artifact.original_name}: {e.cause}",
            )
        return Result.success(metadata)

    async def save_cover(self, metadata: AudioMetadata, artifact: StoredArtifact) -> Result[Optional[StoredArtifact]]:
        """Step 4: write the first embedded picture, if any"""
        if not metadata.pictures:
            return Result.success(None)

        name = f"{uuid.uuid4().hex}-{artifact.stem}{COVER_SUFFIX}"
        target = self.upload_root / COVERS_DIR / name
        data = metadata.pictures[0]

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)

        try:
            await run_in_threadpool(_write)
        except OSError as e:
            return Result.failure("Upload failed", f"Could not save cover for {artifact.original_name}: {e}")

        return Result.success(StoredArtifact(
            path=target,
            relative_path=f"{STATIC_PREFIX}/{COVERS_DIR}/{name}",
            original_name=name,
        ))

    async def commit(
        self,
        resolved: ResolvedFields,
        metadata: AudioMetadata,
        artifact: StoredArtifact,
        thumbnail: Optional[str],
        user_id: int,
    ) -> Result[Song]:
        """
        Step 5: insert the song row with a hard timeout

        The insert runs on its own session in a worker thread. A timed out
        insert is still waited for, and a row it managed to commit is removed
        again, so a failed upload never leaves a row behind its deleted files.
        """
        song = Song(
            title=resolved.title,
            artist=resolved.artist,
            album=resolved.album,
            mood=resolved.mood,
            genre=resolved.genre,
            language=resolved.language,
            file_path=artifact.relative_path,
            user_id=user_id,
            bitrate=metadata.bitrate or 0,
            duration=metadata.duration or 0,
            thumbnail=thumbnail,
        )

        def _insert() -> Song:
            db = self.session_factory()
            try:
                db.add(song)
                db.commit()
                db.refresh(song)
                return song
            except SQLAlchemyError:
                db.rollback()
                raise
            finally:
                db.close()

        timeout = self.settings.DB_TIMEOUT_SECONDS
        insert = asyncio.ensure_future(asyncio.to_thread(_insert))
        try:
            saved = await asyncio.wait_for(asyncio.shield(insert), timeout=timeout)
        except asyncio.TimeoutError:
            return await self._settle_late_insert(insert, artifact, timeout)
        except SQLAlchemyError as e:
            return Result.failure("Upload failed", f"Could not save {artifact.original_name}: {e}")

        logger.info(f"Song {saved.id} '{saved.title}' uploaded by user {user_id}")
        return Result.success(saved)

    async def _settle_late_insert(
        self, insert: "asyncio.Future[Song]", artifact: StoredArtifact, timeout: float
    ) -> Result[Song]:
        """Wait out an insert that missed its deadline and undo it if it landed"""
        failure = Result.failure("Upload failed", f"Saving {artifact.original_name} timed out after {timeout}s")
        try:
            late = await insert
        except SQLAlchemyError:
            return failure

        def _delete() -> None:
            db = self.session_factory()
            try:
                db.query(Song).filter(Song.id == late.id).delete()
                db.commit()
            except SQLAlchemyError:
                db.rollback()
                raise
            finally:
                db.close()

        try:
            await run_in_threadpool(_delete)
        except SQLAlchemyError as e:
            # The row stays, so its files must stay too
            logger.error(f"Could not revoke late song {late.id}, keeping it: {e}")
            return Result.success(late)

        logger.warning(f"Revoked song {late.id} committed after the {timeout}s deadline")
        return failure

    def _discard(self, paths: List[Path]) -> None:
        """Compensating delete for artifacts of a failed upload"""
        if self.settings.KEEP_FAILED_UPLOADS:
            logger.warning(f"Keeping {len(paths)} artifact(s) of failed upload")
            return
        for path in paths:
            try:
                path.unlink()
                logger.warning(f"Removed orphaned artifact {path}")
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.error(f"Could not remove orphaned artifact {path}: {e}")
