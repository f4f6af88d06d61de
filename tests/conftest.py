# tests/conftest.py
import time
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from moodtune.config import Settings
from moodtune.core.metadata import AudioMetadata
from moodtune.db.models.history import History
from moodtune.db.models.playlist import Playlist
from moodtune.db.models.song import Song
from moodtune.db.models.user import User
from moodtune.server import create_app


class FakeExtractor:
    """
    Stand-in for the mutagen based extractor.
    Tests set `metadata`, `error` or `delay` before uploading.
    """
    def __init__(self):
        self.metadata = AudioMetadata()
        self.error = None
        self.delay = 0.0
        self.calls = []

    def __call__(self, path):
        self.calls.append(path)
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.metadata


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        EXTRACTION_TIMEOUT_SECONDS=5.0,
    )

@pytest.fixture
def extractor():
    return FakeExtractor()

@pytest.fixture
def app(settings, extractor):
    return create_app(settings, extractor=extractor)

@pytest.fixture
def client(app):
    # Entering the client runs the lifespan, which creates the tables
    with TestClient(app) as c:
        yield c

@pytest.fixture
def db(app, client):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def upload_dir(settings):
    return Path(settings.UPLOAD_DIR)

@pytest.fixture
def add_user(db):
    def _add(email="listener@b.com", user_id=None):
        user = User(id=user_id, email=email, hashed_password="not-a-real-hash")
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _add

@pytest.fixture
def add_song(db):
    def _add(user, mood="", title="Song"):
        song = Song(
            title=title,
            artist="Artist",
            album="Album",
            mood=mood,
            genre="Genre",
            file_path=f"uploads/songs/{title}.mp3",
            user_id=user.id,
        )
        db.add(song)
        db.commit()
        db.refresh(song)
        return song
    return _add

@pytest.fixture
def add_play(db):
    def _add(user, song, played_at):
        entry = History(user_id=user.id, song_id=song.id, played_at=played_at)
        db.add(entry)
        db.commit()
        return entry
    return _add

@pytest.fixture
def add_playlist(db):
    def _add(user, name):
        playlist = Playlist(user_id=user.id, name=name)
        db.add(playlist)
        db.commit()
        db.refresh(playlist)
        return playlist
    return _add
