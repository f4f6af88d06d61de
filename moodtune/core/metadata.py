# ============================================================================
# FILE: moodtune/core/metadata.py
# ============================================================================
import base64
import binascii
import os
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

import mutagen
from mutagen import MutagenError
from mutagen.flac import Picture
import logging

logger = logging.getLogger(__name__)

# Tag names per container: ID3 frames, MP4 atoms, Vorbis comments, APEv2/ASF
TITLE_KEYS = ("TIT2", "\xa9nam", "title", "Title")
ARTIST_KEYS = ("TPE1", "\xa9ART", "artist", "Artist", "Author")
ALBUM_KEYS = ("TALB", "\xa9alb", "album", "Album", "WM/AlbumTitle")
GENRE_KEYS = ("TCON", "\xa9gen", "genre", "Genre", "WM/Genre")

class MetadataExtractionError(Exception):
    """Raised when an audio artifact cannot be parsed"""

    def __init__(self, path: str, cause: Any):
        self.path = path
        self.cause = cause
        super().__init__(f"Could not read metadata from {os.path.basename(path)}: {cause}")

@dataclass
class AudioMetadata:
    """Embedded tags and format info of one audio file"""
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    genres: List[str] = field(default_factory=list)
    pictures: List[bytes] = field(default_factory=list)
    bitrate: Optional[float] = None
    duration: Optional[float] = None

    @property
    def genre(self) -> Optional[str]:
        return self.genres[0] if self.genres else None

def _text_values(value: Any) -> List[str]:
    """Flatten a tag value of any mutagen container into non-empty strings"""
    if hasattr(value, "genres"):
        # ID3 TCON resolves numeric genre references like "(13)"
        items = value.genres
    elif hasattr(value, "text"):
        items = value.text
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        items = [value]

    values = []
    for item in items:
        if item is None:
            continue
        text = str(item).strip()
        if text:
            values.append(text)
    return values

def _lookup(tags: Any, keys: Iterable[str]) -> List[str]:
    """Return the values of the first key present in tags"""
    if tags is None:
        return []
    for key in keys:
        try:
            value = tags[key]
        except (KeyError, ValueError, TypeError):
            # Key is absent or not valid for this container
            continue
        values = _text_values(value)
        if values:
            return values
    return []

def _first(tags: Any, keys: Iterable[str]) -> Optional[str]:
    values = _lookup(tags, keys)
    return values[0] if values else None

def _pictures(audio: Any) -> List[bytes]:
    """Collect embedded cover images in file order"""
    pictures = []

    # FLAC picture blocks
    for picture in getattr(audio, "pictures", None) or []:
        pictures.append(bytes(picture.data))

    tags = getattr(audio, "tags", None)
    if tags is None:
        return pictures

    # ID3 APIC frames
    if hasattr(tags, "getall"):
        pictures.extend(bytes(frame.data) for frame in tags.getall("APIC"))

    # MP4 cover atoms
    try:
        pictures.extend(bytes(cover) for cover in tags["covr"])
    except (KeyError, ValueError, TypeError):
        pass

    # Ogg Vorbis/Opus base64 encoded picture blocks
    try:
        blocks = tags["metadata_block_picture"]
    except (KeyError, ValueError, TypeError):
        blocks = []
    for block in blocks:
        try:
            pictures.append(bytes(Picture(base64.b64decode(block)).data))
        except (binascii.Error, MutagenError, ValueError) as e:
            logger.warning(f"Skipping unreadable picture block: {e}")

    return pictures

def extract_metadata(path: str) -> AudioMetadata:
    """
    Read embedded tags, cover images and format info from an audio file

    Raises:
        MetadataExtractionError: if the file is unreadable or not a known audio format
    """
    try:
        audio = mutagen.File(path)
    except (MutagenError, OSError, ValueError) as e:
        raise MetadataExtractionError(path, e) from e

    if audio is None:
        raise MetadataExtractionError(path, "unrecognized audio format")

    tags = audio.tags
    info = getattr(audio, "info", None)

    return AudioMetadata(
        title=_first(tags, TITLE_KEYS),
        artist=_first(tags, ARTIST_KEYS),
        album=_first(tags, ALBUM_KEYS),
        genres=_lookup(tags, GENRE_KEYS),
        pictures=_pictures(audio),
        bitrate=getattr(info, "bitrate", None) or None,
        duration=getattr(info, "length", None) or None,
    )
