"""Track upload value objects"""

import os
import re
import time
from dataclasses import dataclass
from typing import Iterable, Optional

from ..exceptions import InvalidInput, PayloadTooLarge

ALLOWED_TRACK_EXTENSIONS = (".mp3", ".wav", ".flac", ".m4a")
MAX_TRACK_SIZE = 50 * 1024 * 1024  # 50MB

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def sanitize_filename(filename: str) -> str:
    return _UNSAFE_CHARS.sub("_", filename)


def check_extension(filename: Optional[str], allowed: Iterable[str] = ALLOWED_TRACK_EXTENSIONS) -> str:
    """Return the lower-cased extension or raise if it is not allowed"""
    allowed = tuple(ext.lower() for ext in allowed)
    ext = os.path.splitext(filename or "")[1].lower()
    if ext not in allowed:
        raise InvalidInput(
            f"Invalid file type. Allowed types: {', '.join(allowed)}",
            constraint="type",
        )
    return ext


def check_size(size: Optional[int], max_size: int = MAX_TRACK_SIZE) -> None:
    if size is not None and size > max_size:
        raise PayloadTooLarge(
            f"File too large. Maximum size is {max_size // (1024 * 1024)}MB",
            constraint="size",
        )


@dataclass(frozen=True)
class TrackMetadata:
    """Artist supplied description of a track"""
    title: str
    genre: str
    bpm: Optional[int] = None
    key: str = ""
    description: str = ""

    def __post_init__(self):
        if not (self.title or "").strip() or not (self.genre or "").strip():
            raise InvalidInput("Track title and genre are required", constraint="fields")
        if self.bpm is not None and self.bpm <= 0:
            raise InvalidInput("BPM must be a positive integer", constraint="fields")

    @classmethod
    def from_form(
        cls,
        title: Optional[str],
        genre: Optional[str],
        bpm: Optional[str] = None,
        key: Optional[str] = None,
        description: Optional[str] = None,
    ) -> 'TrackMetadata':
        parsed_bpm = None
        if bpm not in (None, ""):
            try:
                parsed_bpm = int(bpm)
            except (TypeError, ValueError):
                raise InvalidInput("BPM must be an integer", constraint="fields")
        return cls(
            title=(title or "").strip(),
            genre=(genre or "").strip(),
            bpm=parsed_bpm,
            key=key or "",
            description=description or "",
        )


@dataclass(frozen=True)
class StoragePath:
    """Blob key ``{ownerId}/{submissionId}/{timestamp}_{sanitizedFilename}``"""
    owner_id: str
    submission_id: str
    stored_filename: str

    @classmethod
    def for_upload(cls, owner_id: str, submission_id: str, original_filename: str) -> 'StoragePath':
        timestamp = int(time.time() * 1000)
        return cls(owner_id, submission_id, f"{timestamp}_{sanitize_filename(original_filename)}")

    @property
    def object_name(self) -> str:
        return f"{self.owner_id}/{self.submission_id}/{self.stored_filename}"

    def __str__(self) -> str:
        return self.object_name
