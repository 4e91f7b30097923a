"""Upload track use case"""

import asyncio
import logging
import tempfile
from datetime import datetime
from typing import Iterable, Optional, Tuple

from ...domain.entities.submission import Submission
from ...domain.entities.track import Track
from ...domain.entities.user import User
from ...domain.exceptions import InvalidInput, NotFound
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import SubmissionId, TrackId
from ...domain.value_objects.track_file import (
    ALLOWED_TRACK_EXTENSIONS, MAX_TRACK_SIZE, StoragePath, TrackMetadata, check_extension, check_size
)
from ...infrastructure.external_services.storage_service import StorageService

logger = logging.getLogger(__name__)

# Bytes held in memory before spooling to disk
SPOOL_MEMORY_LIMIT = 5 * 1024 * 1024


class UploadTrackUseCase:

    def __init__(
        self,
        unit_of_work: IUnitOfWork,
        storage_service: StorageService,
        max_size: int = MAX_TRACK_SIZE,
        allowed_extensions: Iterable[str] = ALLOWED_TRACK_EXTENSIONS,
        chunk_size: int = 1024 * 1024,
        idle_timeout: Optional[float] = 30.0,
    ):
        self.unit_of_work = unit_of_work
        self.storage_service = storage_service
        self.max_size = max_size
        self.allowed_extensions = tuple(allowed_extensions)
        self.chunk_size = chunk_size
        self.idle_timeout = idle_timeout

    async def execute(
        self,
        submission_id: str,
        owner: User,
        upload,
        title: Optional[str],
        genre: Optional[str],
        bpm: Optional[str] = None,
        key: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Tuple[Track, Submission]:
        """Validate, store and attach one track

        ``upload`` is anything with ``filename``, ``content_type``, ``size`` and
        an async ``read(n)`` (a FastAPI ``UploadFile``). Every check runs before
        the blob is written, and the track row is only written after the blob.
        """
        if upload is None or not getattr(upload, "filename", None):
            raise InvalidInput("No file uploaded", constraint="file")

        sid = SubmissionId.from_str(submission_id)
        async with self.unit_of_work:
            submission = await self.unit_of_work.submissions.get_by_id(sid)
        if submission is None:
            raise NotFound("Submission not found")
        submission.ensure_owner(owner.id)

        check_extension(upload.filename, self.allowed_extensions)
        check_size(getattr(upload, "size", None), self.max_size)
        metadata = TrackMetadata.from_form(title, genre, bpm, key, description)

        path = StoragePath.for_upload(owner.id.value, str(sid), upload.filename)
        content_type = upload.content_type or "application/octet-stream"

        with tempfile.SpooledTemporaryFile(max_size=SPOOL_MEMORY_LIMIT) as spool:
            size = await self._read_bounded(upload, spool)
            signed_url = await self.storage_service.upload_file(
                spool, path.object_name, content_type, length=size
            )

        track = Track(
            id=TrackId.generate(),
            title=metadata.title,
            genre=metadata.genre,
            bpm=metadata.bpm,
            key=metadata.key,
            description=metadata.description,
            filename=upload.filename,
            stored_filename=path.stored_filename,
            storage_path=path.object_name,
            file_size=size,
            mime_type=content_type,
            uploaded_at=datetime.utcnow(),
            download_url=signed_url
        )

        try:
            async with self.unit_of_work:
                # Only the track row and updated_at are written; the snapshot
                # loaded before streaming may be stale by now
                await self.unit_of_work.submissions.append_track(sid, track)
                await self.unit_of_work.commit()
                refreshed = await self.unit_of_work.submissions.get_by_id(sid)
        except Exception:
            # At-least-once blob write: nothing cleans this up automatically
            logger.error("Track metadata write failed; blob %s is orphaned", path.object_name)
            raise

        submission.add_track(track)
        submission.get_events()
        logger.info("Track %s uploaded to submission %s (%d bytes)", track.id, sid, size)
        return track, refreshed or submission

    async def _read_bounded(self, upload, sink) -> int:
        """Copy the upload into ``sink`` enforcing the size ceiling and idle timeout"""
        total = 0
        while True:
            try:
                chunk = await asyncio.wait_for(upload.read(self.chunk_size), timeout=self.idle_timeout)
            except asyncio.TimeoutError:
                raise InvalidInput("Upload stalled; please retry", constraint="timeout")
            if not chunk:
                break
            total += len(chunk)
            # Declared sizes can lie, so the ceiling is enforced on bytes actually read
            check_size(total, self.max_size)
            sink.write(chunk)
        if total == 0:
            raise InvalidInput("Uploaded file is empty", constraint="size")
        sink.seek(0)
        return total
