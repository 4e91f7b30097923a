"""Delete submission use case"""

import logging

from ...domain.entities.user import User
from ...domain.exceptions import NotFound
from ...domain.events.submission_events import SubmissionDeleted
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import SubmissionId
from ...infrastructure.external_services.storage_service import StorageService

logger = logging.getLogger(__name__)


class DeleteSubmissionUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, storage_service: StorageService):
        self.unit_of_work = unit_of_work
        self.storage_service = storage_service

    async def execute(self, submission_id: str, artist: User) -> None:
        """Remove a pending submission: blobs first (best effort), then the record"""
        sid = SubmissionId.from_str(submission_id)
        async with self.unit_of_work:
            submission = await self.unit_of_work.submissions.get_by_id(sid)
            if submission is None:
                raise NotFound("Submission not found")
            submission.mark_deleted(artist.id)

            for event in submission.get_events():
                if not isinstance(event, SubmissionDeleted):
                    continue
                for path in event.storage_paths:
                    if not await self.storage_service.delete_file(path):
                        logger.warning("Left orphaned blob %s of deleted submission %s", path, sid)

            await self.unit_of_work.submissions.delete(sid)
            await self.unit_of_work.commit()
        logger.info("Submission %s deleted by %s", sid, artist.id)
