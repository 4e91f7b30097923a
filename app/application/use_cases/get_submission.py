"""Read-side submission use cases"""

from typing import Iterable, List, Optional, Tuple

from ...application.access_control import AccessControlGuard
from ...domain.entities.submission import Submission, parse_status
from ...domain.entities.user import User
from ...domain.exceptions import InvalidInput, NotFound
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import SubmissionId
from ...infrastructure.external_services.storage_service import StorageService

MAX_PAGE_SIZE = 100


def _page_bounds(limit, offset) -> Tuple[int, int]:
    if limit < 1 or offset < 0:
        raise InvalidInput("limit must be positive and offset non-negative")
    return min(limit, MAX_PAGE_SIZE), offset


class GetSubmissionUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, submission_id: str, viewer: User) -> Submission:
        async with self.unit_of_work:
            submission = await self.unit_of_work.submissions.get_by_id(SubmissionId.from_str(submission_id))
        if submission is None:
            raise NotFound("Submission not found")
        AccessControlGuard.check_submission_read(viewer, submission)
        return submission


class ListSubmissionsUseCase:
    """Artist listings are scoped to the caller, admin listings are global"""

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(
        self,
        viewer: User,
        status: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
        scope_to_owner: bool = True,
    ) -> Tuple[List[Submission], int, bool]:
        limit, offset = _page_bounds(limit, offset)
        status_filter = parse_status(status) if status else None
        artist_id = viewer.id if scope_to_owner else None
        async with self.unit_of_work:
            submissions, total = await self.unit_of_work.submissions.list(
                artist_id=artist_id, status=status_filter, limit=limit, offset=offset
            )
        has_more = offset + len(submissions) < total
        return submissions, total, has_more


async def sign_track_urls(submissions: Iterable[Submission], storage_service: StorageService) -> None:
    """Fill each track's download URL with a freshly signed link"""
    for submission in submissions:
        for track in submission.tracks:
            track.download_url = await storage_service.get_file_url(track.storage_path)
