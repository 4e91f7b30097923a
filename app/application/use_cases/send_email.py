"""Email use cases: decision (re)sends, submission receipts and history"""

import logging
from typing import Optional

from ...domain.entities.submission import Submission
from ...domain.entities.user import User
from ...domain.enums import EmailKind, SubmissionStatus
from ...domain.exceptions import Conflict, InvalidInput, NotFound
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import SubmissionId
from ...infrastructure.external_services.email_service import EmailResult, EmailService

logger = logging.getLogger(__name__)

DECISION_EMAILS = {
    SubmissionStatus.APPROVED: EmailKind.APPROVAL,
    SubmissionStatus.REJECTED: EmailKind.REJECTION,
}


async def _load(unit_of_work: IUnitOfWork, submission_id: Optional[str]) -> Submission:
    if not submission_id:
        raise InvalidInput("Submission ID is required")
    async with unit_of_work:
        submission = await unit_of_work.submissions.get_by_id(SubmissionId.from_str(submission_id))
    if submission is None:
        raise NotFound("Submission not found")
    return submission


class SendDecisionEmailUseCase:
    """Manual (re)send of an approval or rejection email

    Status only changes through the review workflow, so the submission must
    already carry the decision being announced.
    """

    def __init__(self, unit_of_work: IUnitOfWork, email_service: EmailService):
        self.unit_of_work = unit_of_work
        self.email_service = email_service

    async def execute(
        self,
        decision: SubmissionStatus,
        submission_id: Optional[str],
        feedback: Optional[str] = None,
        admin_notes: Optional[str] = None,
    ) -> EmailResult:
        kind = DECISION_EMAILS[decision]
        submission = await _load(self.unit_of_work, submission_id)
        if submission.status != decision:
            raise Conflict(
                f"Submission is '{submission.status.value}'; set it to '{decision.value}' before sending this email"
            )

        feedback = feedback if feedback is not None else submission.review_notes
        admin_notes = admin_notes if admin_notes is not None else submission.admin_notes
        result = await self.email_service.send(kind, submission.artist_email, {
            "artist_name": submission.artist_name,
            "submission_id": str(submission.id),
            "feedback": feedback,
            "admin_notes": admin_notes,
        })

        # The send can take a while; only the email columns are written so a
        # decision changed in the meantime is kept
        async with self.unit_of_work:
            recorded = await self.unit_of_work.submissions.record_email(
                submission.id,
                result.success,
                message_id=result.message_id,
                method=result.method,
                error=result.error,
                feedback=feedback if result.success else None,
            )
            await self.unit_of_work.commit()
        if not recorded:
            logger.info("Submission %s deleted before its email was recorded", submission.id)
        return result


class SendConfirmationEmailUseCase:
    """Receipt for the owning artist listing the submitted tracks"""

    def __init__(self, unit_of_work: IUnitOfWork, email_service: EmailService):
        self.unit_of_work = unit_of_work
        self.email_service = email_service

    async def execute(self, submission_id: Optional[str], artist: User) -> EmailResult:
        submission = await _load(self.unit_of_work, submission_id)
        submission.ensure_owner(artist.id)
        tracks = [
            {"title": t.title, "genre": t.genre, "bpm": t.bpm, "key": t.key}
            for t in submission.tracks
        ]
        return await self.email_service.send(EmailKind.CONFIRMATION, str(artist.email), {
            "artist_name": submission.artist_name or artist.name,
            "submission_id": str(submission.id),
            "tracks": tracks,
        })


class GetEmailHistoryUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, submission_id: str) -> Submission:
        return await _load(self.unit_of_work, submission_id)
