"""Review decision use case"""

import logging
from typing import List, Optional, Tuple

from ...domain.entities.submission import Submission, parse_status
from ...domain.entities.user import User
from ...domain.exceptions import InvalidInput, NotFound
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import SubmissionId
from ...domain.value_objects.review import ReviewScore

logger = logging.getLogger(__name__)


class UpdateSubmissionStatusUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, lock_decisions: bool = False):
        self.unit_of_work = unit_of_work
        self.lock_decisions = lock_decisions

    async def execute(
        self,
        submission_id: str,
        acting_admin: User,
        status: Optional[str],
        review_score=None,
        review_notes: Optional[str] = None,
        admin_notes: Optional[str] = None,
    ) -> Tuple[Submission, List]:
        """Apply one transition in a single write.

        Returns the updated submission and the events raised by the
        transition; callers publish the events only after this returns,
        i.e. after the commit.
        """
        if not status:
            raise InvalidInput("Invalid status")
        new_status = parse_status(status)
        score = ReviewScore.parse(review_score)

        async with self.unit_of_work:
            submission = await self.unit_of_work.submissions.get_by_id(SubmissionId.from_str(submission_id))
            if submission is None:
                raise NotFound("Submission not found")

            previous = submission.status
            submission.set_status(
                new_status,
                acting_admin,
                review_score=score,
                review_notes=review_notes,
                admin_notes=admin_notes,
                lock_decisions=self.lock_decisions,
            )
            await self.unit_of_work.submissions.update(submission)
            await self.unit_of_work.commit()

        logger.info(
            "Submission %s moved %s -> %s by %s",
            submission.id, previous.value, new_status.value, acting_admin.id
        )
        return submission, submission.get_events()
