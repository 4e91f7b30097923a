"""Create submission use case"""

from ...domain.entities.submission import Submission
from ...domain.entities.user import User
from ...domain.repositories.unit_of_work import IUnitOfWork


class CreateSubmissionUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, artist: User, title: str, description: str = "") -> Submission:
        """Open a new, empty, pending submission for ``artist``"""
        submission = Submission.create(artist, title, description)
        async with self.unit_of_work:
            await self.unit_of_work.submissions.add(submission)
            await self.unit_of_work.commit()
        submission.get_events()
        return submission
