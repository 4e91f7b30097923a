"""Submission store repository interface"""

from abc import ABC, abstractmethod
from typing import Optional, List, Tuple

from ..entities.submission import Submission
from ..entities.track import Track
from ..enums import SubmissionStatus
from ..value_objects.entity_ids import SubmissionId, UserId


class ISubmissionRepository(ABC):

    @abstractmethod
    async def get_by_id(self, submission_id: SubmissionId) -> Optional[Submission]:
        pass

    @abstractmethod
    async def list(
        self,
        artist_id: Optional[UserId] = None,
        status: Optional[SubmissionStatus] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Submission], int]:
        """Newest first; returns the page and the total number of matches"""
        pass

    @abstractmethod
    async def add(self, submission: Submission) -> Submission:
        pass

    @abstractmethod
    async def update(self, submission: Submission) -> Submission:
        """Persist the review and profile fields in one write; tracks and email history are not touched"""
        pass

    @abstractmethod
    async def append_track(self, submission_id: SubmissionId, track: Track) -> None:
        """Atomic append, never rewrites the existing track list or the review fields"""
        pass

    @abstractmethod
    async def record_email(
        self,
        submission_id: SubmissionId,
        success: bool,
        message_id: Optional[str] = None,
        method: Optional[str] = None,
        error: Optional[str] = None,
        feedback: Optional[str] = None,
    ) -> bool:
        """Store a notification outcome, writing only the email columns.

        Returns False when the submission no longer exists.
        """
        pass

    @abstractmethod
    async def delete(self, submission_id: SubmissionId) -> None:
        pass
