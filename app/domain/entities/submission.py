"""Submission aggregate and the review state machine"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, FrozenSet, List, Optional

from ..enums import SubmissionStatus
from ..events.submission_events import (
    SubmissionCreated, TrackUploaded, SubmissionReviewed, SubmissionDeleted
)
from ..exceptions import Conflict, Forbidden, InvalidInput
from ..value_objects.entity_ids import SubmissionId, UserId
from ..value_objects.review import ReviewScore
from .track import Track
from .user import User

_ALL_STATUSES: FrozenSet[SubmissionStatus] = frozenset(SubmissionStatus)

# Every status may move to every other one. Reviewers do reopen decisions.
OPEN_TRANSITIONS: Dict[SubmissionStatus, FrozenSet[SubmissionStatus]] = {
    status: _ALL_STATUSES for status in SubmissionStatus
}

# Decisions are final, re-scoring a decision in place is still allowed.
LOCKED_TRANSITIONS: Dict[SubmissionStatus, FrozenSet[SubmissionStatus]] = {
    SubmissionStatus.PENDING: _ALL_STATUSES,
    SubmissionStatus.IN_REVIEW: _ALL_STATUSES,
    SubmissionStatus.APPROVED: frozenset({SubmissionStatus.APPROVED}),
    SubmissionStatus.REJECTED: frozenset({SubmissionStatus.REJECTED}),
}


def parse_status(raw) -> SubmissionStatus:
    try:
        return SubmissionStatus(raw)
    except ValueError:
        raise InvalidInput("Invalid status")


@dataclass
class Submission:
    id: SubmissionId
    artist_id: UserId
    title: str
    description: str = ""
    artist_name: str = ""
    artist_email: str = ""
    status: SubmissionStatus = SubmissionStatus.PENDING
    tracks: List[Track] = field(default_factory=list)

    # Review
    review_score: Optional[int] = None
    review_notes: str = ""
    admin_notes: str = ""
    reviewed_by: Optional[UserId] = None
    reviewed_at: Optional[datetime] = None

    # Notification history
    feedback: str = ""
    email_sent: bool = False
    email_sent_at: Optional[datetime] = None
    email_message_id: Optional[str] = None
    email_method: Optional[str] = None
    email_error: Optional[str] = None

    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    # Domain events
    _events: List = field(default_factory=list, init=False)

    @classmethod
    def create(cls, artist: User, title: str, description: str = "") -> 'Submission':
        """Factory method: every submission starts out pending with no tracks"""
        if not (title or "").strip():
            raise InvalidInput("Submission title is required")
        if not artist.is_artist:
            raise Forbidden("Artist access required")
        now = datetime.utcnow()
        submission = cls(
            id=SubmissionId.generate(),
            artist_id=artist.id,
            title=title.strip(),
            description=description or "",
            artist_name=artist.artist_name or artist.display_name,
            artist_email=str(artist.email),
            created_at=now,
            updated_at=now,
        )
        submission._events.append(SubmissionCreated(
            submission_id=submission.id,
            artist_id=submission.artist_id
        ))
        return submission

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.artist_id == user_id

    def is_visible_to(self, user: User) -> bool:
        """The owning artist and any admin may read a submission"""
        return self.is_owned_by(user.id) or user.is_admin

    def ensure_owner(self, user_id: UserId) -> None:
        if not self.is_owned_by(user_id):
            raise Forbidden("Access denied")

    def add_track(self, track: Track) -> None:
        """Business logic: attach an uploaded track"""
        self.tracks.append(track)
        self.updated_at = datetime.utcnow()
        self._events.append(TrackUploaded(
            submission_id=self.id,
            artist_id=self.artist_id,
            track_id=track.id,
            storage_path=track.storage_path
        ))

    def set_status(
        self,
        new_status: SubmissionStatus,
        acting_admin: User,
        review_score: Optional[ReviewScore] = None,
        review_notes: Optional[str] = None,
        admin_notes: Optional[str] = None,
        lock_decisions: bool = False,
    ) -> None:
        """Business logic: move the submission through the review workflow

        All fields are validated before any of them is touched so a rejected
        transition leaves the aggregate unchanged.
        """
        if not acting_admin.is_admin:
            raise Forbidden("Admin access required")
        if not isinstance(new_status, SubmissionStatus):
            new_status = parse_status(new_status)
        if new_status.is_decision and review_score is None:
            raise InvalidInput("Rating is required for approval or rejection")

        table = LOCKED_TRANSITIONS if lock_decisions else OPEN_TRANSITIONS
        if new_status not in table[self.status]:
            raise Conflict(
                f"Cannot move a submission from '{self.status.value}' to '{new_status.value}'"
            )

        now = datetime.utcnow()
        self.status = new_status
        if review_score is not None:
            self.review_score = review_score.value
        if review_notes is not None:
            self.review_notes = review_notes
        if admin_notes is not None:
            self.admin_notes = admin_notes
        self.reviewed_by = acting_admin.id
        self.updated_at = now

        if new_status.is_decision:
            self.reviewed_at = now
            self._events.append(SubmissionReviewed(
                submission_id=self.id,
                artist_id=self.artist_id,
                artist_email=self.artist_email,
                artist_name=self.artist_name,
                title=self.title,
                status=new_status,
                review_score=self.review_score,
                feedback=self.review_notes,
                admin_notes=self.admin_notes,
                reviewed_by=acting_admin.id,
                reviewed_at=now
            ))

    def ensure_deletable_by(self, user_id: UserId) -> None:
        """Only the owner may delete, and only while nothing has been reviewed"""
        self.ensure_owner(user_id)
        if self.status != SubmissionStatus.PENDING:
            raise InvalidInput("Cannot delete submission that is not pending")

    def mark_deleted(self, user_id: UserId) -> None:
        self.ensure_deletable_by(user_id)
        self._events.append(SubmissionDeleted(
            submission_id=self.id,
            artist_id=self.artist_id,
            storage_paths=tuple(track.storage_path for track in self.tracks)
        ))

    @property
    def total_tracks(self) -> int:
        return len(self.tracks)

    @property
    def uploaded_tracks(self) -> int:
        return len(self.tracks)

    def get_events(self) -> List:
        """Get and clear domain events"""
        events = self._events.copy()
        self._events.clear()
        return events
