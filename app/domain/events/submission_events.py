"""Submission domain events"""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Optional

from ..enums import SubmissionStatus
from ..value_objects.entity_ids import SubmissionId, TrackId, UserId


@dataclass(frozen=True)
class SubmissionCreated:
    submission_id: SubmissionId
    artist_id: UserId


@dataclass(frozen=True)
class TrackUploaded:
    submission_id: SubmissionId
    artist_id: UserId
    track_id: TrackId
    storage_path: str


@dataclass(frozen=True)
class SubmissionReviewed:
    """Emitted when a submission is moved into approved or rejected"""
    submission_id: SubmissionId
    artist_id: UserId
    artist_email: str
    artist_name: str
    title: str
    status: SubmissionStatus
    review_score: Optional[int]
    feedback: str
    admin_notes: str
    reviewed_by: UserId
    reviewed_at: datetime

    def to_payload(self) -> dict:
        """JSON-safe form used when the event crosses a queue boundary"""
        payload = asdict(self)
        payload["submission_id"] = str(self.submission_id)
        payload["artist_id"] = str(self.artist_id)
        payload["reviewed_by"] = str(self.reviewed_by)
        payload["status"] = self.status.value
        payload["reviewed_at"] = self.reviewed_at.isoformat()
        return payload

    @classmethod
    def from_payload(cls, payload: dict) -> 'SubmissionReviewed':
        return cls(
            submission_id=SubmissionId.from_str(payload["submission_id"]),
            artist_id=UserId(payload["artist_id"]),
            artist_email=payload["artist_email"],
            artist_name=payload["artist_name"],
            title=payload["title"],
            status=SubmissionStatus(payload["status"]),
            review_score=payload.get("review_score"),
            feedback=payload.get("feedback") or "",
            admin_notes=payload.get("admin_notes") or "",
            reviewed_by=UserId(payload["reviewed_by"]),
            reviewed_at=datetime.fromisoformat(payload["reviewed_at"]),
        )


@dataclass(frozen=True)
class SubmissionDeleted:
    submission_id: SubmissionId
    artist_id: UserId
    storage_paths: tuple
