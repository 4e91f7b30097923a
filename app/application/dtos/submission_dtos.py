"""Submission DTOs for API requests and responses"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ...domain.entities.submission import Submission
from ...domain.entities.track import Track


class CamelModel(BaseModel):
    """Wire format is camelCase, Python attributes stay snake_case"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateSubmissionRequest(CamelModel):
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)


class StatusUpdateRequest(CamelModel):
    status: Optional[str] = None
    review_score: Optional[int] = None
    review_notes: Optional[str] = None
    admin_notes: Optional[str] = None


class TrackResponse(CamelModel):
    id: str
    title: str
    genre: str
    bpm: Optional[int] = None
    key: str = ""
    description: str = ""
    filename: str
    storage_filename: str
    storage_path: str
    download_url: Optional[str] = None
    file_size: int
    mime_type: str
    uploaded_at: Optional[datetime] = None
    duration: Optional[float] = None

    @classmethod
    def from_entity(cls, track: Track) -> 'TrackResponse':
        return cls(
            id=track.id.value,
            title=track.title,
            genre=track.genre,
            bpm=track.bpm,
            key=track.key,
            description=track.description,
            filename=track.filename,
            storage_filename=track.stored_filename,
            storage_path=track.storage_path,
            download_url=track.download_url,
            file_size=track.file_size,
            mime_type=track.mime_type,
            uploaded_at=track.uploaded_at,
            duration=track.duration
        )


class SubmissionResponse(CamelModel):
    id: str
    artist_id: str
    artist_name: str = ""
    artist_email: str = ""
    title: str
    description: str = ""
    status: str
    tracks: List[TrackResponse] = []
    total_tracks: int = 0
    uploaded_tracks: int = 0
    review_score: Optional[int] = None
    review_notes: str = ""
    admin_notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    feedback: str = ""
    email_sent: bool = False
    email_sent_at: Optional[datetime] = None
    email_method: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, submission: Submission, include_internal: bool = False) -> 'SubmissionResponse':
        """``include_internal`` exposes admin-only notes"""
        return cls(
            id=str(submission.id),
            artist_id=submission.artist_id.value,
            artist_name=submission.artist_name,
            artist_email=submission.artist_email,
            title=submission.title,
            description=submission.description,
            status=submission.status.value,
            tracks=[TrackResponse.from_entity(track) for track in submission.tracks],
            total_tracks=submission.total_tracks,
            uploaded_tracks=submission.uploaded_tracks,
            review_score=submission.review_score,
            review_notes=submission.review_notes,
            admin_notes=submission.admin_notes if include_internal else None,
            reviewed_by=submission.reviewed_by.value if submission.reviewed_by else None,
            reviewed_at=submission.reviewed_at,
            feedback=submission.feedback,
            email_sent=submission.email_sent,
            email_sent_at=submission.email_sent_at,
            email_method=submission.email_method,
            created_at=submission.created_at,
            updated_at=submission.updated_at
        )


class CreateSubmissionResponse(CamelModel):
    message: str = "Submission created successfully"
    submission_id: str
    submission: SubmissionResponse


class SubmissionSummary(CamelModel):
    id: str
    total_tracks: int


class UploadTrackResponse(CamelModel):
    message: str = "Track uploaded successfully"
    track: TrackResponse
    submission: SubmissionSummary


class SubmissionListResponse(CamelModel):
    submissions: List[SubmissionResponse]
    total: int
    has_more: bool


class StatusUpdateResponse(CamelModel):
    message: str = "Submission updated successfully"
    submission: SubmissionResponse


class MessageResponse(CamelModel):
    message: str
