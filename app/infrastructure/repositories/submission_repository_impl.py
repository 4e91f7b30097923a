"""Submission repository implementation using SQLAlchemy ORM"""

from datetime import datetime
from typing import Optional, List, Tuple
from sqlalchemy.orm import Session, selectinload

from ...domain.entities.submission import Submission
from ...domain.entities.track import Track
from ...domain.repositories.submission_repository import ISubmissionRepository
from ...domain.value_objects.entity_ids import SubmissionId, TrackId, UserId
from ...domain.enums import SubmissionStatus
from ..orm.submission_model import SubmissionModel, TrackModel


class SubmissionRepositoryImpl(ISubmissionRepository):
    """Repository implementation for Submission aggregate"""

    def __init__(self, session: Session):
        self.session = session

    async def get_by_id(self, submission_id: SubmissionId) -> Optional[Submission]:
        """Get submission by ID"""
        model = (
            self.session.query(SubmissionModel)
            .options(selectinload(SubmissionModel.tracks))
            .filter(SubmissionModel.id == str(submission_id))
            .first()
        )
        return self._map_to_entity(model) if model else None

    async def list(
        self,
        artist_id: Optional[UserId] = None,
        status: Optional[SubmissionStatus] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Submission], int]:
        """List submissions newest first"""
        query = self.session.query(SubmissionModel)
        if artist_id is not None:
            query = query.filter(SubmissionModel.artist_id == artist_id.value)
        if status is not None:
            query = query.filter(SubmissionModel.status == status)

        total = query.count()
        models = (
            query.options(selectinload(SubmissionModel.tracks))
            .order_by(SubmissionModel.created_at.desc(), SubmissionModel.id)
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [self._map_to_entity(model) for model in models], total

    async def add(self, submission: Submission) -> Submission:
        """Add a new submission"""
        model = SubmissionModel(id=str(submission.id), artist_id=submission.artist_id.value)
        self._update_model_from_entity(model, submission)
        model.created_at = submission.created_at
        self.session.add(model)
        self.session.flush()
        return submission

    async def update(self, submission: Submission) -> Submission:
        """Update an existing submission"""
        existing = self.session.query(SubmissionModel).filter(SubmissionModel.id == str(submission.id)).first()
        if existing:
            self._update_model_from_entity(existing, submission)
            self.session.flush()
        return submission

    async def append_track(self, submission_id: SubmissionId, track: Track) -> None:
        """Insert one track row and bump ``updated_at``; review fields are left alone"""
        model = TrackModel(
            track_id=track.id.value,
            submission_id=str(submission_id),
            title=track.title,
            genre=track.genre,
            bpm=track.bpm,
            key=track.key,
            description=track.description,
            filename=track.filename,
            stored_filename=track.stored_filename,
            storage_path=track.storage_path,
            file_size=track.file_size,
            mime_type=track.mime_type,
            duration=track.duration,
            uploaded_at=track.uploaded_at
        )
        self.session.add(model)
        self._touch(submission_id, {SubmissionModel.updated_at: datetime.utcnow()})
        self.session.flush()

    async def record_email(
        self,
        submission_id: SubmissionId,
        success: bool,
        message_id: Optional[str] = None,
        method: Optional[str] = None,
        error: Optional[str] = None,
        feedback: Optional[str] = None,
    ) -> bool:
        """Targeted UPDATE of the email columns, so a concurrent review decision survives"""
        now = datetime.utcnow()
        values = {
            SubmissionModel.email_sent: success,
            SubmissionModel.email_message_id: message_id,
            SubmissionModel.email_method: method,
            SubmissionModel.email_error: None if success else error,
            SubmissionModel.updated_at: now,
        }
        if success:
            values[SubmissionModel.email_sent_at] = now
        if feedback is not None:
            values[SubmissionModel.feedback] = feedback
        updated = self._touch(submission_id, values)
        self.session.flush()
        return updated > 0

    def _touch(self, submission_id: SubmissionId, values: dict) -> int:
        return (
            self.session.query(SubmissionModel)
            .filter(SubmissionModel.id == str(submission_id))
            .update(values, synchronize_session=False)
        )

    async def delete(self, submission_id: SubmissionId) -> None:
        """Delete submission and its track rows"""
        model = self.session.query(SubmissionModel).filter(SubmissionModel.id == str(submission_id)).first()
        if model:
            self.session.delete(model)
            self.session.flush()

    def _update_model_from_entity(self, model: SubmissionModel, submission: Submission) -> None:
        """Update ORM model from domain entity; owner and id are immutable.

        The email history columns are written by ``record_email`` only.
        """
        model.artist_name = submission.artist_name
        model.artist_email = submission.artist_email
        model.title = submission.title
        model.description = submission.description
        model.status = submission.status
        model.review_score = submission.review_score
        model.review_notes = submission.review_notes
        model.admin_notes = submission.admin_notes
        model.reviewed_by = submission.reviewed_by.value if submission.reviewed_by else None
        model.reviewed_at = submission.reviewed_at
        model.updated_at = submission.updated_at

    def _map_track(self, model: TrackModel) -> Track:
        return Track(
            id=TrackId(model.track_id),
            title=model.title,
            genre=model.genre,
            filename=model.filename,
            stored_filename=model.stored_filename,
            storage_path=model.storage_path,
            file_size=model.file_size,
            mime_type=model.mime_type or "",
            bpm=model.bpm,
            key=model.key or "",
            description=model.description or "",
            uploaded_at=model.uploaded_at,
            duration=model.duration
        )

    def _map_to_entity(self, model: SubmissionModel) -> Submission:
        """Map ORM model to domain entity"""
        return Submission(
            id=SubmissionId.from_str(model.id),
            artist_id=UserId(model.artist_id),
            title=model.title,
            description=model.description or "",
            artist_name=model.artist_name or "",
            artist_email=model.artist_email or "",
            status=SubmissionStatus(model.status),
            tracks=[self._map_track(track) for track in model.tracks],
            review_score=model.review_score,
            review_notes=model.review_notes or "",
            admin_notes=model.admin_notes or "",
            reviewed_by=UserId(model.reviewed_by) if model.reviewed_by else None,
            reviewed_at=model.reviewed_at,
            feedback=model.feedback or "",
            email_sent=bool(model.email_sent),
            email_sent_at=model.email_sent_at,
            email_message_id=model.email_message_id,
            email_method=model.email_method,
            email_error=model.email_error,
            created_at=model.created_at,
            updated_at=model.updated_at
        )
