"""Submission and Track ORM Models"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, Text, BigInteger, Float, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ...db.models import Base
from ...domain.enums import SubmissionStatus
from .user_model import _enum_values


class SubmissionModel(Base):
    __tablename__ = 'submissions'

    id = Column(String(36), primary_key=True, index=True)
    artist_id = Column(String(128), ForeignKey('users.id'), nullable=False, index=True)

    # Denormalised artist details used for listings and notifications
    artist_name = Column(String, nullable=True)
    artist_email = Column(String, nullable=True)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(
        SQLEnum(SubmissionStatus, values_callable=_enum_values),
        default=SubmissionStatus.PENDING,
        nullable=False,
        index=True
    )

    # Review
    review_score = Column(Integer, nullable=True)
    review_notes = Column(Text, nullable=True)
    admin_notes = Column(Text, nullable=True)
    reviewed_by = Column(String(128), nullable=True)
    reviewed_at = Column(DateTime, nullable=True)

    # Notification history
    feedback = Column(Text, nullable=True)
    email_sent = Column(Boolean, default=False, nullable=False)
    email_sent_at = Column(DateTime, nullable=True)
    email_message_id = Column(String, nullable=True)
    email_method = Column(String, nullable=True)
    email_error = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now(), index=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    artist = relationship('UserModel', back_populates='submissions')
    tracks = relationship(
        'TrackModel',
        back_populates='submission',
        cascade='all, delete-orphan',
        order_by='TrackModel.pk'
    )


class TrackModel(Base):
    __tablename__ = 'tracks'

    pk = Column(Integer, primary_key=True, autoincrement=True)
    track_id = Column(String, nullable=False, index=True)
    submission_id = Column(String(36), ForeignKey('submissions.id', ondelete='CASCADE'), nullable=False, index=True)

    title = Column(String, nullable=False)
    genre = Column(String, nullable=False)
    bpm = Column(Integer, nullable=True)
    key = Column(String, nullable=True)
    description = Column(Text, nullable=True)

    filename = Column(String, nullable=False)
    stored_filename = Column(String, nullable=False)
    storage_path = Column(String, nullable=False)
    file_size = Column(BigInteger, nullable=False)
    mime_type = Column(String, nullable=True)
    duration = Column(Float, nullable=True)
    uploaded_at = Column(DateTime, server_default=func.now())

    # Relationships
    submission = relationship('SubmissionModel', back_populates='tracks')
