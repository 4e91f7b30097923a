"""User ORM Model"""

from sqlalchemy import Column, String, DateTime, Boolean, Text, JSON, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ...db.models import Base
from ...domain.enums import UserStatus, UserRole


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class UserModel(Base):
    __tablename__ = 'users'

    # Subject claim from the identity provider
    id = Column(String(128), primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    display_name = Column(String, nullable=False)
    phone_number = Column(String, nullable=True)
    role = Column(SQLEnum(UserRole, values_callable=_enum_values), nullable=False, index=True)
    status = Column(SQLEnum(UserStatus, values_callable=_enum_values), default=UserStatus.ACTIVE, nullable=False, index=True)

    # Artist profile
    artist_name = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    social_media = Column(JSON, nullable=True)

    # Admin profile
    permissions = Column(JSON, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
    last_login = Column(DateTime, nullable=True)
    last_logout = Column(DateTime, nullable=True)

    # Relationships
    submissions = relationship('SubmissionModel', back_populates='artist')
