"""
Domain Enums - Business domain enumerations
"""

from enum import Enum


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class UserRole(str, Enum):
    ARTIST = "artist"
    ADMIN = "admin"


class SubmissionStatus(str, Enum):
    PENDING = "pending"
    IN_REVIEW = "in-review"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_decision(self) -> bool:
        return self in (SubmissionStatus.APPROVED, SubmissionStatus.REJECTED)


class EmailKind(str, Enum):
    CONFIRMATION = "confirmation"
    APPROVAL = "approval"
    REJECTION = "rejection"
    TEST = "test"


class DeliveryMethod(str, Enum):
    SENDGRID = "sendgrid"
    SMTP = "smtp"


class AuthMode(str, Enum):
    PROVIDER = "provider"
    DEV = "dev"
