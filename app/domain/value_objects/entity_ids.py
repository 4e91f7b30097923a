"""Entity ID value objects"""

import time
from dataclasses import dataclass
from uuid import UUID, uuid4

from ..exceptions import NotFound


@dataclass(frozen=True)
class UserId:
    """Opaque subject claim issued by the identity provider."""
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("User ID must be a non-empty string")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SubmissionId:
    value: UUID

    def __post_init__(self):
        if not isinstance(self.value, UUID):
            raise ValueError("Submission ID must be a valid UUID")

    @classmethod
    def generate(cls) -> 'SubmissionId':
        """Generate a new random UUID"""
        return cls(uuid4())

    @classmethod
    def from_str(cls, uuid_str: str) -> 'SubmissionId':
        """Create SubmissionId from string representation

        A malformed id can never match a stored record, so it is reported as
        a missing submission rather than a validation failure.
        """
        try:
            return cls(UUID(uuid_str))
        except (ValueError, TypeError, AttributeError):
            raise NotFound("Submission not found")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TrackId:
    value: str

    @classmethod
    def generate(cls) -> 'TrackId':
        """Timestamp based id, e.g. ``track_1718030000123``"""
        return cls(f"track_{int(time.time() * 1000)}")

    def __str__(self) -> str:
        return self.value
