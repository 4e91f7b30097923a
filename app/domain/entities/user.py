"""User entity with business logic"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Dict

from ..value_objects.email import Email
from ..value_objects.entity_ids import UserId
from ..enums import UserStatus, UserRole
from ..events.user_events import UserRegistered, UserStatusChanged
from ..exceptions import InvalidInput

DEFAULT_ADMIN_PERMISSIONS = ["review_submissions", "manage_templates"]

_PHONE_RE = re.compile(r"^\+?[1-9]\d{1,14}$")


def validate_phone_number(phone_number: Optional[str]) -> Optional[str]:
    if not phone_number:
        return None
    if not _PHONE_RE.match(re.sub(r"\s", "", phone_number)):
        raise InvalidInput(
            "Invalid phone number format. Please include country code (e.g., +1234567890)"
        )
    return phone_number


@dataclass
class User:
    id: UserId
    email: Email
    display_name: str
    role: UserRole
    phone_number: Optional[str] = None
    status: UserStatus = UserStatus.ACTIVE

    # Artist profile
    artist_name: Optional[str] = None
    bio: str = ""
    social_media: Dict[str, str] = field(default_factory=dict)

    # Admin profile
    permissions: List[str] = field(default_factory=list)
    is_active: bool = True

    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    last_login: Optional[datetime] = None
    last_logout: Optional[datetime] = None

    # Domain events
    _events: List = field(default_factory=list, init=False)

    @classmethod
    def register_artist(
        cls,
        user_id: UserId,
        email: Email,
        display_name: str,
        artist_name: str,
        phone_number: Optional[str] = None,
        bio: str = "",
        social_media: Optional[Dict[str, str]] = None,
    ) -> 'User':
        """Factory method for a new artist record"""
        if not (display_name or "").strip() or not (artist_name or "").strip():
            raise InvalidInput("Missing required fields")
        now = datetime.utcnow()
        user = cls(
            id=user_id,
            email=email,
            display_name=display_name.strip(),
            role=UserRole.ARTIST,
            phone_number=validate_phone_number(phone_number),
            artist_name=artist_name.strip(),
            bio=bio or "",
            social_media=dict(social_media or {}),
            created_at=now,
            updated_at=now,
            last_login=now,
        )
        user._events.append(UserRegistered(user_id=user.id, role=user.role, registered_at=now))
        return user

    @classmethod
    def register_admin(
        cls,
        user_id: UserId,
        email: Email,
        display_name: str,
        phone_number: Optional[str] = None,
        permissions: Optional[List[str]] = None,
    ) -> 'User':
        """Factory method for a new admin record"""
        if not (display_name or "").strip():
            raise InvalidInput("Missing required fields")
        now = datetime.utcnow()
        user = cls(
            id=user_id,
            email=email,
            display_name=display_name.strip(),
            role=UserRole.ADMIN,
            phone_number=validate_phone_number(phone_number),
            permissions=list(permissions or DEFAULT_ADMIN_PERMISSIONS),
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        user._events.append(UserRegistered(user_id=user.id, role=user.role, registered_at=now))
        return user

    def update_profile(
        self,
        display_name: Optional[str] = None,
        phone_number: Optional[str] = None,
        artist_name: Optional[str] = None,
        bio: Optional[str] = None,
        social_media: Optional[Dict[str, str]] = None,
    ) -> None:
        """Business logic: profile edits; artist-only fields are ignored for admins"""
        if display_name:
            self.display_name = display_name
        if phone_number:
            self.phone_number = validate_phone_number(phone_number)
        if self.is_artist:
            if artist_name:
                self.artist_name = artist_name
            if bio is not None:
                self.bio = bio
            if social_media:
                self.social_media = dict(social_media)
        self.updated_at = datetime.utcnow()

    def set_status(self, status: UserStatus) -> None:
        if status == self.status:
            return
        self.status = status
        if self.is_admin:
            self.is_active = status == UserStatus.ACTIVE
        self.updated_at = datetime.utcnow()
        self._events.append(UserStatusChanged(
            user_id=self.id,
            status=status,
            changed_at=self.updated_at
        ))

    def toggle_status(self) -> UserStatus:
        new_status = UserStatus.INACTIVE if self.status == UserStatus.ACTIVE else UserStatus.ACTIVE
        self.set_status(new_status)
        return new_status

    def record_login(self) -> None:
        """Record user login"""
        self.last_login = datetime.utcnow()

    def record_logout(self) -> None:
        self.last_logout = datetime.utcnow()

    @property
    def name(self) -> str:
        """Name used when addressing the user"""
        return self.artist_name or self.display_name or str(self.email)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_artist(self) -> bool:
        return self.role == UserRole.ARTIST

    @property
    def is_enabled(self) -> bool:
        return self.status == UserStatus.ACTIVE

    def get_events(self) -> List:
        """Get and clear domain events"""
        events = self._events.copy()
        self._events.clear()
        return events
