"""User DTOs for API layer"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field

from ...domain.entities.user import User
from .submission_dtos import CamelModel


class RegisterArtistRequest(CamelModel):
    display_name: Optional[str] = None
    artist_name: Optional[str] = None
    phone_number: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=2000)
    social_media: Optional[Dict[str, str]] = None


class RegisterFirstAdminRequest(CamelModel):
    display_name: Optional[str] = None
    phone_number: Optional[str] = None


class RegisterAdminRequest(CamelModel):
    """Provision an admin record for an identity that already exists at the provider"""
    user_id: Optional[str] = None
    email: Optional[str] = None
    display_name: Optional[str] = None
    phone_number: Optional[str] = None
    permissions: Optional[List[str]] = None


class UpdateProfileRequest(CamelModel):
    display_name: Optional[str] = None
    phone_number: Optional[str] = None
    artist_name: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=2000)
    social_media: Optional[Dict[str, str]] = None


class UserStatusRequest(CamelModel):
    """Omit ``status`` to toggle"""
    status: Optional[str] = None


class DevLoginRequest(CamelModel):
    email: Optional[str] = None


class UserDto(CamelModel):
    """DTO for user response"""
    uid: str
    email: str
    display_name: str
    phone_number: Optional[str] = None
    role: str
    status: str
    artist_name: Optional[str] = None
    bio: Optional[str] = None
    social_media: Optional[Dict[str, str]] = None
    permissions: Optional[List[str]] = None
    is_active: Optional[bool] = None
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: User) -> 'UserDto':
        dto = cls(
            uid=user.id.value,
            email=str(user.email),
            display_name=user.display_name,
            phone_number=user.phone_number,
            role=user.role.value,
            status=user.status.value,
            created_at=user.created_at,
            last_login=user.last_login
        )
        if user.is_artist:
            dto.artist_name = user.artist_name
            dto.bio = user.bio
            dto.social_media = user.social_media
        else:
            dto.permissions = user.permissions
            dto.is_active = user.is_active
        return dto


class UserResponse(CamelModel):
    message: str
    user: UserDto


class UserListResponse(CamelModel):
    users: List[UserDto]
    total: int


class DevLoginResponse(CamelModel):
    token: str
    registered: bool
    user: Optional[UserDto] = None
