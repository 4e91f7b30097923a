"""User domain events"""

from dataclasses import dataclass
from datetime import datetime

from ..enums import UserRole, UserStatus
from ..value_objects.entity_ids import UserId


@dataclass(frozen=True)
class UserRegistered:
    user_id: UserId
    role: UserRole
    registered_at: datetime


@dataclass(frozen=True)
class UserStatusChanged:
    user_id: UserId
    status: UserStatus
    changed_at: datetime
