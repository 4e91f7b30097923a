"""Admin user management use cases"""

import logging
from typing import List, Optional

from ...domain.entities.user import User
from ...domain.enums import UserRole, UserStatus
from ...domain.exceptions import Conflict, InvalidInput, NotFound
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import UserId

logger = logging.getLogger(__name__)


def _parse(enum_cls, raw: Optional[str], label: str):
    if raw is None:
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        raise InvalidInput(f"Invalid {label}")


class ListUsersUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, role: Optional[str] = None, status: Optional[str] = None) -> List[User]:
        role_filter = _parse(UserRole, role, "role")
        status_filter = _parse(UserStatus, status, "status")
        async with self.unit_of_work:
            return await self.unit_of_work.users.list(role=role_filter, status=status_filter)


class SetUserStatusUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, acting_admin: User, user_id: str, status: Optional[str] = None) -> User:
        """Set ``status``, or toggle it when no status is given"""
        target_id = UserId(user_id)
        if target_id == acting_admin.id:
            raise Conflict("You cannot change your own status")
        new_status = _parse(UserStatus, status, "status")

        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(target_id)
            if user is None:
                raise NotFound("User not found")
            if new_status is None:
                new_status = user.toggle_status()
            else:
                user.set_status(new_status)
            user = await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

        logger.info("User %s set to %s by %s", target_id, new_status.value, acting_admin.id)
        return user
