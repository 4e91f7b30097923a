"""User directory repository interface"""

from abc import ABC, abstractmethod
from typing import Optional, List

from ..entities.user import User
from ..enums import UserRole, UserStatus
from ..value_objects.entity_ids import UserId


class IUserRepository(ABC):

    @abstractmethod
    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    async def add(self, user: User) -> User:
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        pass

    @abstractmethod
    async def exists(self, user_id: UserId) -> bool:
        pass

    @abstractmethod
    async def count_by_role(self, role: UserRole) -> int:
        pass

    @abstractmethod
    async def list(
        self,
        role: Optional[UserRole] = None,
        status: Optional[UserStatus] = None,
    ) -> List[User]:
        pass
