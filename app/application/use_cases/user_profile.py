"""Profile, login and logout use cases"""

from ...domain.entities.user import User
from ...domain.repositories.unit_of_work import IUnitOfWork
from ..dtos.user_dtos import UpdateProfileRequest


class UpdateUserProfileUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, user: User, request: UpdateProfileRequest) -> User:
        """Update profile fields; role and status are never touched here"""
        user.update_profile(
            display_name=request.display_name,
            phone_number=request.phone_number,
            artist_name=request.artist_name,
            bio=request.bio,
            social_media=request.social_media,
        )
        async with self.unit_of_work:
            user = await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()
        return user


class RecordSessionUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def login(self, user: User) -> User:
        user.record_login()
        return await self._save(user)

    async def logout(self, user: User) -> User:
        user.record_logout()
        return await self._save(user)

    async def _save(self, user: User) -> User:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()
        return user
