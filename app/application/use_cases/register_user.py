"""Register user use cases"""

import logging

from ...domain.entities.user import User
from ...domain.enums import UserRole
from ...domain.exceptions import Conflict, InvalidInput
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.email import Email
from ...domain.value_objects.entity_ids import UserId
from ..dtos.user_dtos import RegisterAdminRequest, RegisterArtistRequest, RegisterFirstAdminRequest
from ...infrastructure.external_services.identity_service import Identity

logger = logging.getLogger(__name__)


async def _ensure_available(unit_of_work: IUnitOfWork, user_id: UserId, email: Email) -> None:
    if await unit_of_work.users.exists(user_id):
        raise Conflict("User already registered")
    if await unit_of_work.users.get_by_email(str(email)) is not None:
        raise Conflict("Email already registered")


def _identity_email(identity: Identity) -> Email:
    if not identity.email:
        raise InvalidInput("Email is required")
    return Email(identity.email)


class RegisterArtistUseCase:
    """Create the directory record for an identity that signed up as an artist"""

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, identity: Identity, request: RegisterArtistRequest) -> User:
        email = _identity_email(identity)
        user = User.register_artist(
            user_id=identity.user_id,
            email=email,
            display_name=request.display_name,
            artist_name=request.artist_name,
            phone_number=request.phone_number,
            bio=request.bio or "",
            social_media=request.social_media,
        )
        async with self.unit_of_work:
            await _ensure_available(self.unit_of_work, user.id, email)
            user = await self.unit_of_work.users.add(user)
            await self.unit_of_work.commit()

        logger.info("Artist registered: %s", user.id)
        return user


class RegisterFirstAdminUseCase:
    """Bootstrap: the caller becomes an admin, but only while none exists"""

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, identity: Identity, request: RegisterFirstAdminRequest) -> User:
        email = _identity_email(identity)
        user = User.register_admin(
            user_id=identity.user_id,
            email=email,
            display_name=request.display_name,
            phone_number=request.phone_number,
        )
        async with self.unit_of_work:
            if await self.unit_of_work.users.count_by_role(UserRole.ADMIN) > 0:
                raise Conflict("An admin already exists")
            await _ensure_available(self.unit_of_work, user.id, email)
            user = await self.unit_of_work.users.add(user)
            await self.unit_of_work.commit()

        logger.warning("First admin bootstrapped: %s", user.id)
        return user


class RegisterAdminUseCase:
    """An existing admin provisions another admin record"""

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, acting_admin: User, request: RegisterAdminRequest) -> User:
        if not request.user_id or not request.email:
            raise InvalidInput("Missing required fields")
        email = Email(request.email)
        user = User.register_admin(
            user_id=UserId(request.user_id),
            email=email,
            display_name=request.display_name,
            phone_number=request.phone_number,
            permissions=request.permissions,
        )
        async with self.unit_of_work:
            await _ensure_available(self.unit_of_work, user.id, email)
            user = await self.unit_of_work.users.add(user)
            await self.unit_of_work.commit()

        logger.info("Admin %s provisioned by %s", user.id, acting_admin.id)
        return user
