"""Access Control Guard: bearer credential -> identity -> role decision"""

import logging
from typing import Optional

from ..domain.entities.submission import Submission
from ..domain.entities.user import User
from ..domain.enums import UserRole
from ..domain.exceptions import Forbidden, NotFound, Unauthenticated
from ..domain.repositories.unit_of_work import IUnitOfWork
from ..infrastructure.external_services.identity_service import CredentialVerifier, Identity

logger = logging.getLogger(__name__)


class AccessControlGuard:

    def __init__(self, verifier: CredentialVerifier, unit_of_work: IUnitOfWork):
        self.verifier = verifier
        self.unit_of_work = unit_of_work

    async def authenticate(self, token: Optional[str], require_registered: bool = True) -> Identity:
        """Verify the bearer token; never consults roles"""
        if not token:
            raise Unauthenticated("No token provided")
        async with self.unit_of_work:
            return await self.verifier.verify(
                token, self.unit_of_work.users, require_registered=require_registered
            )

    async def resolve_user(self, identity: Optional[Identity]) -> User:
        if identity is None:
            raise Unauthenticated("User not authenticated")
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(identity.user_id)
        if user is None:
            raise NotFound("User not found")
        if not user.is_enabled:
            raise Forbidden("Account is inactive")
        return user

    async def authorize(self, identity: Optional[Identity], required_role: Optional[UserRole] = None) -> User:
        """Look up the caller's role and check it against ``required_role``

        Read-only. ``required_role=None`` only requires a directory record.
        """
        user = await self.resolve_user(identity)
        if required_role is not None and user.role != required_role:
            logger.info("Denied %s (%s): %s access required", user.id, user.role.value, required_role.value)
            raise Forbidden(f"{required_role.value.capitalize()} access required")
        return user

    @staticmethod
    def check_submission_read(user: User, submission: Submission) -> None:
        """Owners and admins may read a submission"""
        if not submission.is_visible_to(user):
            raise Forbidden("Access denied")
