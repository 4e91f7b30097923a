"""Development-only sign in with self-issued tokens"""

import logging
import uuid
from typing import Optional, Tuple

from ...core.security import create_access_token
from ...domain.entities.user import User
from ...domain.exceptions import InvalidInput
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.email import Email

logger = logging.getLogger(__name__)


class DevLoginUseCase:
    """Issue a dev token for an email address

    Known users get a token for their own subject. Unknown addresses get a
    fresh subject so the token can be used to register.
    """

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, email: Optional[str]) -> Tuple[str, Optional[User]]:
        if not email:
            raise InvalidInput("Email is required")
        address = Email(email)
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_email(str(address))

        subject = user.id.value if user else f"dev_{uuid.uuid4().hex}"
        logger.warning("Issuing dev token for %s (%s)", address, "registered" if user else "unregistered")
        return create_access_token(subject, email=str(address)), user
