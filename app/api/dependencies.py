"""API dependencies: request-scoped wiring of the application layer"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from ..application.access_control import AccessControlGuard
from ..application.notifications import NotificationDispatcher
from ..core.config import settings
from ..db.database import get_db
from ..domain.entities.user import User
from ..domain.enums import UserRole
from ..domain.repositories.unit_of_work import IUnitOfWork
from ..infrastructure.external_services.email_service import EmailService
from ..infrastructure.external_services.identity_service import (
    CredentialVerifier, Identity, build_credential_verifier
)
from ..infrastructure.external_services.storage_service import StorageService
from ..infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl


# Missing credentials are reported by the guard, not by FastAPI
security = HTTPBearer(auto_error=False)


def get_unit_of_work(db: Session = Depends(get_db)) -> IUnitOfWork:
    """Get unit of work"""
    return UnitOfWorkImpl(db)


def get_credential_verifier(request: Request) -> CredentialVerifier:
    """The verifier built at startup"""
    verifier = getattr(request.app.state, "credential_verifier", None)
    if verifier is None:
        verifier = build_credential_verifier(settings)
        request.app.state.credential_verifier = verifier
    return verifier


def get_storage_service(request: Request) -> StorageService:
    """Get storage service"""
    storage = getattr(request.app.state, "storage_service", None)
    if storage is None:
        storage = StorageService()
        request.app.state.storage_service = storage
    return storage


def get_email_service() -> EmailService:
    """Get email service"""
    return EmailService()


def get_notification_dispatcher(
    email_service: EmailService = Depends(get_email_service)
) -> NotificationDispatcher:
    return NotificationDispatcher(email_service, queue=settings.NOTIFICATION_QUEUE)


def get_guard(
    verifier: CredentialVerifier = Depends(get_credential_verifier),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
) -> AccessControlGuard:
    return AccessControlGuard(verifier, unit_of_work)


def _token(credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    return credentials.credentials if credentials else None


async def get_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    guard: AccessControlGuard = Depends(get_guard)
) -> Identity:
    """Authenticated caller that already has a directory record"""
    return await guard.authenticate(_token(credentials))


async def get_registering_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    guard: AccessControlGuard = Depends(get_guard)
) -> Identity:
    """Authenticated caller that may not be in the directory yet"""
    return await guard.authenticate(_token(credentials), require_registered=False)


async def get_current_user(
    identity: Identity = Depends(get_identity),
    guard: AccessControlGuard = Depends(get_guard)
) -> User:
    """Get current authenticated, active user"""
    return await guard.authorize(identity)


async def require_artist(
    identity: Identity = Depends(get_identity),
    guard: AccessControlGuard = Depends(get_guard)
) -> User:
    return await guard.authorize(identity, UserRole.ARTIST)


async def require_admin(
    identity: Identity = Depends(get_identity),
    guard: AccessControlGuard = Depends(get_guard)
) -> User:
    return await guard.authorize(identity, UserRole.ADMIN)
