"""Security utilities for self-issued development tokens"""

from datetime import datetime, timedelta
from typing import Optional
from jose import jwt

from .config import settings

DEV_TOKEN_TYPE = "dev"


def create_access_token(subject: str, email: Optional[str] = None, expires_minutes: Optional[int] = None) -> str:
    """Create a self-issued token. Only the dev credential verifier accepts these."""
    expires_delta = timedelta(minutes=expires_minutes or settings.DEV_TOKEN_EXPIRE_MINUTES)
    expire = datetime.utcnow() + expires_delta

    to_encode = {"exp": expire, "sub": subject, "uid": subject, "type": DEV_TOKEN_TYPE}
    if email:
        to_encode["email"] = email
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature and expiry of a self-issued token; raises JWTError"""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
