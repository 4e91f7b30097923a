"""Bearer credential verification against the identity provider"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import httpx
from jose import jwt, JWTError

from ...core.config import Settings, settings as default_settings
from ...core.security import DEV_TOKEN_TYPE, decode_access_token
from ...domain.enums import AuthMode
from ...domain.exceptions import Unauthenticated, Unavailable
from ...domain.repositories.user_repository import IUserRepository
from ...domain.value_objects.entity_ids import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    user_id: UserId
    email: Optional[str] = None
    provider: str = "provider"


class CredentialVerifier(ABC):
    """Turns a bearer token into an Identity or raises Unauthenticated"""

    @abstractmethod
    async def verify(self, token: str, users: IUserRepository, require_registered: bool = True) -> Identity:
        pass

    async def aclose(self) -> None:
        pass


class ProviderTokenVerifier(CredentialVerifier):
    """RS256 ID tokens checked against the provider's published JWKS"""

    def __init__(
        self,
        jwks_url: str,
        audience: Optional[str],
        issuer: Optional[str],
        http_client: Optional[httpx.AsyncClient] = None,
        cache_seconds: int = 3600,
    ):
        self.jwks_url = jwks_url
        self.audience = audience
        self.issuer = issuer
        self.cache_seconds = cache_seconds
        self._client = http_client or httpx.AsyncClient(timeout=10.0)
        self._jwks: Optional[dict] = None
        self._fetched_at = 0.0

    async def _get_jwks(self, force: bool = False) -> dict:
        fresh = self._jwks is not None and time.monotonic() - self._fetched_at < self.cache_seconds
        if fresh and not force:
            return self._jwks
        try:
            response = await self._client.get(self.jwks_url)
            response.raise_for_status()
            jwks = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Could not fetch signing keys from %s: %s", self.jwks_url, e)
            if self._jwks is not None:
                return self._jwks
            raise Unavailable("Identity provider unavailable")
        self._jwks = jwks
        self._fetched_at = time.monotonic()
        return jwks

    def _has_key(self, jwks: dict, kid: Optional[str]) -> bool:
        return any(key.get("kid") == kid for key in jwks.get("keys", []))

    async def verify(self, token: str, users: IUserRepository, require_registered: bool = True) -> Identity:
        try:
            header = jwt.get_unverified_header(token)
        except JWTError:
            raise Unauthenticated("Invalid token")

        jwks = await self._get_jwks()
        if not self._has_key(jwks, header.get("kid")):
            # Keys rotate; refresh once before giving up
            jwks = await self._get_jwks(force=True)

        options = {"verify_aud": self.audience is not None, "verify_iss": self.issuer is not None}
        try:
            claims = jwt.decode(
                token,
                jwks,
                algorithms=["RS256"],
                audience=self.audience,
                issuer=self.issuer,
                options=options,
            )
        except JWTError as e:
            logger.info("Rejected provider token: %s", e)
            raise Unauthenticated("Invalid token")

        subject = claims.get("sub") or claims.get("user_id")
        if not subject:
            raise Unauthenticated("Invalid token")
        return Identity(user_id=UserId(subject), email=claims.get("email"), provider="provider")

    async def aclose(self) -> None:
        await self._client.aclose()


class DevTokenVerifier(CredentialVerifier):
    """Self-issued HS256 tokens for local development only

    The signature is checked with SECRET_KEY and the subject must already
    exist in the user directory (unless the caller is registering).
    """

    async def verify(self, token: str, users: IUserRepository, require_registered: bool = True) -> Identity:
        try:
            claims = decode_access_token(token)
        except JWTError:
            raise Unauthenticated("Invalid token")

        if claims.get("type") != DEV_TOKEN_TYPE:
            raise Unauthenticated("Invalid token structure")
        subject = claims.get("uid") or claims.get("sub")
        if not subject:
            raise Unauthenticated("Invalid token structure")

        user_id = UserId(subject)
        email = claims.get("email")
        if require_registered:
            user = await users.get_by_id(user_id)
            if user is None:
                raise Unauthenticated("Invalid token")
            email = str(user.email)
        return Identity(user_id=user_id, email=email, provider="dev")


def build_credential_verifier(config: Optional[Settings] = None) -> CredentialVerifier:
    """Pick exactly one verification strategy for this deployment"""
    config = config or default_settings
    if config.AUTH_MODE == AuthMode.DEV:
        if config.is_production:
            raise RuntimeError("AUTH_MODE=dev is not allowed when ENVIRONMENT=production")
        logger.warning(
            "!!! DEV AUTH MODE ACTIVE: self-issued tokens are accepted and provider "
            "tokens are NOT. Never run this configuration in production. !!!"
        )
        return DevTokenVerifier()

    if not config.IDENTITY_PROVIDER_PROJECT_ID:
        logger.warning("IDENTITY_PROVIDER_PROJECT_ID is not set; token audience will not be checked")
    return ProviderTokenVerifier(
        jwks_url=config.IDENTITY_PROVIDER_JWKS_URL,
        audience=config.IDENTITY_PROVIDER_PROJECT_ID,
        issuer=config.identity_provider_issuer,
        cache_seconds=config.JWKS_CACHE_SECONDS,
    )
