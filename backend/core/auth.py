"""
Authentication gate for Storyst API endpoints.

Every protected request passes through ``authenticate``: the raw
``Authorization`` header must carry ``Bearer <token>``, and the token must
verify against the identity token codec. The resulting identity is trusted
for the rest of the request; the customer directory is not consulted here.
"""

from functools import lru_cache
from datetime import timedelta
from typing import AsyncIterator, Optional
import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext

from .auth_context import AuthenticatedIdentity, reset_auth_context, set_auth_context
from .config import get_settings
from .exceptions import MissingCredentialError, UnauthenticatedError
from .token_codec import IdentityTokenCodec

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
security = HTTPBearer(auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


@lru_cache()
def get_token_codec() -> IdentityTokenCodec:
    """Build the process-wide token codec from settings."""
    settings = get_settings()
    return IdentityTokenCodec(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        lifetime=timedelta(minutes=settings.jwt_access_token_expire_minutes),
    )


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token of a ``Bearer <token>`` header or raise MissingCredentialError."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise MissingCredentialError()

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise MissingCredentialError()
    return token


def authenticate(
    authorization: Optional[str], codec: IdentityTokenCodec
) -> AuthenticatedIdentity:
    """
    Resolve the caller's identity from a raw Authorization header value.

    Raises:
        MissingCredentialError: header absent or not a bearer credential
        InvalidCredentialError: token signature or payload is invalid
        ExpiredCredentialError: token lifetime has elapsed
    """
    return authenticate_token(extract_bearer_token(authorization), codec)


def authenticate_token(token: str, codec: IdentityTokenCodec) -> AuthenticatedIdentity:
    """Verify an already extracted bearer token."""
    claim = codec.verify(token)
    return AuthenticatedIdentity(customer_id=claim.customer_id, email=claim.email)


def require_identity(
    identity: Optional[AuthenticatedIdentity],
) -> AuthenticatedIdentity:
    """Guard for core operations that need a resolved identity."""
    if identity is None or not identity.customer_id:
        raise UnauthenticatedError()
    return identity


async def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    codec: IdentityTokenCodec = Depends(get_token_codec),
) -> AsyncIterator[AuthenticatedIdentity]:
    """
    FastAPI dependency: authenticate the request and attach its identity.

    The identity is stored on ``request.state`` and in the auth context for
    the duration of the request; the context is reset afterwards.
    """
    if credentials is None:
        raise MissingCredentialError()

    identity = authenticate_token(credentials.credentials, codec)
    request.state.identity = identity
    context_token = set_auth_context(identity)
    logger.debug(f"Authenticated customer {identity.customer_id}")
    try:
        yield identity
    finally:
        reset_auth_context(context_token)
