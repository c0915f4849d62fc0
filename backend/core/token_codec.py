"""
Identity token codec.

Issues and verifies the signed, short-lived JWTs that carry a customer's
identity claim (customer id + email). The codec is stateless: there is no
revocation list, a token is only bounded by its expiry. The signing secret
is injected at construction so each deployment (and each test) can use its
own key.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
import logging

from jose import JWTError, jwt

from .exceptions import ExpiredCredentialError, InvalidCredentialError

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "HS256"
DEFAULT_TOKEN_LIFETIME = timedelta(hours=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class IdentityClaim:
    """Decoded payload of a verified identity token."""

    customer_id: str
    email: str
    issued_at: datetime
    expires_at: datetime


class IdentityTokenCodec:
    """Encode/decode signed identity claims with a fixed lifetime."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = DEFAULT_ALGORITHM,
        lifetime: timedelta = DEFAULT_TOKEN_LIFETIME,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret_key:
            raise ValueError("A signing secret is required")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.lifetime = lifetime
        self._clock = clock or utc_now

    def issue(self, customer_id: str, email: str) -> str:
        """Create a token for ``customer_id``/``email`` expiring after ``lifetime``."""
        issued_at = int(self._clock().timestamp())
        expires_at = issued_at + int(self.lifetime.total_seconds())

        to_encode = {
            "sub": str(customer_id),
            "customerId": str(customer_id),
            "email": email,
            "iat": issued_at,
            "exp": expires_at,
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> IdentityClaim:
        """
        Verify and decode an identity token.

        Raises:
            InvalidCredentialError: bad signature, malformed token or claims
            ExpiredCredentialError: the current time is at or past ``exp``
        """
        try:
            # Time claims are checked below against the injected clock
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError as e:
            logger.warning(f"Token verification failed: {e}")
            raise InvalidCredentialError()

        customer_id = payload.get("customerId")
        email = payload.get("email")
        issued_at = payload.get("iat")
        expires_at = payload.get("exp")

        if not isinstance(customer_id, str) or not customer_id:
            raise InvalidCredentialError("Token missing customer identifier")
        if not isinstance(email, str) or not email:
            raise InvalidCredentialError("Token missing email claim")
        if not isinstance(issued_at, (int, float)) or not isinstance(expires_at, (int, float)):
            raise InvalidCredentialError("Token has malformed time claims")

        if self._clock().timestamp() >= expires_at:
            logger.warning("Token has expired")
            raise ExpiredCredentialError()

        return IdentityClaim(
            customer_id=customer_id,
            email=email,
            issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc),
        )
