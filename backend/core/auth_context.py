"""Identity of the customer a request is running for.

``get_current_identity`` installs the identity when the bearer token has
been verified and resets it once the request has been handled, so nothing
outlives the request that established it.
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Customer id and email taken from a verified identity token."""

    customer_id: str
    email: str


_current_identity: ContextVar[Optional[AuthenticatedIdentity]] = ContextVar(
    "current_identity", default=None
)


def set_auth_context(identity: AuthenticatedIdentity) -> Token:
    """Install ``identity``; keep the returned token to undo it."""
    return _current_identity.set(identity)


def get_auth_context() -> Optional[AuthenticatedIdentity]:
    return _current_identity.get()


def reset_auth_context(token: Token) -> None:
    _current_identity.reset(token)
