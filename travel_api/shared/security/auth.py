"""
Bearer token authentication.

Verifies JWTs issued by the account service and turns their claims into
a domain Actor. Issuing tokens is not this service's concern.

Expected claims:
    sub     actor id (string, as required by RFC 7519)
    role    "user" or "admin"
    scopes  list (or space-separated string) of granted scopes
"""

import logging
from typing import Any, Optional

import jwt
from fastapi import Header

from travel_api.core.config import settings
from travel_api.domain.travel.entities import Actor, Role, Scope

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class AuthenticationError(Exception):
    """Raised when a request carries no valid bearer token."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


def _parse_scopes(raw: Any) -> frozenset[Scope]:
    if raw is None:
        return frozenset()
    if isinstance(raw, str):
        raw = raw.split()
    known = {scope.value: scope for scope in Scope}
    return frozenset(known[value] for value in raw if value in known)


def actor_from_claims(claims: dict[str, Any]) -> Actor:
    """Build an Actor from decoded token claims.

    Unknown scopes are ignored; a token without any known scope yields
    an actor that every policy check refuses.

    Raises:
        AuthenticationError: If the subject or role claims are unusable.
    """
    try:
        actor_id = int(claims["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Token subject is missing or invalid") from exc

    try:
        role = Role(claims.get("role", Role.USER.value))
    except ValueError as exc:
        raise AuthenticationError("Token role is invalid") from exc

    return Actor(id=actor_id, role=role, scopes=_parse_scopes(claims.get("scopes")))


def decode_token(token: str) -> Actor:
    """Verify a JWT and return the actor it authenticates.

    Raises:
        AuthenticationError: If the signature, expiry or claims are invalid.
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationError("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthenticationError("Invalid token") from exc

    return actor_from_claims(claims)


def get_current_actor(authorization: Optional[str] = Header(default=None)) -> Actor:
    """FastAPI dependency resolving the authenticated actor.

    Raises:
        AuthenticationError: If the Authorization header is absent or invalid.
    """
    if not authorization:
        raise AuthenticationError("Authorization header required")
    if not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationError("Invalid authorization header format")

    actor = decode_token(authorization[len(BEARER_PREFIX):].strip())
    logger.debug("Authenticated actor=%d role=%s", actor.id, actor.role.value)
    return actor
