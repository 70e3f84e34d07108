"""
JobPortal - Session token issuance and verification.

Tokens are JWTs signed with the service's secret key (python-jose, HS256 by
default). The payload carries the user id, email, issue time and expiry:

    {"userId": 1, "email": "demo@example.com", "iat": 1700000000, "exp": 1700086400}

Expiry is always issue time + session TTL (one day), or + remember-me TTL
(thirty days). Verification returns a tagged result instead of raising:
`Authenticated(claims)` or `Unauthenticated(reason)`. Every failure path fails
closed.
"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

from jose import JWTError, jwt

from ..config import settings

logger = logging.getLogger("jobportal.auth")

Clock = Callable[[], float]


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    email: str
    issued_at: int
    expires_at: int


@dataclass(frozen=True)
class Authenticated:
    claims: TokenClaims


@dataclass(frozen=True)
class Unauthenticated:
    reason: str
    expired: bool = False


AuthResult = Union[Authenticated, Unauthenticated]


def token_ttl(remember_me: bool) -> int:
    """Lifetime in seconds for a newly issued token."""
    if remember_me:
        return settings.session.remember_me_ttl_seconds
    return settings.session.session_ttl_seconds


def issue_token(
    user_id: int,
    email: str,
    remember_me: bool = False,
    now: Clock = time.time
) -> Tuple[str, TokenClaims]:
    """
    Issue a signed session token.

    Returns:
        Tuple of (token_string, claims)
    """
    issued_at = int(now())
    claims = TokenClaims(
        user_id=user_id,
        email=email,
        issued_at=issued_at,
        expires_at=issued_at + token_ttl(remember_me)
    )
    payload = {
        "userId": claims.user_id,
        "email": claims.email,
        "iat": claims.issued_at,
        "exp": claims.expires_at,
    }
    token = jwt.encode(payload, settings.session.secret_key, algorithm=settings.session.algorithm)
    return token, claims


def decode_token(token: Optional[str], now: Clock = time.time) -> AuthResult:
    """
    Verify a session token.

    Unauthenticated when the token is absent, does not have three segments,
    has an undecodable payload or a bad signature, lacks an expiry, or has
    expired (expiry strictly before the current second).
    """
    if not token or not isinstance(token, str):
        return Unauthenticated("missing token")

    if len(token.split(".")) != 3:
        logger.debug("Rejected token with wrong segment count")
        return Unauthenticated("malformed token")

    try:
        # Expiry is compared against the injected clock below
        payload = jwt.decode(
            token,
            settings.session.secret_key,
            algorithms=[settings.session.algorithm],
            options={"verify_exp": False}
        )
    except JWTError as e:
        logger.debug("Token verification failed: %s", e)
        return Unauthenticated("invalid token")

    expires_at = payload.get("exp")
    if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
        logger.debug("Token missing expiry")
        return Unauthenticated("missing expiry")

    user_id = payload.get("userId")
    email = payload.get("email")
    if user_id is None or not email:
        logger.debug("Token missing required claims")
        return Unauthenticated("missing claims")

    if expires_at < int(now()):
        return Unauthenticated("token expired", expired=True)

    return Authenticated(TokenClaims(
        user_id=int(user_id),
        email=email,
        issued_at=int(payload.get("iat") or 0),
        expires_at=int(expires_at)
    ))
