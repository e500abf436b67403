"""Session Service - issues and verifies signed bearer tokens.

Invariants:
    - Tokens are HS256 JWTs carrying a user_id claim and an exp claim
    - verify_token is the ONLY producer of AuthenticatedRequest
    - Every failure (bad signature, expired, malformed, missing claim) is UnauthorizedError

Design Decisions:
    - Secret, algorithm and lifetime read from Settings per call: tests override via env
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt

from marketplace.config import get_settings
from marketplace.core.domain_types import AuthenticatedRequest, UserId
from marketplace.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)


def issue_token(user_id: UserId, now: datetime | None = None) -> str:
    """Sign a session token for user_id, valid for token_ttl_hours."""
    settings = get_settings()
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "user_id": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=settings.token_ttl_hours),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> AuthenticatedRequest:
    """Verify a session token and extract the caller's identity."""
    settings = get_settings()
    try:
        claims = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "user_id"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Session token expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected session token: {e}")
        raise UnauthorizedError("Invalid session token")

    user_id = claims["user_id"]
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise UnauthorizedError("Invalid session token")
    return AuthenticatedRequest(user_id=UserId(user_id))
