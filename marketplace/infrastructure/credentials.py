"""Credential Service - bcrypt password hashing.

Invariants:
    - Plaintext passwords are never stored or logged; only the bcrypt hash leaves this module
    - bcrypt reads at most MAX_PASSWORD_BYTES of UTF-8; longer passwords are refused, never truncated
    - verify_password never raises: an over-long password or a malformed stored hash answers False
"""

import logging

import bcrypt

from marketplace.core.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

MAX_PASSWORD_BYTES = 72


def password_too_long(plain: str) -> bool:
    return len(plain.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(plain: str) -> str:
    if password_too_long(plain):
        raise InvalidArgumentError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes", field="password",
        )
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(hashed: str, plain: str) -> bool:
    if password_too_long(plain):
        logger.warning("Password exceeds the bcrypt byte limit")
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False
