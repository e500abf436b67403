"""Test helpers - identities, bearer headers and fixture constants."""

from marketplace.core.domain_types import AuthenticatedRequest, UserId
from marketplace.infrastructure.credentials import hash_password
from marketplace.infrastructure.tokens import issue_token

PASSWORD = "correct horse"
PASSWORD_HASH = hash_password(PASSWORD)
JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg\xff\xd9"


def auth_for(user_id: int) -> AuthenticatedRequest:
    return AuthenticatedRequest(user_id=UserId(user_id))


def bearer(user_id: int) -> dict[str, str]:
    return {"Authorization": f"Bearer {issue_token(UserId(user_id))}"}
