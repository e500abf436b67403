"""Route Dependencies - bearer-token authentication.

Invariants:
    - Identity is derived once per request, here, and handed to handlers as AuthenticatedRequest
    - A missing or non-Bearer Authorization header is UnauthorizedError, same as a bad token
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from marketplace.core.domain_types import AuthenticatedRequest
from marketplace.core.errors import UnauthorizedError
from marketplace.infrastructure.tokens import verify_token

_bearer = HTTPBearer(auto_error=False)


async def get_authenticated_request(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> AuthenticatedRequest:
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")
    return verify_token(credentials.credentials)
