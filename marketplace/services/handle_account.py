"""Account Handlers - register, login, add_balance, get_balance.

Invariants:
    - Passwords are hashed before they reach the repository; login compares hashes only
    - Unknown user id and wrong password are the same UnauthorizedError on login
    - add_balance is a single conditional UPDATE; a rejected deposit leaves the balance unchanged
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.domain_types import AuthenticatedRequest, UserId, UserSnapshot
from marketplace.core.errors import (
    ErrorContext, InvalidArgumentError, ResourceNotFoundError, UnauthorizedError,
)
from marketplace.core.ledger import validate_credit, validate_deposit
from marketplace.core.repository_protocols import UserRepository
from marketplace.infrastructure.credentials import hash_password, verify_password
from marketplace.infrastructure.database import atomic
from marketplace.infrastructure.tokens import issue_token
from marketplace.repositories.user_repository import SqlUserRepository

logger = logging.getLogger(__name__)


class AccountHandlers:
    """User registration, session issuance and balance."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users: UserRepository = SqlUserRepository(db)

    async def register(self, name: str, password: str) -> UserSnapshot:
        password_hash = await asyncio.to_thread(hash_password, password)
        async with atomic(self.db):
            user_id = await self.users.add(name, password_hash)
        logger.info(f"User {user_id} registered", extra={"user_id": user_id})
        return UserSnapshot(id=user_id, name=name, balance=0)

    async def login(self, user_id: UserId, password: str) -> tuple[UserSnapshot, str]:
        """Check credentials and issue a session token."""
        user = await self.users.get(user_id)
        password_hash = await self.users.get_password_hash(user_id)
        if user is None or password_hash is None:
            raise UnauthorizedError("Invalid user id or password")
        valid = await asyncio.to_thread(verify_password, password_hash, password)
        if not valid:
            raise UnauthorizedError("Invalid user id or password")
        return user, issue_token(user.id)

    async def add_balance(self, auth: AuthenticatedRequest, amount: int) -> None:
        ctx = ErrorContext(user_id=auth.user_id)
        validate_deposit(amount)
        async with atomic(self.db):
            user = await self.users.get(auth.user_id)
            if user is None:
                raise ResourceNotFoundError("User", auth.user_id, ctx)
            validate_credit(user.balance, amount)
            if not await self.users.credit(user.id, amount):
                raise InvalidArgumentError(
                    "Balance would exceed the maximum", field="balance", context=ctx,
                )
        logger.info(
            f"User {auth.user_id} added {amount} to balance",
            extra={"user_id": auth.user_id, "price": amount},
        )

    async def get_balance(self, auth: AuthenticatedRequest) -> int:
        user = await self.users.get(auth.user_id)
        if user is None:
            raise ResourceNotFoundError("User", auth.user_id)
        return user.balance
