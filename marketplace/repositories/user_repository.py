"""User Repository - accounts and balance writes.

Invariants:
    - Balance writes are single conditional UPDATEs computed by the store
      (balance = balance +/- amount), never read-modify-write from Python
    - debit_if_sufficient only applies when balance >= amount at write time
    - credit only applies when the result stays within MAX_BALANCE
"""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.domain_types import UserId, UserSnapshot
from marketplace.core.ledger import MAX_BALANCE
from marketplace.models.user import User


class SqlUserRepository:
    """UserRepository backed by the users table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, name: str, password_hash: str) -> UserId:
        user = User(name=name, password_hash=password_hash, balance=0)
        self.db.add(user)
        await self.db.flush()
        return UserId(user.id)

    async def get(self, user_id: UserId) -> UserSnapshot | None:
        result = await self.db.execute(
            select(User.id, User.name, User.balance).where(User.id == user_id),
        )
        row = result.one_or_none()
        if row is None:
            return None
        return UserSnapshot(id=UserId(row.id), name=row.name, balance=row.balance)

    async def get_password_hash(self, user_id: UserId) -> str | None:
        result = await self.db.execute(
            select(User.password_hash).where(User.id == user_id),
        )
        return result.scalar_one_or_none()

    async def credit(self, user_id: UserId, amount: int) -> bool:
        result = await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .where(User.balance <= MAX_BALANCE - amount)
            .values(balance=User.balance + amount)
            .execution_options(synchronize_session=False),
        )
        return result.rowcount == 1

    async def debit_if_sufficient(self, user_id: UserId, amount: int) -> bool:
        result = await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .where(User.balance >= amount)
            .values(balance=User.balance - amount)
            .execution_options(synchronize_session=False),
        )
        return result.rowcount == 1
