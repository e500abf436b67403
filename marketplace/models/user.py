"""User ORM - a marketplace account holding an integer balance.

Invariants:
    - id is an autoincrement integer, returned by the INSERT that creates the row
    - password_hash only ever holds a bcrypt hash (infrastructure/credentials.py)
    - balance is BigInteger, default 0, never negative (CHECK constraint)
    - balance is written only through UserRepository.credit / debit_if_sufficient
"""

from sqlalchemy import BigInteger, CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from marketplace.db.base import Base


class User(Base):
    """User entity - buyer and seller are both Users."""
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_users_balance_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    balance: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
