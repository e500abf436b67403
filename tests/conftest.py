"""Root conftest - shared test configuration, database and client fixtures.

Invariants:
    - Every test gets a fresh file-backed SQLite database under tmp_path
    - get_db dependency overridden to use the test database
    - db_manager patched so the readiness check sees the test engine

Design Decisions:
    - File-backed over :memory:: each session gets its own connection, so concurrent
      purchases really contend on the database lock
    - Seeded users share one precomputed bcrypt hash (tests/helpers.py)
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("JWT_SECRET", "marketplace-test-secret-0123456789abcdef")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, async_sessionmaker, create_async_engine,
)

from marketplace.core.domain_types import ItemStatus, UserId  # noqa: E402
from marketplace.db.base import Base  # noqa: E402
from marketplace.infrastructure.database import DatabaseSessionManager, get_db  # noqa: E402
import marketplace.infrastructure.database as db_module  # noqa: E402
from marketplace.main import app  # noqa: E402
from marketplace.models.category import Category  # noqa: E402
from marketplace.models.item import Item  # noqa: E402
from marketplace.models.user import User  # noqa: E402
from tests.helpers import JPEG_BYTES, PASSWORD_HASH  # noqa: E402


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'marketplace.db'}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def categories(test_db):
    """Seed two categories: 1 fashion, 2 books."""
    test_db.add_all([Category(id=1, name="fashion"), Category(id=2, name="books")])
    await test_db.commit()


@pytest.fixture
def make_user(test_db):
    async def _make(name: str = "user", balance: int = 0) -> UserId:
        user = User(name=name, password_hash=PASSWORD_HASH, balance=balance)
        test_db.add(user)
        await test_db.commit()
        return UserId(user.id)
    return _make


@pytest.fixture
def make_item(test_db, categories):
    async def _make(
        seller_id: UserId,
        name: str = "item",
        price: int = 100,
        status: ItemStatus = ItemStatus.INITIAL,
        category_id: int = 1,
    ) -> int:
        item = Item(
            name=name, price=price, description="desc", category_id=category_id,
            seller_id=seller_id, image=JPEG_BYTES, status=status.value,
        )
        test_db.add(item)
        await test_db.commit()
        return item.id
    return _make


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
