"""Category Repository - read-only access to the seeded categories."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.domain_types import CategoryId, CategorySnapshot
from marketplace.models.category import Category


class SqlCategoryRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, category_id: CategoryId) -> CategorySnapshot | None:
        result = await self.db.execute(
            select(Category.id, Category.name).where(Category.id == category_id),
        )
        row = result.one_or_none()
        if row is None:
            return None
        return CategorySnapshot(id=CategoryId(row.id), name=row.name)

    async def list_all(self) -> list[CategorySnapshot]:
        result = await self.db.execute(
            select(Category.id, Category.name).order_by(Category.id),
        )
        return [
            CategorySnapshot(id=CategoryId(r.id), name=r.name) for r in result.all()
        ]
