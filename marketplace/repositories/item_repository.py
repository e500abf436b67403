"""Item Repository - listings, their images, and status transitions.

Invariants:
    - transition_status and update_fields are compare-and-set: the WHERE clause carries the
      expected status, and the affected-row count says whether it still held
    - On-sale listing and search: most recently updated first (updated_at DESC, id DESC)
    - Seller listing: creation order (id ASC)
    - List projections inner-join categories; the image column is never loaded for lists

Design Decisions:
    - LIKE wildcards in the search word are escaped: searching "50%" matches the literal text
"""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.domain_types import (
    CategoryId, ItemDetail, ItemFields, ItemId, ItemSnapshot, ItemStatus, ItemSummary,
    UserId,
)
from marketplace.models.category import Category
from marketplace.models.item import Item

_LIKE_ESCAPE = "\\"


def escape_like(word: str) -> str:
    """Escape LIKE metacharacters so the word matches literally."""
    return (
        word.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", f"{_LIKE_ESCAPE}%")
        .replace("_", f"{_LIKE_ESCAPE}_")
    )


def _summary_query():
    return (
        select(
            Item.id, Item.name, Item.price, Category.name.label("category_name"),
        )
        .join(Category, Category.id == Item.category_id)
    )


def _to_summaries(rows) -> list[ItemSummary]:
    return [
        ItemSummary(
            id=ItemId(r.id), name=r.name, price=r.price, category_name=r.category_name,
        )
        for r in rows
    ]


class SqlItemRepository:
    """ItemRepository backed by the items table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(
        self, seller_id: UserId, fields: ItemFields, image: bytes, status: ItemStatus,
    ) -> ItemId:
        item = Item(
            name=fields.name,
            price=fields.price,
            description=fields.description,
            category_id=fields.category_id,
            seller_id=seller_id,
            image=image,
            status=status.value,
        )
        self.db.add(item)
        await self.db.flush()
        return ItemId(item.id)

    async def get(self, item_id: ItemId) -> ItemSnapshot | None:
        result = await self.db.execute(
            select(
                Item.id, Item.name, Item.price, Item.description,
                Item.category_id, Item.seller_id, Item.status,
            ).where(Item.id == item_id),
        )
        row = result.one_or_none()
        if row is None:
            return None
        return ItemSnapshot(
            id=ItemId(row.id),
            name=row.name,
            price=row.price,
            description=row.description,
            category_id=CategoryId(row.category_id),
            seller_id=UserId(row.seller_id),
            status=ItemStatus(row.status),
        )

    async def get_detail(self, item_id: ItemId) -> ItemDetail | None:
        result = await self.db.execute(
            select(
                Item.id, Item.name, Item.price, Item.description,
                Item.category_id, Category.name.label("category_name"),
                Item.seller_id, Item.status,
            )
            .join(Category, Category.id == Item.category_id)
            .where(Item.id == item_id),
        )
        row = result.one_or_none()
        if row is None:
            return None
        return ItemDetail(
            id=ItemId(row.id),
            name=row.name,
            price=row.price,
            description=row.description,
            category_id=CategoryId(row.category_id),
            category_name=row.category_name,
            seller_id=UserId(row.seller_id),
            status=ItemStatus(row.status),
        )

    async def get_image(self, item_id: ItemId) -> bytes | None:
        result = await self.db.execute(
            select(Item.image).where(Item.id == item_id),
        )
        return result.scalar_one_or_none()

    async def update_fields(
        self,
        item_id: ItemId,
        seller_id: UserId,
        fields: ItemFields,
        image: bytes,
        expected_status: ItemStatus,
    ) -> bool:
        result = await self.db.execute(
            update(Item)
            .where(Item.id == item_id)
            .where(Item.seller_id == seller_id)
            .where(Item.status == expected_status.value)
            .values(
                name=fields.name,
                price=fields.price,
                description=fields.description,
                category_id=fields.category_id,
                image=image,
            )
            .execution_options(synchronize_session=False),
        )
        return result.rowcount == 1

    async def transition_status(
        self, item_id: ItemId, from_status: ItemStatus, to_status: ItemStatus,
    ) -> bool:
        result = await self.db.execute(
            update(Item)
            .where(Item.id == item_id)
            .where(Item.status == from_status.value)
            .values(status=to_status.value)
            .execution_options(synchronize_session=False),
        )
        return result.rowcount == 1

    async def list_on_sale(self) -> list[ItemSummary]:
        result = await self.db.execute(
            _summary_query()
            .where(Item.status == ItemStatus.ON_SALE.value)
            .order_by(Item.updated_at.desc(), Item.id.desc()),
        )
        return _to_summaries(result.all())

    async def list_by_seller(self, seller_id: UserId) -> list[ItemSummary]:
        result = await self.db.execute(
            _summary_query()
            .where(Item.seller_id == seller_id)
            .order_by(Item.id.asc()),
        )
        return _to_summaries(result.all())

    async def search_on_sale(self, word: str) -> list[ItemSummary]:
        pattern = f"%{escape_like(word)}%"
        result = await self.db.execute(
            _summary_query()
            .where(Item.name.like(pattern, escape=_LIKE_ESCAPE))
            .where(Item.status == ItemStatus.ON_SALE.value)
            .order_by(Item.updated_at.desc(), Item.id.desc()),
        )
        return _to_summaries(result.all())
