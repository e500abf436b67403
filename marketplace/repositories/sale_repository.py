"""Sale Repository - purchase history, newest first."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.domain_types import ItemId, SaleId, SaleRecord, UserId
from marketplace.models.item import Item
from marketplace.models.sale import Sale


class SqlSaleRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record(
        self, item_id: ItemId, buyer_id: UserId, seller_id: UserId, price: int,
    ) -> SaleId:
        sale = Sale(item_id=item_id, buyer_id=buyer_id, seller_id=seller_id, price=price)
        self.db.add(sale)
        await self.db.flush()
        return SaleId(sale.id)

    async def list_by_buyer(self, buyer_id: UserId) -> list[SaleRecord]:
        result = await self.db.execute(
            select(
                Sale.id, Sale.item_id, Item.name.label("item_name"),
                Sale.buyer_id, Sale.seller_id, Sale.price, Sale.created_at,
            )
            .join(Item, Item.id == Sale.item_id)
            .where(Sale.buyer_id == buyer_id)
            .order_by(Sale.id.desc()),
        )
        return [
            SaleRecord(
                id=SaleId(r.id),
                item_id=ItemId(r.item_id),
                item_name=r.item_name,
                buyer_id=UserId(r.buyer_id),
                seller_id=UserId(r.seller_id),
                price=r.price,
                created_at=r.created_at,
            )
            for r in result.all()
        ]
