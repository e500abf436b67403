"""Item Schemas - response shapes for listings and the sell request body.

Invariants:
    - List endpoints return ItemSummaryResponse (no description, no image)
    - ItemDetailResponse.status is the ItemStatus string value
    - Listing form fields (multipart) are declared on the route, not here: FastAPI binds Form()
"""

from datetime import datetime

from pydantic import BaseModel, Field

from marketplace.core.domain_types import (
    MAX_ID, CategorySnapshot, ItemDetail, ItemStatus, ItemSummary, SaleRecord,
)


class ItemIdResponse(BaseModel):
    id: int


class ItemSummaryResponse(BaseModel):
    id: int
    name: str
    price: int
    category_name: str

    @classmethod
    def from_summary(cls, s: ItemSummary) -> "ItemSummaryResponse":
        return cls(id=s.id, name=s.name, price=s.price, category_name=s.category_name)


class ItemDetailResponse(BaseModel):
    id: int
    name: str
    category_id: int
    category_name: str
    user_id: int
    price: int
    description: str
    status: ItemStatus

    @classmethod
    def from_detail(cls, d: ItemDetail) -> "ItemDetailResponse":
        return cls(
            id=d.id,
            name=d.name,
            category_id=d.category_id,
            category_name=d.category_name,
            user_id=d.seller_id,
            price=d.price,
            description=d.description,
            status=d.status,
        )


class CategoryResponse(BaseModel):
    id: int
    name: str

    @classmethod
    def from_snapshot(cls, c: CategorySnapshot) -> "CategoryResponse":
        return cls(id=c.id, name=c.name)


class SellRequest(BaseModel):
    item_id: int = Field(ge=1, le=MAX_ID)


class PurchaseResponse(BaseModel):
    id: int
    item_id: int
    item_name: str
    seller_id: int
    price: int
    purchased_at: datetime

    @classmethod
    def from_record(cls, r: SaleRecord) -> "PurchaseResponse":
        return cls(
            id=r.id,
            item_id=r.item_id,
            item_name=r.item_name,
            seller_id=r.seller_id,
            price=r.price,
            purchased_at=r.created_at,
        )
