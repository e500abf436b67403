"""Item Routes - listing CRUD, sell, browse and search.

Invariants:
    - /items/categories is registered before /items/{item_id}
    - Uploaded images are read at most max_image_bytes + 1 bytes; the handler rejects the overflow
    - Add/update take multipart form fields plus an `image` file
"""

import logging

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.api.dependencies import get_authenticated_request
from marketplace.config import get_settings
from marketplace.core.domain_types import (
    MAX_ID, AuthenticatedRequest, CategoryId, ItemFields, ItemId, UserId,
)
from marketplace.infrastructure.database import get_db
from marketplace.schemas.item import (
    CategoryResponse, ItemDetailResponse, ItemIdResponse, ItemSummaryResponse,
    SellRequest,
)
from marketplace.services.handle_listing import ListingHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["items"])


async def _read_image(image: UploadFile) -> bytes:
    return await image.read(get_settings().max_image_bytes + 1)


@router.get("/items", response_model=list[ItemSummaryResponse])
async def list_on_sale(db: AsyncSession = Depends(get_db)):
    items = await ListingHandlers(db).list_on_sale()
    return [ItemSummaryResponse.from_summary(i) for i in items]


@router.post("/items", response_model=ItemIdResponse)
async def add_item(
    name: str = Form(...),
    category_id: int = Form(...),
    price: int = Form(...),
    description: str = Form(...),
    image: UploadFile = File(...),
    auth: AuthenticatedRequest = Depends(get_authenticated_request),
    db: AsyncSession = Depends(get_db),
):
    fields = ItemFields(
        name=name, price=price, description=description,
        category_id=CategoryId(category_id),
    )
    item_id = await ListingHandlers(db).add_item(auth, fields, await _read_image(image))
    return ItemIdResponse(id=item_id)


@router.get("/items/categories", response_model=list[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    categories = await ListingHandlers(db).list_categories()
    return [CategoryResponse.from_snapshot(c) for c in categories]


@router.get("/items/{item_id}", response_model=ItemDetailResponse)
async def get_item(
    item_id: int = Path(ge=1, le=MAX_ID), db: AsyncSession = Depends(get_db),
):
    detail = await ListingHandlers(db).get_item(ItemId(item_id))
    return ItemDetailResponse.from_detail(detail)


@router.put("/items/{item_id}", response_model=ItemIdResponse)
async def update_item(
    item_id: int = Path(ge=1, le=MAX_ID),
    name: str = Form(...),
    category_id: int = Form(...),
    price: int = Form(...),
    description: str = Form(...),
    image: UploadFile = File(...),
    auth: AuthenticatedRequest = Depends(get_authenticated_request),
    db: AsyncSession = Depends(get_db),
):
    fields = ItemFields(
        name=name, price=price, description=description,
        category_id=CategoryId(category_id),
    )
    updated = await ListingHandlers(db).update_item(
        auth, ItemId(item_id), fields, await _read_image(image),
    )
    return ItemIdResponse(id=updated)


@router.get("/items/{item_id}/image")
async def get_image(
    item_id: int = Path(ge=1, le=MAX_ID), db: AsyncSession = Depends(get_db),
):
    data = await ListingHandlers(db).get_image(ItemId(item_id))
    return Response(content=data, media_type="image/jpeg")


@router.get("/search", response_model=list[ItemSummaryResponse])
async def search_items(
    name: str = Query("", max_length=200), db: AsyncSession = Depends(get_db),
):
    items = await ListingHandlers(db).search(name)
    return [ItemSummaryResponse.from_summary(i) for i in items]


@router.get("/users/{user_id}/items", response_model=list[ItemSummaryResponse])
async def list_user_items(
    user_id: int = Path(ge=1, le=MAX_ID), db: AsyncSession = Depends(get_db),
):
    items = await ListingHandlers(db).list_by_seller(UserId(user_id))
    return [ItemSummaryResponse.from_summary(i) for i in items]


@router.post("/sell")
async def sell(
    body: SellRequest,
    auth: AuthenticatedRequest = Depends(get_authenticated_request),
    db: AsyncSession = Depends(get_db),
):
    await ListingHandlers(db).sell(auth, ItemId(body.item_id))
    return {"message": "successful"}
