"""Purchase Routes - buy an item, list what the caller bought."""

import logging

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.api.dependencies import get_authenticated_request
from marketplace.core.domain_types import MAX_ID, AuthenticatedRequest, ItemId
from marketplace.infrastructure.database import get_db
from marketplace.schemas.item import PurchaseResponse
from marketplace.services.handle_purchase import PurchaseHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["purchases"])


@router.post("/purchase/{item_id}")
async def purchase(
    item_id: int = Path(ge=1, le=MAX_ID),
    auth: AuthenticatedRequest = Depends(get_authenticated_request),
    db: AsyncSession = Depends(get_db),
):
    await PurchaseHandlers(db).purchase(auth, ItemId(item_id))
    return {"message": "successful"}


@router.get("/purchases", response_model=list[PurchaseResponse])
async def list_purchases(
    auth: AuthenticatedRequest = Depends(get_authenticated_request),
    db: AsyncSession = Depends(get_db),
):
    records = await PurchaseHandlers(db).list_purchases(auth)
    return [PurchaseResponse.from_record(r) for r in records]
