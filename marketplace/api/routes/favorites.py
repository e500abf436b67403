"""Favorite Routes - folders and filed items, all scoped to the caller."""

import logging

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.api.dependencies import get_authenticated_request
from marketplace.core.domain_types import (
    MAX_ID, AuthenticatedRequest, FolderId, ItemId,
)
from marketplace.infrastructure.database import get_db
from marketplace.schemas.favorite import (
    AddFavoriteRequest, AddFolderRequest, FolderResponse,
)
from marketplace.schemas.item import ItemSummaryResponse
from marketplace.services.handle_favorites import FavoriteHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["favorites"])


@router.get("/favorite-folders", response_model=list[FolderResponse])
async def list_folders(
    auth: AuthenticatedRequest = Depends(get_authenticated_request),
    db: AsyncSession = Depends(get_db),
):
    folders = await FavoriteHandlers(db).list_folders(auth)
    return [FolderResponse.from_snapshot(f) for f in folders]


@router.post(
    "/favorite-folders", response_model=FolderResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_folder(
    body: AddFolderRequest,
    auth: AuthenticatedRequest = Depends(get_authenticated_request),
    db: AsyncSession = Depends(get_db),
):
    folder_id = await FavoriteHandlers(db).add_folder(auth, body.name)
    return FolderResponse(id=folder_id, user_id=auth.user_id, name=body.name)


@router.post("/favorites")
async def add_item_to_folder(
    body: AddFavoriteRequest,
    auth: AuthenticatedRequest = Depends(get_authenticated_request),
    db: AsyncSession = Depends(get_db),
):
    await FavoriteHandlers(db).add_item_to_folder(
        auth, ItemId(body.item_id), FolderId(body.folder_id),
    )
    return {"message": "successful"}


@router.get(
    "/favorite-folders/{folder_id}/items",
    response_model=list[ItemSummaryResponse],
)
async def list_favorite_items(
    folder_id: int = Path(ge=1, le=MAX_ID),
    auth: AuthenticatedRequest = Depends(get_authenticated_request),
    db: AsyncSession = Depends(get_db),
):
    items = await FavoriteHandlers(db).list_favorite_items(auth, FolderId(folder_id))
    return [ItemSummaryResponse.from_summary(i) for i in items]


@router.delete("/favorite-folders/{folder_id}/items/{item_id}")
async def remove_favorite(
    folder_id: int = Path(ge=1, le=MAX_ID),
    item_id: int = Path(ge=1, le=MAX_ID),
    auth: AuthenticatedRequest = Depends(get_authenticated_request),
    db: AsyncSession = Depends(get_db),
):
    await FavoriteHandlers(db).remove_favorite(auth, ItemId(item_id), FolderId(folder_id))
    return {"message": "successful"}
