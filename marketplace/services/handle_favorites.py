"""Favorite Handlers - folders and the items filed into them.

Invariants:
    - Folder names are not unique per user
    - Only the folder's owner may add to, list, or remove from it (ForbiddenError otherwise)
    - Filing the same item twice in one folder is a no-op; removing an absent item succeeds
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.domain_types import (
    AuthenticatedRequest, FolderId, FolderSnapshot, ItemId, ItemSummary,
)
from marketplace.core.errors import (
    ErrorContext, ForbiddenError, InvalidArgumentError, ResourceNotFoundError,
)
from marketplace.core.repository_protocols import FavoriteRepository, ItemRepository
from marketplace.infrastructure.database import atomic
from marketplace.repositories.favorite_repository import SqlFavoriteRepository
from marketplace.repositories.item_repository import SqlItemRepository

logger = logging.getLogger(__name__)


class FavoriteHandlers:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.favorites: FavoriteRepository = SqlFavoriteRepository(db)
        self.items: ItemRepository = SqlItemRepository(db)

    async def _owned_folder(
        self, auth: AuthenticatedRequest, folder_id: FolderId,
    ) -> FolderSnapshot:
        folder = await self.favorites.get_folder(folder_id)
        if folder is None:
            raise ResourceNotFoundError("Folder", folder_id)
        if folder.user_id != auth.user_id:
            raise ForbiddenError(
                "This folder does not belong to you", ErrorContext(user_id=auth.user_id),
            )
        return folder

    async def add_folder(self, auth: AuthenticatedRequest, name: str) -> FolderId:
        if not name.strip():
            raise InvalidArgumentError("Folder name is required", field="name")
        async with atomic(self.db):
            folder_id = await self.favorites.add_folder(auth.user_id, name)
        logger.info(
            f"Folder {folder_id} created",
            extra={"user_id": auth.user_id, "folder_id": folder_id},
        )
        return folder_id

    async def list_folders(self, auth: AuthenticatedRequest) -> list[FolderSnapshot]:
        return await self.favorites.list_folders(auth.user_id)

    async def add_item_to_folder(
        self, auth: AuthenticatedRequest, item_id: ItemId, folder_id: FolderId,
    ) -> None:
        async with atomic(self.db):
            await self._owned_folder(auth, folder_id)
            if await self.items.get(item_id) is None:
                raise ResourceNotFoundError("Item", item_id)
            added = await self.favorites.add_item(folder_id, item_id)
        if added:
            logger.info(
                f"Item {item_id} filed in folder {folder_id}",
                extra={"user_id": auth.user_id, "item_id": item_id, "folder_id": folder_id},
            )

    async def list_favorite_items(
        self, auth: AuthenticatedRequest, folder_id: FolderId,
    ) -> list[ItemSummary]:
        await self._owned_folder(auth, folder_id)
        return await self.favorites.list_items(folder_id)

    async def remove_favorite(
        self, auth: AuthenticatedRequest, item_id: ItemId, folder_id: FolderId,
    ) -> None:
        async with atomic(self.db):
            await self._owned_folder(auth, folder_id)
            await self.favorites.remove_item(folder_id, item_id)
