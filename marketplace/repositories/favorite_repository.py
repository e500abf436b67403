"""Favorite Repository - folders and the items filed into them.

Invariants:
    - add_item is idempotent: an existing (folder, item) pair is left alone and reported as False,
      even when two sessions file it at once (the unique constraint decides)
    - list_items returns each item once, in the order it was filed
    - remove_item reports whether a row was deleted; deleting nothing is not an error
"""

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.domain_types import (
    FolderId, FolderSnapshot, ItemId, ItemSummary, UserId,
)
from marketplace.models.category import Category
from marketplace.models.favorite import FavoriteFolder, FavoriteItem
from marketplace.models.item import Item


class SqlFavoriteRepository:
    """FavoriteRepository backed by favorite_folders and favorite_items."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add_folder(self, user_id: UserId, name: str) -> FolderId:
        folder = FavoriteFolder(user_id=user_id, name=name)
        self.db.add(folder)
        await self.db.flush()
        return FolderId(folder.id)

    async def get_folder(self, folder_id: FolderId) -> FolderSnapshot | None:
        result = await self.db.execute(
            select(FavoriteFolder.id, FavoriteFolder.user_id, FavoriteFolder.name)
            .where(FavoriteFolder.id == folder_id),
        )
        row = result.one_or_none()
        if row is None:
            return None
        return FolderSnapshot(
            id=FolderId(row.id), user_id=UserId(row.user_id), name=row.name,
        )

    async def list_folders(self, user_id: UserId) -> list[FolderSnapshot]:
        result = await self.db.execute(
            select(FavoriteFolder.id, FavoriteFolder.user_id, FavoriteFolder.name)
            .where(FavoriteFolder.user_id == user_id)
            .order_by(FavoriteFolder.id),
        )
        return [
            FolderSnapshot(id=FolderId(r.id), user_id=UserId(r.user_id), name=r.name)
            for r in result.all()
        ]

    async def add_item(self, folder_id: FolderId, item_id: ItemId) -> bool:
        """File item_id in folder_id; False when the pair was already filed.

        The insert runs in a savepoint so a concurrent duplicate only undoes
        itself, leaving the caller's transaction usable.
        """
        try:
            async with self.db.begin_nested():
                self.db.add(FavoriteItem(folder_id=folder_id, item_id=item_id))
                await self.db.flush()
        except IntegrityError:
            if await self._is_filed(folder_id, item_id):
                return False
            raise
        return True

    async def _is_filed(self, folder_id: FolderId, item_id: ItemId) -> bool:
        existing = await self.db.execute(
            select(FavoriteItem.id)
            .where(FavoriteItem.folder_id == folder_id)
            .where(FavoriteItem.item_id == item_id),
        )
        return existing.first() is not None

    async def list_items(self, folder_id: FolderId) -> list[ItemSummary]:
        result = await self.db.execute(
            select(
                Item.id, Item.name, Item.price, Category.name.label("category_name"),
            )
            .join(FavoriteItem, FavoriteItem.item_id == Item.id)
            .join(Category, Category.id == Item.category_id)
            .where(FavoriteItem.folder_id == folder_id)
            .order_by(FavoriteItem.id),
        )
        return [
            ItemSummary(
                id=ItemId(r.id), name=r.name, price=r.price,
                category_name=r.category_name,
            )
            for r in result.all()
        ]

    async def remove_item(self, folder_id: FolderId, item_id: ItemId) -> bool:
        result = await self.db.execute(
            delete(FavoriteItem)
            .where(FavoriteItem.folder_id == folder_id)
            .where(FavoriteItem.item_id == item_id)
            .execution_options(synchronize_session=False),
        )
        return result.rowcount > 0
