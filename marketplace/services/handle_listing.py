"""Listing Handlers - add, update, sell, and the read projections over items.

Invariants:
    - add_item creates the item in initial status, after the category is confirmed to exist;
      an unknown category persists nothing
    - update_item and sell only change what they name: never seller, update never status
    - sell is a conditional initial -> on_sale write; losing a race is PreconditionFailedError
    - Images are stored verbatim, up to Settings.max_image_bytes
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.config import get_settings
from marketplace.core.domain_types import (
    MAX_ID, AuthenticatedRequest, CategorySnapshot, ItemDetail, ItemFields, ItemId,
    ItemStatus, ItemSummary, UserId,
)
from marketplace.core.errors import (
    ErrorContext, InvalidArgumentError, PreconditionFailedError, ResourceNotFoundError,
)
from marketplace.core.item_transitions import check_can_sell, check_can_update
from marketplace.core.ledger import MAX_BALANCE
from marketplace.core.repository_protocols import (
    CategoryRepository, ItemRepository, UserRepository,
)
from marketplace.infrastructure.database import atomic
from marketplace.repositories.category_repository import SqlCategoryRepository
from marketplace.repositories.item_repository import SqlItemRepository
from marketplace.repositories.user_repository import SqlUserRepository

logger = logging.getLogger(__name__)


def validate_item_fields(fields: ItemFields) -> None:
    if not fields.name.strip():
        raise InvalidArgumentError("Item name is required", field="name")
    if not 0 < fields.price <= MAX_BALANCE:
        raise InvalidArgumentError(
            f"Price must be between 1 and {MAX_BALANCE}", field="price",
        )
    if not 0 < fields.category_id <= MAX_ID:
        raise InvalidArgumentError("Invalid category id", field="category_id")


def validate_image(image: bytes, max_bytes: int) -> None:
    if len(image) > max_bytes:
        raise InvalidArgumentError(
            f"Image exceeds {max_bytes} bytes", field="image",
        )


class ListingHandlers:
    """Listing CRUD, the sell transition, and browse/search."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.items: ItemRepository = SqlItemRepository(db)
        self.categories: CategoryRepository = SqlCategoryRepository(db)
        self.users: UserRepository = SqlUserRepository(db)

    async def _require_category(self, fields: ItemFields) -> None:
        if await self.categories.get(fields.category_id) is None:
            raise InvalidArgumentError("Invalid category id", field="category_id")

    async def add_item(
        self, auth: AuthenticatedRequest, fields: ItemFields, image: bytes,
    ) -> ItemId:
        validate_item_fields(fields)
        validate_image(image, get_settings().max_image_bytes)
        async with atomic(self.db):
            await self._require_category(fields)
            item_id = await self.items.add(
                auth.user_id, fields, image, ItemStatus.INITIAL,
            )
        logger.info(
            f"Item {item_id} listed",
            extra={"user_id": auth.user_id, "item_id": item_id},
        )
        return item_id

    async def update_item(
        self,
        auth: AuthenticatedRequest,
        item_id: ItemId,
        fields: ItemFields,
        image: bytes,
    ) -> ItemId:
        ctx = ErrorContext(user_id=auth.user_id, item_id=item_id)
        validate_item_fields(fields)
        validate_image(image, get_settings().max_image_bytes)
        async with atomic(self.db):
            item = await self.items.get(item_id)
            if item is None:
                raise ResourceNotFoundError("Item", item_id, ctx)
            check_can_update(item, auth.user_id)
            await self._require_category(fields)
            updated = await self.items.update_fields(
                item.id, auth.user_id, fields, image, expected_status=ItemStatus.INITIAL,
            )
            if not updated:
                raise PreconditionFailedError(
                    "Item changed status while being updated", ctx,
                )
        logger.info(
            f"Item {item_id} updated",
            extra={"user_id": auth.user_id, "item_id": item_id},
        )
        return item_id

    async def sell(self, auth: AuthenticatedRequest, item_id: ItemId) -> None:
        """Put an initial item on sale."""
        ctx = ErrorContext(user_id=auth.user_id, item_id=item_id)
        async with atomic(self.db):
            item = await self.items.get(item_id)
            if item is None:
                raise ResourceNotFoundError("Item", item_id, ctx)
            target = check_can_sell(item, auth.user_id)
            if not await self.items.transition_status(item.id, item.status, target):
                raise PreconditionFailedError("Item status must be initial", ctx)
        logger.info(
            f"Item {item_id} on sale",
            extra={"user_id": auth.user_id, "item_id": item_id},
        )

    async def get_item(self, item_id: ItemId) -> ItemDetail:
        detail = await self.items.get_detail(item_id)
        if detail is None:
            raise ResourceNotFoundError("Item", item_id)
        return detail

    async def get_image(self, item_id: ItemId) -> bytes:
        image = await self.items.get_image(item_id)
        if image is None:
            raise ResourceNotFoundError("Item", item_id)
        return image

    async def list_on_sale(self) -> list[ItemSummary]:
        return await self.items.list_on_sale()

    async def list_by_seller(self, seller_id: UserId) -> list[ItemSummary]:
        if await self.users.get(seller_id) is None:
            raise ResourceNotFoundError("User", seller_id)
        return await self.items.list_by_seller(seller_id)

    async def search(self, name: str) -> list[ItemSummary]:
        """On-sale items whose name contains `name`, most recently updated first."""
        return await self.items.search_on_sale(name)

    async def list_categories(self) -> list[CategorySnapshot]:
        return await self.categories.list_all()
