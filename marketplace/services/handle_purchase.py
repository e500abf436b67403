"""Purchase Handlers - purchase and purchase history.

Invariants:
    - A purchase is ONE transaction: item status, buyer debit, seller credit and the Sale
      record commit together or not at all
    - Display reads (item, buyer) feed the pure checks; every write re-checks its own
      predicate in the store (status still on_sale, balance still >= price)
    - Of N concurrent purchases of one item exactly one claims it; the rest get
      PreconditionFailedError and leave every balance untouched
    - Seller is credited exactly once, with exactly the price the buyer was debited

Design Decisions:
    - Claim the item first (conditional on_sale -> sold_out), then move money: the losing
      side of a race stops before touching any balance
    - Seller re-read inside the transaction, right before the credit: a stale display read
      is never written back
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.domain_types import (
    AuthenticatedRequest, ItemId, ItemStatus, SaleRecord,
)
from marketplace.core.errors import (
    ErrorContext, InsufficientFundsError, InvalidArgumentError,
    PreconditionFailedError, ResourceNotFoundError,
)
from marketplace.core.item_transitions import check_can_purchase
from marketplace.core.repository_protocols import (
    ItemRepository, SaleRepository, UserRepository,
)
from marketplace.infrastructure.database import atomic
from marketplace.repositories.item_repository import SqlItemRepository
from marketplace.repositories.sale_repository import SqlSaleRepository
from marketplace.repositories.user_repository import SqlUserRepository

logger = logging.getLogger(__name__)


class PurchaseHandlers:
    """Purchase flow over the items, users and sales tables."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.items: ItemRepository = SqlItemRepository(db)
        self.users: UserRepository = SqlUserRepository(db)
        self.sales: SaleRepository = SqlSaleRepository(db)

    async def purchase(self, auth: AuthenticatedRequest, item_id: ItemId) -> None:
        """Buy an on-sale item: mark it sold_out and move its price from buyer to seller."""
        ctx = ErrorContext(user_id=auth.user_id, item_id=item_id)

        async with atomic(self.db):
            item = await self.items.get(item_id)
            if item is None:
                raise ResourceNotFoundError("Item", item_id, ctx)
            buyer = await self.users.get(auth.user_id)
            if buyer is None:
                raise ResourceNotFoundError("User", auth.user_id, ctx)

            target = check_can_purchase(item, buyer)

            claimed = await self.items.transition_status(
                item.id, ItemStatus.ON_SALE, target,
            )
            if not claimed:
                logger.warning(
                    "Purchase lost race: item no longer on sale",
                    extra={"user_id": buyer.id, "item_id": item.id},
                )
                raise PreconditionFailedError("Item is no longer on sale", ctx)

            debited = await self.users.debit_if_sufficient(buyer.id, item.price)
            if not debited:
                current = await self.users.get(buyer.id)
                balance = current.balance if current else 0
                raise InsufficientFundsError(balance, item.price, ctx)

            seller = await self.users.get(item.seller_id)
            if seller is None:
                raise ResourceNotFoundError("User", item.seller_id, ctx)
            credited = await self.users.credit(seller.id, item.price)
            if not credited:
                raise InvalidArgumentError(
                    "Seller balance would overflow", field="price", context=ctx,
                )

            await self.sales.record(item.id, buyer.id, seller.id, item.price)

        logger.info(
            f"Item {item.id} sold to user {buyer.id}",
            extra={"user_id": buyer.id, "item_id": item.id, "price": item.price},
        )

    async def list_purchases(self, auth: AuthenticatedRequest) -> list[SaleRecord]:
        """Purchase history of the caller, newest first."""
        return await self.sales.list_by_buyer(auth.user_id)
