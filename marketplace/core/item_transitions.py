"""Item Status State Machine - gates every item lifecycle transition.

Invariants:
    - initial -> on_sale (sell, seller only) -> sold_out (purchase, non-seller only)
    - Strictly forward-only: nothing leaves sold_out
    - All checks are PURE: they read snapshots and raise, they never touch the store
    - Purchase check order: self-purchase, status, funds

Design Decisions:
    - Checks raise typed MarketplaceError subclasses: the shell re-raises them untouched
      and the API maps each kind to one status code
    - The shell still applies each transition as a conditional update; a passing check here
      is a point-in-time answer, the store has the final word
"""

from marketplace.core.domain_types import (
    ItemAction, ItemSnapshot, ItemStatus, UserId, UserSnapshot,
)
from marketplace.core.errors import (
    ErrorContext, ForbiddenError, InsufficientFundsError, PreconditionFailedError,
)
from marketplace.core.ledger import has_sufficient_funds


TRANSITIONS: dict[tuple[ItemStatus, ItemAction], ItemStatus] = {
    (ItemStatus.INITIAL, ItemAction.SELL): ItemStatus.ON_SALE,
    (ItemStatus.ON_SALE, ItemAction.PURCHASE): ItemStatus.SOLD_OUT,
}


def next_status(current: ItemStatus, action: ItemAction) -> ItemStatus:
    """Resolve the status an action leads to, or raise if the action is not allowed."""
    target = TRANSITIONS.get((current, action))
    if target is None:
        raise PreconditionFailedError(
            f"Cannot {action.value} an item in status '{current.value}'",
        )
    return target


def check_can_sell(item: ItemSnapshot, requester: UserId) -> ItemStatus:
    """Validate a sell request. Returns the target status."""
    ctx = ErrorContext(user_id=requester, item_id=item.id)
    if item.seller_id != requester:
        raise ForbiddenError("This item does not belong to you", ctx)
    if item.status != ItemStatus.INITIAL:
        raise PreconditionFailedError("Item status must be initial", ctx)
    return next_status(item.status, ItemAction.SELL)


def check_can_purchase(item: ItemSnapshot, buyer: UserSnapshot) -> ItemStatus:
    """Validate a purchase request. Returns the target status."""
    ctx = ErrorContext(user_id=buyer.id, item_id=item.id)
    if item.seller_id == buyer.id:
        raise PreconditionFailedError("This item is listed by you", ctx)
    if item.status != ItemStatus.ON_SALE:
        raise PreconditionFailedError("Item is not on sale", ctx)
    if not has_sufficient_funds(buyer.balance, item.price):
        raise InsufficientFundsError(buyer.balance, item.price, ctx)
    return next_status(item.status, ItemAction.PURCHASE)


def check_can_update(item: ItemSnapshot, requester: UserId) -> None:
    """Only the seller may edit a listing, and only before it goes on sale."""
    ctx = ErrorContext(user_id=requester, item_id=item.id)
    if item.seller_id != requester:
        raise ForbiddenError("You are not authorized to update this item", ctx)
    if item.status != ItemStatus.INITIAL:
        raise PreconditionFailedError("Only items in initial status can be updated", ctx)
