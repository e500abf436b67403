"""Listing Handlers - add, update, sell and the browse/search projections.

Invariants:
    - Unknown category persists nothing
    - add_item -> get_item returns exactly what was stored
    - sell is seller-only and initial-only; update is seller-only and initial-only
    - On-sale listing and search: most recently updated first; seller listing: creation order
"""

from dataclasses import replace

import pytest
from sqlalchemy import select

from marketplace.core.domain_types import (
    MAX_ID, CategoryId, ItemFields, ItemId, ItemStatus, UserId,
)
from marketplace.core.errors import (
    ForbiddenError, InvalidArgumentError, PreconditionFailedError, ResourceNotFoundError,
)
from marketplace.core.ledger import MAX_BALANCE
from marketplace.models.item import Item
from marketplace.repositories.item_repository import SqlItemRepository
from marketplace.services.handle_listing import ListingHandlers
from tests.helpers import JPEG_BYTES, auth_for


def _fields(name="desk lamp", price=1200, category_id=1, description="brass") -> ItemFields:
    return ItemFields(
        name=name, price=price, description=description, category_id=CategoryId(category_id),
    )


async def test_add_then_get_round_trips(test_db, categories, make_user):
    seller = await make_user("seller")
    handlers = ListingHandlers(test_db)

    item_id = await handlers.add_item(auth_for(seller), _fields(), JPEG_BYTES)
    detail = await handlers.get_item(item_id)

    assert detail.name == "desk lamp"
    assert detail.price == 1200
    assert detail.description == "brass"
    assert detail.category_id == 1
    assert detail.category_name == "fashion"
    assert detail.seller_id == seller
    assert detail.status == ItemStatus.INITIAL
    assert await handlers.get_image(item_id) == JPEG_BYTES


async def test_unknown_category_persists_nothing(test_db, categories, make_user):
    seller = await make_user("seller")

    with pytest.raises(InvalidArgumentError):
        await ListingHandlers(test_db).add_item(
            auth_for(seller), _fields(category_id=99), JPEG_BYTES,
        )

    rows = (await test_db.execute(select(Item.id))).all()
    assert rows == []


@pytest.mark.parametrize("fields", [
    _fields(name="   "),
    _fields(price=0),
    _fields(price=-5),
    _fields(price=MAX_BALANCE + 1),
    _fields(price=2**64),
    _fields(category_id=MAX_ID + 1),
])
async def test_invalid_fields_rejected(test_db, categories, make_user, fields):
    seller = await make_user("seller")
    with pytest.raises(InvalidArgumentError):
        await ListingHandlers(test_db).add_item(auth_for(seller), fields, JPEG_BYTES)


async def test_oversized_image_rejected(test_db, categories, make_user, monkeypatch):
    from marketplace.config import get_settings
    monkeypatch.setattr(get_settings(), "max_image_bytes", 4)
    seller = await make_user("seller")

    with pytest.raises(InvalidArgumentError) as exc:
        await ListingHandlers(test_db).add_item(auth_for(seller), _fields(), b"12345")
    assert exc.value.field == "image"


async def test_get_unknown_item_is_not_found(test_db):
    with pytest.raises(ResourceNotFoundError):
        await ListingHandlers(test_db).get_item(ItemId(404))
    with pytest.raises(ResourceNotFoundError):
        await ListingHandlers(test_db).get_image(ItemId(404))


# --- sell ----------------------------------------------------------------------

async def test_sell_moves_initial_to_on_sale(test_db, make_user, make_item):
    seller = await make_user("seller")
    item_id = await make_item(seller)

    await ListingHandlers(test_db).sell(auth_for(seller), ItemId(item_id))

    detail = await ListingHandlers(test_db).get_item(ItemId(item_id))
    assert detail.status == ItemStatus.ON_SALE


async def test_sell_changes_only_the_status(test_db, make_user, make_item):
    seller = await make_user("seller")
    item_id = await make_item(seller, name="kettle", price=350, category_id=2)
    repo = SqlItemRepository(test_db)
    before = await repo.get(ItemId(item_id))

    handlers = ListingHandlers(test_db)
    await handlers.sell(auth_for(seller), ItemId(item_id))

    after = await repo.get(ItemId(item_id))
    assert after == replace(before, status=ItemStatus.ON_SALE)
    assert await handlers.get_image(ItemId(item_id)) == JPEG_BYTES


async def test_sell_by_non_seller_forbidden(test_db, make_user, make_item):
    seller = await make_user("seller")
    other = await make_user("other")
    item_id = await make_item(seller)

    with pytest.raises(ForbiddenError):
        await ListingHandlers(test_db).sell(auth_for(other), ItemId(item_id))


@pytest.mark.parametrize("status", [ItemStatus.ON_SALE, ItemStatus.SOLD_OUT])
async def test_sell_twice_or_after_sale_fails(test_db, make_user, make_item, status):
    seller = await make_user("seller")
    item_id = await make_item(seller, status=status)

    with pytest.raises(PreconditionFailedError):
        await ListingHandlers(test_db).sell(auth_for(seller), ItemId(item_id))


async def test_sell_unknown_item_not_found(test_db, make_user):
    seller = await make_user("seller")
    with pytest.raises(ResourceNotFoundError):
        await ListingHandlers(test_db).sell(auth_for(seller), ItemId(12345))


# --- update --------------------------------------------------------------------

async def test_update_replaces_fields_and_image(test_db, make_user, make_item):
    seller = await make_user("seller")
    item_id = await make_item(seller)
    handlers = ListingHandlers(test_db)

    await handlers.update_item(
        auth_for(seller), ItemId(item_id),
        _fields(name="novel", price=800, category_id=2, description="paperback"),
        b"new-image",
    )

    detail = await handlers.get_item(ItemId(item_id))
    assert (detail.name, detail.price, detail.category_name) == ("novel", 800, "books")
    assert detail.seller_id == seller
    assert detail.status == ItemStatus.INITIAL
    assert await handlers.get_image(ItemId(item_id)) == b"new-image"


async def test_update_by_non_seller_forbidden(test_db, make_user, make_item):
    seller = await make_user("seller")
    other = await make_user("other")
    item_id = await make_item(seller)

    with pytest.raises(ForbiddenError):
        await ListingHandlers(test_db).update_item(
            auth_for(other), ItemId(item_id), _fields(), JPEG_BYTES,
        )


async def test_update_after_listing_fails(test_db, make_user, make_item):
    seller = await make_user("seller")
    item_id = await make_item(seller, status=ItemStatus.ON_SALE)

    with pytest.raises(PreconditionFailedError):
        await ListingHandlers(test_db).update_item(
            auth_for(seller), ItemId(item_id), _fields(), JPEG_BYTES,
        )


async def test_update_unknown_category_keeps_item(test_db, make_user, make_item):
    seller = await make_user("seller")
    item_id = await make_item(seller, name="original")

    with pytest.raises(InvalidArgumentError):
        await ListingHandlers(test_db).update_item(
            auth_for(seller), ItemId(item_id), _fields(category_id=77), JPEG_BYTES,
        )
    detail = await ListingHandlers(test_db).get_item(ItemId(item_id))
    assert detail.name == "original"


# --- projections ---------------------------------------------------------------

async def test_on_sale_listing_most_recently_sold_first(test_db, make_user, make_item):
    seller = await make_user("seller")
    a = await make_item(seller, name="a")
    b = await make_item(seller, name="b")
    await make_item(seller, name="never listed")
    handlers = ListingHandlers(test_db)

    await handlers.sell(auth_for(seller), ItemId(b))
    await handlers.sell(auth_for(seller), ItemId(a))

    names = [s.name for s in await handlers.list_on_sale()]
    assert names == ["a", "b"]


async def test_seller_listing_in_creation_order_all_statuses(test_db, make_user, make_item):
    seller = await make_user("seller")
    other = await make_user("other")
    await make_item(seller, name="one", status=ItemStatus.SOLD_OUT)
    await make_item(other, name="not mine")
    await make_item(seller, name="two", status=ItemStatus.ON_SALE)
    await make_item(seller, name="three")

    items = await ListingHandlers(test_db).list_by_seller(seller)
    assert [i.name for i in items] == ["one", "two", "three"]
    assert items[0].category_name == "fashion"


async def test_seller_listing_unknown_user_not_found(test_db):
    with pytest.raises(ResourceNotFoundError):
        await ListingHandlers(test_db).list_by_seller(UserId(999))


async def test_search_matches_substring_of_on_sale_items(test_db, make_user, make_item):
    seller = await make_user("seller")
    await make_item(seller, name="red chair", status=ItemStatus.ON_SALE)
    await make_item(seller, name="armchair", status=ItemStatus.ON_SALE)
    await make_item(seller, name="chair draft", status=ItemStatus.INITIAL)
    await make_item(seller, name="table", status=ItemStatus.ON_SALE)

    names = {s.name for s in await ListingHandlers(test_db).search("chair")}
    assert names == {"red chair", "armchair"}


async def test_search_treats_wildcards_literally(test_db, make_user, make_item):
    seller = await make_user("seller")
    await make_item(seller, name="50% off hat", status=ItemStatus.ON_SALE)
    await make_item(seller, name="500 hats", status=ItemStatus.ON_SALE)
    await make_item(seller, name="snake_case mug", status=ItemStatus.ON_SALE)
    await make_item(seller, name="snakeXcase mug", status=ItemStatus.ON_SALE)

    handlers = ListingHandlers(test_db)
    assert [s.name for s in await handlers.search("50%")] == ["50% off hat"]
    assert [s.name for s in await handlers.search("snake_case")] == ["snake_case mug"]


async def test_list_categories(test_db, categories):
    cats = await ListingHandlers(test_db).list_categories()
    assert [(c.id, c.name) for c in cats] == [(1, "fashion"), (2, "books")]
