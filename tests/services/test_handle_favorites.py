"""Favorite Handlers - folder ownership, idempotent filing, listing and removal."""

import asyncio

import pytest
from sqlalchemy import func, select

from marketplace.core.domain_types import FolderId, ItemId
from marketplace.core.errors import (
    ForbiddenError, InvalidArgumentError, ResourceNotFoundError,
)
from marketplace.models.favorite import FavoriteItem
from marketplace.repositories.favorite_repository import SqlFavoriteRepository
from marketplace.services.handle_favorites import FavoriteHandlers
from tests.helpers import auth_for


async def test_folders_listed_per_user(test_db, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    handlers = FavoriteHandlers(test_db)

    await handlers.add_folder(auth_for(alice), "wishlist")
    await handlers.add_folder(auth_for(alice), "wishlist")
    await handlers.add_folder(auth_for(bob), "gifts")

    folders = await handlers.list_folders(auth_for(alice))
    assert [f.name for f in folders] == ["wishlist", "wishlist"]
    assert all(f.user_id == alice for f in folders)


async def test_blank_folder_name_rejected(test_db, make_user):
    alice = await make_user("alice")
    with pytest.raises(InvalidArgumentError):
        await FavoriteHandlers(test_db).add_folder(auth_for(alice), "  ")


async def test_filing_is_idempotent_and_ordered(test_db, make_user, make_item):
    alice = await make_user("alice")
    seller = await make_user("seller")
    first = await make_item(seller, name="first")
    second = await make_item(seller, name="second")
    handlers = FavoriteHandlers(test_db)
    folder = await handlers.add_folder(auth_for(alice), "wishlist")

    await handlers.add_item_to_folder(auth_for(alice), ItemId(second), folder)
    await handlers.add_item_to_folder(auth_for(alice), ItemId(first), folder)
    await handlers.add_item_to_folder(auth_for(alice), ItemId(second), folder)

    items = await handlers.list_favorite_items(auth_for(alice), folder)
    assert [i.name for i in items] == ["second", "first"]
    assert items[0].category_name == "fashion"


async def test_other_users_folder_is_forbidden(test_db, make_user, make_item):
    alice = await make_user("alice")
    mallory = await make_user("mallory")
    item_id = await make_item(alice)
    handlers = FavoriteHandlers(test_db)
    folder = await handlers.add_folder(auth_for(alice), "mine")

    with pytest.raises(ForbiddenError):
        await handlers.add_item_to_folder(auth_for(mallory), ItemId(item_id), folder)
    with pytest.raises(ForbiddenError):
        await handlers.list_favorite_items(auth_for(mallory), folder)
    with pytest.raises(ForbiddenError):
        await handlers.remove_favorite(auth_for(mallory), ItemId(item_id), folder)


async def test_unknown_folder_or_item_not_found(test_db, make_user, make_item):
    alice = await make_user("alice")
    item_id = await make_item(alice)
    handlers = FavoriteHandlers(test_db)
    folder = await handlers.add_folder(auth_for(alice), "mine")

    with pytest.raises(ResourceNotFoundError):
        await handlers.add_item_to_folder(auth_for(alice), ItemId(item_id), FolderId(999))
    with pytest.raises(ResourceNotFoundError):
        await handlers.add_item_to_folder(auth_for(alice), ItemId(999), folder)


async def test_remove_favorite_and_remove_absent(test_db, make_user, make_item):
    alice = await make_user("alice")
    item_id = await make_item(alice)
    handlers = FavoriteHandlers(test_db)
    folder = await handlers.add_folder(auth_for(alice), "mine")
    await handlers.add_item_to_folder(auth_for(alice), ItemId(item_id), folder)

    await handlers.remove_favorite(auth_for(alice), ItemId(item_id), folder)
    await handlers.remove_favorite(auth_for(alice), ItemId(item_id), folder)

    assert await handlers.list_favorite_items(auth_for(alice), folder) == []


async def test_duplicate_insert_reports_false_and_keeps_session_usable(
    test_db, make_user, make_item,
):
    alice = await make_user("alice")
    item_id = await make_item(alice)
    folder = await FavoriteHandlers(test_db).add_folder(auth_for(alice), "mine")
    repo = SqlFavoriteRepository(test_db)

    assert await repo.add_item(folder, ItemId(item_id)) is True
    assert await repo.add_item(folder, ItemId(item_id)) is False
    await test_db.commit()

    items = await repo.list_items(folder)
    assert [i.id for i in items] == [item_id]


async def test_concurrent_filing_of_same_item_keeps_one_row(
    test_db, test_session_factory, make_user, make_item,
):
    alice = await make_user("alice")
    item_id = await make_item(alice)
    folder = await FavoriteHandlers(test_db).add_folder(auth_for(alice), "mine")

    async def attempt():
        async with test_session_factory() as session:
            await FavoriteHandlers(session).add_item_to_folder(
                auth_for(alice), ItemId(item_id), folder,
            )

    results = await asyncio.gather(attempt(), attempt(), return_exceptions=True)
    assert results == [None, None]

    async with test_session_factory() as session:
        count = await session.scalar(
            select(func.count()).select_from(FavoriteItem)
            .where(FavoriteItem.folder_id == folder),
        )
    assert count == 1
