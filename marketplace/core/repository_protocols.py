"""Boundary Protocols - contracts between core and the persistent store.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - Repositories never commit; the handler that opened the session owns the transaction
    - Conditional writes return bool: True iff the predicate still held and one row changed
    - Generated ids come back from the INSERT that created the row

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass any object with the right methods
    - Async in Protocol: implementations do IO; the pure checks that consume their
      snapshots are never async themselves
"""

from typing import Protocol

from marketplace.core.domain_types import (
    CategoryId, CategorySnapshot, FolderId, FolderSnapshot, ItemDetail, ItemFields,
    ItemId, ItemSnapshot, ItemStatus, ItemSummary, SaleId, SaleRecord, UserId,
    UserSnapshot,
)


class UserRepository(Protocol):
    """Contract for user persistence."""
    async def add(self, name: str, password_hash: str) -> UserId: ...
    async def get(self, user_id: UserId) -> UserSnapshot | None: ...
    async def get_password_hash(self, user_id: UserId) -> str | None: ...
    async def credit(self, user_id: UserId, amount: int) -> bool: ...
    async def debit_if_sufficient(self, user_id: UserId, amount: int) -> bool: ...


class ItemRepository(Protocol):
    """Contract for item persistence, including the image blob keyed by item id."""
    async def add(
        self, seller_id: UserId, fields: ItemFields, image: bytes, status: ItemStatus,
    ) -> ItemId: ...
    async def get(self, item_id: ItemId) -> ItemSnapshot | None: ...
    async def get_detail(self, item_id: ItemId) -> ItemDetail | None: ...
    async def get_image(self, item_id: ItemId) -> bytes | None: ...
    async def update_fields(
        self, item_id: ItemId, seller_id: UserId, fields: ItemFields, image: bytes,
        expected_status: ItemStatus,
    ) -> bool: ...
    async def transition_status(
        self, item_id: ItemId, from_status: ItemStatus, to_status: ItemStatus,
    ) -> bool: ...
    async def list_on_sale(self) -> list[ItemSummary]: ...
    async def list_by_seller(self, seller_id: UserId) -> list[ItemSummary]: ...
    async def search_on_sale(self, word: str) -> list[ItemSummary]: ...


class CategoryRepository(Protocol):
    """Contract for read-only category reference data."""
    async def get(self, category_id: CategoryId) -> CategorySnapshot | None: ...
    async def list_all(self) -> list[CategorySnapshot]: ...


class FavoriteRepository(Protocol):
    """Contract for favorite folders and their item associations."""
    async def add_folder(self, user_id: UserId, name: str) -> FolderId: ...
    async def get_folder(self, folder_id: FolderId) -> FolderSnapshot | None: ...
    async def list_folders(self, user_id: UserId) -> list[FolderSnapshot]: ...
    async def add_item(self, folder_id: FolderId, item_id: ItemId) -> bool: ...
    async def list_items(self, folder_id: FolderId) -> list[ItemSummary]: ...
    async def remove_item(self, folder_id: FolderId, item_id: ItemId) -> bool: ...


class SaleRepository(Protocol):
    """Contract for the purchase history."""
    async def record(
        self, item_id: ItemId, buyer_id: UserId, seller_id: UserId, price: int,
    ) -> SaleId: ...
    async def list_by_buyer(self, buyer_id: UserId) -> list[SaleRecord]: ...
