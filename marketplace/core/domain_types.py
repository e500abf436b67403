"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - Identifiers are store-generated integers wrapped in NewType: never mix a UserId with an ItemId
    - Item lifecycle states are an Enum: no raw string matching
    - Snapshots are frozen: a read taken for display is never mutated in place
    - AuthenticatedRequest is produced only by the session service (infrastructure/tokens.py)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum for ItemStatus: serializes to JSON without custom encoders
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType


# --- Identity Types -----------------------------------------------------------

UserId = NewType("UserId", int)
ItemId = NewType("ItemId", int)
CategoryId = NewType("CategoryId", int)
FolderId = NewType("FolderId", int)
SaleId = NewType("SaleId", int)

# Ids live in 32-bit Integer primary-key columns
MAX_ID = 2**31 - 1


# --- Enums --------------------------------------------------------------------

class ItemStatus(str, Enum):
    """Item lifecycle states - maps to the items.status column."""
    INITIAL = "initial"
    ON_SALE = "on_sale"
    SOLD_OUT = "sold_out"


class ItemAction(str, Enum):
    """Actions that move an item through its lifecycle."""
    SELL = "sell"
    PURCHASE = "purchase"


# --- Capabilities & snapshots -------------------------------------------------

@dataclass(frozen=True)
class AuthenticatedRequest:
    """Verified caller identity, passed explicitly into every operation that has a requester."""
    user_id: UserId


@dataclass(frozen=True)
class UserSnapshot:
    id: UserId
    name: str
    balance: int


@dataclass(frozen=True)
class ItemSnapshot:
    id: ItemId
    name: str
    price: int
    description: str
    category_id: CategoryId
    seller_id: UserId
    status: ItemStatus


@dataclass(frozen=True)
class ItemFields:
    """Mutable listing fields supplied by the seller on add/update."""
    name: str
    price: int
    description: str
    category_id: CategoryId


@dataclass(frozen=True)
class ItemSummary:
    """List projection: item joined with its category name."""
    id: ItemId
    name: str
    price: int
    category_name: str


@dataclass(frozen=True)
class ItemDetail:
    """Single-item projection: item joined with its category."""
    id: ItemId
    name: str
    price: int
    description: str
    category_id: CategoryId
    category_name: str
    seller_id: UserId
    status: ItemStatus


@dataclass(frozen=True)
class CategorySnapshot:
    id: CategoryId
    name: str


@dataclass(frozen=True)
class FolderSnapshot:
    id: FolderId
    user_id: UserId
    name: str


@dataclass(frozen=True)
class SaleRecord:
    id: SaleId
    item_id: ItemId
    item_name: str
    buyer_id: UserId
    seller_id: UserId
    price: int
    created_at: datetime
