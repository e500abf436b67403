"""Domain Types - verifies identity wrappers, status enum and frozen snapshots."""

import dataclasses

import pytest

from marketplace.core.domain_types import (
    AuthenticatedRequest, ItemAction, ItemStatus, UserId, UserSnapshot,
)


def test_item_status_values_match_stored_strings():
    assert ItemStatus.INITIAL.value == "initial"
    assert ItemStatus.ON_SALE.value == "on_sale"
    assert ItemStatus.SOLD_OUT.value == "sold_out"
    assert ItemStatus("on_sale") is ItemStatus.ON_SALE


def test_item_status_has_three_states():
    assert len(ItemStatus) == 3


def test_item_actions():
    assert set(ItemAction) == {ItemAction.SELL, ItemAction.PURCHASE}


def test_snapshots_are_frozen():
    snap = UserSnapshot(id=UserId(1), name="a", balance=0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.balance = 10  # type: ignore[misc]


def test_authenticated_request_compares_by_value():
    assert AuthenticatedRequest(UserId(3)) == AuthenticatedRequest(UserId(3))
