"""Ledger - verifies deposit validation, and the overflow guard."""

import pytest

from marketplace.core.errors import InvalidArgumentError
from marketplace.core.ledger import (
    MAX_BALANCE, has_sufficient_funds, validate_credit, validate_deposit,
)


def test_zero_and_positive_deposits_accepted():
    validate_deposit(0)
    validate_deposit(1_000)


def test_negative_deposit_rejected():
    with pytest.raises(InvalidArgumentError) as exc:
        validate_deposit(-1)
    assert exc.value.field == "balance"
    assert exc.value.http_status == 400


def test_credit_up_to_max_balance_accepted():
    validate_credit(MAX_BALANCE - 10, 10)


def test_credit_past_max_balance_rejected():
    with pytest.raises(InvalidArgumentError):
        validate_credit(MAX_BALANCE - 10, 11)


def test_sufficient_funds_is_inclusive():
    assert has_sufficient_funds(100, 100)
    assert has_sufficient_funds(101, 100)
    assert not has_sufficient_funds(99, 100)
