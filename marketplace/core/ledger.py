"""Ledger Arithmetic - pure balance rules for deposits, credits and purchases.

Invariants:
    - Balances and prices are non-negative integers in the smallest currency unit
    - MAX_BALANCE matches the BigInteger column: a credit past it is rejected, never wrapped
"""

from marketplace.core.errors import InvalidArgumentError


MAX_BALANCE: int = 2**63 - 1


def validate_deposit(amount: int) -> None:
    if amount < 0:
        raise InvalidArgumentError("Balance to add must not be negative", field="balance")


def validate_credit(balance: int, amount: int) -> None:
    """Reject credits that would overflow the balance column."""
    if balance + amount > MAX_BALANCE:
        raise InvalidArgumentError(
            f"Balance would exceed the maximum of {MAX_BALANCE}", field="balance",
        )


def has_sufficient_funds(balance: int, price: int) -> bool:
    return balance >= price
