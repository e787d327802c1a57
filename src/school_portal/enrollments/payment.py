from __future__ import annotations

from decimal import Decimal
from typing import Any

from ..common.money import to_money
from ..core.enums import PaymentStatus


def final_total(total: Any, discount: Any) -> Decimal:
    """Amount actually owed after discount, never below zero."""
    return max(Decimal("0.00"), to_money(total) - to_money(discount))


def derive_payment_status(total: Any, discount: Any, paid: Any) -> PaymentStatus:
    """Binary paid/unpaid classification. There is no partially-paid state.

    A free enrollment (discount covers the total) is always PAID.
    """
    owed = final_total(total, discount)
    if owed == 0:
        return PaymentStatus.PAID
    return PaymentStatus.PAID if to_money(paid) >= owed else PaymentStatus.UNPAID
