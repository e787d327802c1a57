from decimal import Decimal

import pytest

from school_portal.core.enums import PaymentStatus
from school_portal.enrollments.payment import derive_payment_status, final_total


@pytest.mark.parametrize(
    "total, discount, paid, expected",
    [
        ("100", "0", "100", PaymentStatus.PAID),
        ("100", "0", "99.99", PaymentStatus.UNPAID),
        ("100", "20", "80", PaymentStatus.PAID),
        ("100", "20", "79.99", PaymentStatus.UNPAID),
        ("100", "20", "150", PaymentStatus.PAID),
        ("0", "0", "0", PaymentStatus.PAID),
    ],
)
def test_paid_iff_paid_covers_total_minus_discount(total, discount, paid, expected):
    assert derive_payment_status(Decimal(total), Decimal(discount), Decimal(paid)) == expected


def test_full_discount_is_paid_regardless_of_paid_amount():
    assert derive_payment_status(Decimal("250"), Decimal("250"), Decimal("0")) == PaymentStatus.PAID


def test_final_total_never_negative():
    assert final_total(Decimal("10"), Decimal("25")) == Decimal("0.00")


def test_float_inputs_do_not_drift():
    # 0.1 + 0.2 style binary error must not flip the status
    assert derive_payment_status(0.3, 0, 0.1 + 0.2) == PaymentStatus.PAID
