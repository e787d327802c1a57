from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import EnrollmentStatus, PaymentStatus, PaymentType
from .payment import final_total


@dataclass(frozen=True)
class Enrollment:
    """One student's registration in one class.

    ``payment_status`` is always the value derived from the three money fields;
    repositories only ever persist it alongside them.
    """

    enrollment_id: int
    student_id: int
    class_id: int
    start_session: int
    total_amount: Decimal
    discount: Decimal
    paid_amount: Decimal
    payment_status: PaymentStatus
    payment_type: PaymentType
    enrollment_status: EnrollmentStatus = EnrollmentStatus.ACTIVE
    term: Optional[str] = None
    payment_expired_date: Optional[date] = None
    created_by: Optional[str] = None
    enrolled_at: Optional[datetime] = None

    @property
    def final_total(self) -> Decimal:
        return final_total(self.total_amount, self.discount)

    @property
    def balance_due(self) -> Decimal:
        return max(Decimal("0.00"), self.final_total - self.paid_amount)


@dataclass(frozen=True)
class NewEnrollment:
    student_id: int
    class_id: int
    start_session: int
    total_amount: Decimal
    discount: Decimal
    paid_amount: Decimal
    payment_status: PaymentStatus
    payment_type: PaymentType
    term: Optional[str] = None
    payment_expired_date: Optional[date] = None
