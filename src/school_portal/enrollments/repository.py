from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import EnrollmentStatus, PaymentStatus
from .model import Enrollment, NewEnrollment


class EnrollmentRepository(Protocol):
    def get_by_id(self, enrollment_id: int) -> Optional[Enrollment]:
        raise NotImplementedError

    def list_filtered(self, *, class_id: Optional[int] = None, student_id: Optional[int] = None) -> Sequence[Enrollment]:
        raise NotImplementedError

    def create(self, enrollment: NewEnrollment, *, created_by: str, enrolled_at: datetime) -> int:
        raise NotImplementedError

    def update_financials(
        self,
        *,
        enrollment_id: int,
        total_amount: Decimal,
        discount: Decimal,
        paid_amount: Decimal,
        payment_status: PaymentStatus,
    ) -> bool:
        """Money fields and the derived status are always written together."""

        raise NotImplementedError

    def set_status(self, enrollment_id: int, *, status: EnrollmentStatus) -> bool:
        raise NotImplementedError

    def delete_by_id(self, enrollment_id: int) -> bool:
        raise NotImplementedError
