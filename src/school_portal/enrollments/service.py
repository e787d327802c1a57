from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from ..academics.repository import ClassRepository
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local, require_date
from ..common.money import require_amount
from ..common.validators import optional_text, require_enum, require_int
from ..core.constants import DEFAULT_START_SESSION
from ..core.enums import EnrollmentStatus, PaymentType
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .model import Enrollment, NewEnrollment
from .payment import derive_payment_status
from .repository import EnrollmentRepository

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Use case: enroll students into classes and track what they paid."""

    def __init__(
        self,
        enrollments: EnrollmentRepository,
        attendance: AttendanceRepository,
        students: Optional[StudentRepository] = None,
        classes: Optional[ClassRepository] = None,
    ):
        self._enrollments = enrollments
        self._attendance = attendance
        self._students = students
        self._classes = classes

    def enroll(
        self,
        *,
        actor: str,
        student_id: Any,
        class_id: Any,
        total_amount: Any,
        payment_type: Any,
        start_session: Any = DEFAULT_START_SESSION,
        discount: Any = 0,
        paid_amount: Any = 0,
        term: Optional[str] = None,
        payment_expired_date: Any = None,
        now: Optional[datetime] = None,
    ) -> Enrollment:
        student = require_int(student_id, "student_id")
        klass = require_int(class_id, "class_id")
        first_session = require_int(
            DEFAULT_START_SESSION if start_session in (None, "") else start_session,
            "start_session",
            minimum=1,
        )
        total = require_amount(total_amount, "total_amount")
        disc = require_amount(discount, "discount", default=0)
        paid = require_amount(paid_amount, "paid_amount", default=0)
        if disc > total:
            raise ValidationError("discount cannot exceed total_amount")
        pay_type = require_enum(payment_type, PaymentType, "payment_type")
        expires = require_date(payment_expired_date, "payment_expired_date") if payment_expired_date else None

        if self._students and not self._students.get_by_id(student):
            raise NotFoundError(f"Student {student} not found")
        if self._classes:
            cls = self._classes.get_by_id(klass)
            if not cls:
                raise NotFoundError(f"Class {klass} not found")
            if first_session > cls.total_sessions:
                raise ValidationError(f"start_session exceeds the class's {cls.total_sessions} sessions")

        new = NewEnrollment(
            student_id=student,
            class_id=klass,
            start_session=first_session,
            total_amount=total,
            discount=disc,
            paid_amount=paid,
            payment_status=derive_payment_status(total, disc, paid),
            payment_type=pay_type,
            term=optional_text(term),
            payment_expired_date=expires,
        )
        enrollment_id = self._enrollments.create(new, created_by=actor, enrolled_at=now or now_local())
        logger.info(
            "Enrollment %s created (student=%s class=%s status=%s) by %s",
            enrollment_id, student, klass, new.payment_status.value, actor,
        )
        return self.get(enrollment_id)

    def get(self, enrollment_id: int) -> Enrollment:
        enrollment = self._enrollments.get_by_id(int(enrollment_id))
        if not enrollment:
            raise NotFoundError(f"Enrollment {enrollment_id} not found")
        return enrollment

    def list(self, *, class_id: Optional[int] = None, student_id: Optional[int] = None) -> Sequence[Enrollment]:
        return self._enrollments.list_filtered(class_id=class_id, student_id=student_id)

    def _store_financials(self, enrollment: Enrollment, *, total, discount, paid) -> Enrollment:
        if discount > total:
            raise ValidationError("discount cannot exceed total_amount")
        status = derive_payment_status(total, discount, paid)
        self._enrollments.update_financials(
            enrollment_id=enrollment.enrollment_id,
            total_amount=total,
            discount=discount,
            paid_amount=paid,
            payment_status=status,
        )
        return self.get(enrollment.enrollment_id)

    def record_payment(self, *, actor: str, enrollment_id: int, amount: Any) -> Enrollment:
        enrollment = self.get(enrollment_id)
        paid_now = require_amount(amount, "amount")
        if paid_now == 0:
            raise ValidationError("amount must be greater than zero")

        updated = self._store_financials(
            enrollment,
            total=enrollment.total_amount,
            discount=enrollment.discount,
            paid=enrollment.paid_amount + paid_now,
        )
        logger.info(
            "Payment of %s recorded on enrollment %s by %s (now %s)",
            paid_now, enrollment.enrollment_id, actor, updated.payment_status.value,
        )
        return updated

    def update_financials(
        self,
        *,
        actor: str,
        enrollment_id: int,
        total_amount: Any = None,
        discount: Any = None,
    ) -> Enrollment:
        enrollment = self.get(enrollment_id)
        total = enrollment.total_amount if total_amount in (None, "") else require_amount(total_amount, "total_amount")
        disc = enrollment.discount if discount in (None, "") else require_amount(discount, "discount")

        updated = self._store_financials(enrollment, total=total, discount=disc, paid=enrollment.paid_amount)
        logger.info("Financials of enrollment %s updated by %s", enrollment.enrollment_id, actor)
        return updated

    def set_status(self, *, actor: str, enrollment_id: int, status: Any) -> Enrollment:
        enrollment = self.get(enrollment_id)
        new_status = require_enum(status, EnrollmentStatus, "enrollment_status")
        if new_status != enrollment.enrollment_status:
            self._enrollments.set_status(enrollment.enrollment_id, status=new_status)
            logger.info(
                "Enrollment %s: %s -> %s by %s",
                enrollment.enrollment_id, enrollment.enrollment_status.value, new_status.value, actor,
            )
        return self.get(enrollment.enrollment_id)

    def delete(self, *, actor: str, enrollment_id: int) -> None:
        """Refuse to delete while attendance still points at the enrollment."""
        enrollment = self.get(enrollment_id)
        recorded = self._attendance.count_for_enrollment(enrollment.enrollment_id)
        if recorded:
            raise ConflictError(
                f"Enrollment {enrollment.enrollment_id} has {recorded} attendance record(s); "
                "set it to Dropped instead of deleting"
            )
        self._enrollments.delete_by_id(enrollment.enrollment_id)
        logger.info("Enrollment %s deleted by %s", enrollment.enrollment_id, actor)
