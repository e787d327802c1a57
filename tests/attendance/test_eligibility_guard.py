from datetime import date
from decimal import Decimal

import pytest

from school_portal.attendance.eligibility import can_record_attendance, ensure_can_record
from school_portal.attendance.model import AttendanceRecord
from school_portal.core.enums import AttendanceStatus, EnrollmentStatus, PaymentStatus, PaymentType, RejectionReason
from school_portal.core.exceptions import BusinessRuleViolation, ConflictError, NotFoundError
from school_portal.enrollments.model import Enrollment


def _enrollment(*, start_session=1, status=EnrollmentStatus.ACTIVE):
    return Enrollment(
        enrollment_id=7,
        student_id=1,
        class_id=1,
        start_session=start_session,
        total_amount=Decimal("100.00"),
        discount=Decimal("0.00"),
        paid_amount=Decimal("0.00"),
        payment_status=PaymentStatus.UNPAID,
        payment_type=PaymentType.ABA,
        enrollment_status=status,
    )


def _record(session_number):
    return AttendanceRecord(
        attendance_id=1,
        enrollment_id=7,
        class_id=1,
        student_id=1,
        session_number=session_number,
        session_date=date(2026, 3, 2),
        status=AttendanceStatus.PRESENT,
    )


def test_missing_enrollment_is_not_found():
    assert can_record_attendance(None, 1).rejection == RejectionReason.NOT_FOUND


@pytest.mark.parametrize("status", list(EnrollmentStatus))
def test_before_start_session_rejected_for_every_status(status):
    result = can_record_attendance(_enrollment(start_session=5, status=status), 4)
    assert result.rejection == RejectionReason.BEFORE_START_SESSION


@pytest.mark.parametrize("session_number", [1, 3, 40])
def test_hold_rejects_every_valid_session(session_number):
    result = can_record_attendance(_enrollment(status=EnrollmentStatus.HOLD), session_number)
    assert result.rejection == RejectionReason.ENROLLMENT_ON_HOLD


def test_existing_record_is_duplicate():
    result = can_record_attendance(_enrollment(), 2, existing=_record(2))
    assert result.rejection == RejectionReason.DUPLICATE_SESSION


def test_first_failing_rule_wins():
    enrollment = _enrollment(start_session=3, status=EnrollmentStatus.HOLD)
    assert can_record_attendance(enrollment, 2, existing=_record(2)).rejection == RejectionReason.BEFORE_START_SESSION
    assert can_record_attendance(enrollment, 3, existing=_record(3)).rejection == RejectionReason.ENROLLMENT_ON_HOLD


def test_accepted():
    assert can_record_attendance(_enrollment(start_session=3), 3).ok


def test_rejections_map_to_error_kinds():
    with pytest.raises(NotFoundError):
        ensure_can_record(None, 1)
    with pytest.raises(BusinessRuleViolation) as exc:
        ensure_can_record(_enrollment(start_session=2), 1)
    assert exc.value.rule == "BeforeStartSession"
    with pytest.raises(ConflictError):
        ensure_can_record(_enrollment(), 2, existing=_record(2))
