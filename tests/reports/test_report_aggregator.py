from datetime import date, timedelta
from decimal import Decimal

import pytest

from school_portal.attendance.model import AttendanceRecord
from school_portal.core.enums import AttendanceStatus, EnrollmentStatus, Grade, PaymentStatus, PaymentType
from school_portal.enrollments.model import Enrollment
from school_portal.reports.aggregator import attendance_percentage, attendance_ratio, build_report, grade_for


def _enrollment(enrollment_id):
    return Enrollment(
        enrollment_id=enrollment_id,
        student_id=enrollment_id * 10,
        class_id=1,
        start_session=1,
        total_amount=Decimal("100.00"),
        discount=Decimal("0.00"),
        paid_amount=Decimal("100.00"),
        payment_status=PaymentStatus.PAID,
        payment_type=PaymentType.CASH,
        enrollment_status=EnrollmentStatus.ACTIVE,
    )


def _records(enrollment_id, statuses):
    return [
        AttendanceRecord(
            attendance_id=enrollment_id * 100 + n,
            enrollment_id=enrollment_id,
            class_id=1,
            student_id=enrollment_id * 10,
            session_number=n,
            session_date=date(2026, 1, 1) + timedelta(days=n),
            status=status,
            reason=reason,
        )
        for n, (status, reason) in enumerate(statuses, start=1)
    ]


P = (AttendanceStatus.PRESENT, None)
A = (AttendanceStatus.ABSENT, None)
L = (AttendanceStatus.PERMISSION, None)
M = (AttendanceStatus.PRESENT, "Make up: Sat")


def test_present_absent_permission_present_is_75_warning():
    [row] = build_report([_enrollment(1)], _records(1, [P, A, L, P]), 4)

    assert (row.presents, row.absents, row.permissions) == (2, 1, 1)
    assert row.percentage == 75
    assert row.grade == Grade.WARNING


def test_make_up_counts_as_present_and_is_tallied():
    [row] = build_report([_enrollment(1)], _records(1, [M, P]), 2)
    assert row.presents == 2
    assert row.make_ups == 1
    assert row.percentage == 100
    assert row.grade == Grade.GOOD


def test_enrollment_without_records_is_zero_critical():
    rows = build_report([_enrollment(1), _enrollment(2)], _records(1, [P]), 1)
    assert rows[1].percentage == 0
    assert rows[1].grade == Grade.CRITICAL


def test_zero_denominator():
    assert attendance_percentage(3, 0) == 0


@pytest.mark.parametrize("attended, sessions, expected", [(1, 8, 13), (1, 3, 33), (2, 3, 67), (1, 2, 50)])
def test_rounding_half_up(attended, sessions, expected):
    assert attendance_percentage(attended, sessions) == expected


@pytest.mark.parametrize("pct, grade", [(100, Grade.GOOD), (90, Grade.GOOD), (89, Grade.WARNING), (70, Grade.WARNING), (69, Grade.CRITICAL)])
def test_grade_thresholds(pct, grade):
    assert grade_for(pct) == grade


@pytest.mark.parametrize(
    "attended, sessions, pct, grade",
    [(179, 200, 90, Grade.WARNING), (139, 200, 70, Grade.CRITICAL), (180, 200, 90, Grade.GOOD), (140, 200, 70, Grade.WARNING)],
)
def test_grade_uses_unrounded_ratio(attended, sessions, pct, grade):
    assert attendance_percentage(attended, sessions) == pct
    assert grade_for(attendance_ratio(attended, sessions)) == grade


def test_report_row_at_89_5_percent_is_warning():
    statuses = [P] * 179 + [A] * 21
    [row] = build_report([_enrollment(1)], _records(1, statuses), 200)

    assert row.percentage == 90
    assert row.grade == Grade.WARNING
