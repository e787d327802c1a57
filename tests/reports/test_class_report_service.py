from __future__ import annotations

from datetime import date, datetime

import pytest

from portal_fakes import InMemoryAttendance, InMemoryClasses, InMemoryEnrollments
from school_portal.attendance.model import AttendanceMark, NewAttendance
from school_portal.core.exceptions import NotFoundError, ValidationError
from school_portal.reports.denominator.configured import ConfiguredSessionsDenominator
from school_portal.reports.service import AttendanceReportService


@pytest.fixture
def setup():
    classes = InMemoryClasses()
    enrollments = InMemoryEnrollments()
    attendance = InMemoryAttendance()
    klass = classes.add(total_sessions=10)
    enrollment = enrollments.add(class_id=klass.class_id)
    for n, mark in enumerate([AttendanceMark.present(), AttendanceMark.absent(), AttendanceMark.permission(), AttendanceMark.present()], start=1):
        attendance.create(
            NewAttendance(
                enrollment_id=enrollment.enrollment_id,
                class_id=klass.class_id,
                student_id=enrollment.student_id,
                session_number=n,
                session_date=date(2026, 3, n),
                mark=mark,
            ),
            recorded_by="teacher",
            recorded_at=datetime(2026, 3, n, 9, 0),
        )
    return classes, enrollments, attendance, klass


def test_recorded_denominator_is_default(setup):
    classes, enrollments, attendance, klass = setup
    report = AttendanceReportService(enrollments, attendance, classes).build_class_report(class_id=klass.class_id)

    assert report.denominator == "recorded"
    assert report.max_session_number == 4
    assert report.rows[0].percentage == 75


def test_configured_denominator_uses_class_total(setup):
    classes, enrollments, attendance, klass = setup
    service = AttendanceReportService(enrollments, attendance, classes, denominator=ConfiguredSessionsDenominator())

    report = service.build_class_report(class_id=klass.class_id)

    assert report.denominator == "configured"
    assert report.max_session_number == 10
    assert report.rows[0].percentage == 30


def test_denominator_can_be_chosen_per_call(setup):
    classes, enrollments, attendance, klass = setup
    service = AttendanceReportService(enrollments, attendance, classes)

    assert service.build_class_report(class_id=klass.class_id, denominator="configured").max_session_number == 10
    with pytest.raises(ValidationError):
        service.build_class_report(class_id=klass.class_id, denominator="weekly")


def test_unknown_class(setup):
    classes, enrollments, attendance, _ = setup
    with pytest.raises(NotFoundError):
        AttendanceReportService(enrollments, attendance, classes).build_class_report(class_id=99)
