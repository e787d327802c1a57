from __future__ import annotations

import threading
import time
from datetime import date, datetime

import pytest

from portal_fakes import InMemoryAttendance, InMemoryEnrollments
from school_portal.attendance.service import AttendanceService
from school_portal.core.enums import AttendanceStatus, EnrollmentStatus
from school_portal.core.exceptions import BusinessRuleViolation, ConflictError, NotFoundError, ValidationError

NOW = datetime(2026, 3, 2, 8, 30)


@pytest.fixture
def enrollments():
    return InMemoryEnrollments()


@pytest.fixture
def attendance():
    return InMemoryAttendance()


@pytest.fixture
def service(attendance, enrollments):
    return AttendanceService(attendance, enrollments)


def _record(service, enrollment, session_number, status="Present", reason=None):
    return service.record(
        actor="teacher@school",
        enrollment_id=enrollment.enrollment_id,
        class_id=enrollment.class_id,
        student_id=enrollment.student_id,
        session_number=session_number,
        session_date=date(2026, 3, session_number),
        status=status,
        reason=reason,
        now=NOW,
    )


def test_start_session_scenario(service, enrollments):
    enrollment = enrollments.add(start_session=3)

    with pytest.raises(BusinessRuleViolation) as exc:
        _record(service, enrollment, 2)
    assert exc.value.rule == "BeforeStartSession"

    created = _record(service, enrollment, 3)
    assert created.status == AttendanceStatus.PRESENT
    assert created.recorded_by == "teacher@school"

    with pytest.raises(ConflictError):
        _record(service, enrollment, 3, status="Absent")

    updated = service.update_status(
        actor="admin@school", attendance_id=created.attendance_id, status="Absent", reason="sick", now=NOW
    )
    assert updated.status == AttendanceStatus.ABSENT
    assert updated.reason == "sick"
    assert updated.session_number == 3
    assert updated.enrollment_id == enrollment.enrollment_id
    assert updated.recorded_by == "admin@school"


def test_hold_rejects_create(service, enrollments):
    enrollment = enrollments.add(status=EnrollmentStatus.HOLD)
    with pytest.raises(BusinessRuleViolation) as exc:
        _record(service, enrollment, 1)
    assert exc.value.rule == "EnrollmentOnHold"


def test_unknown_enrollment(service, enrollments):
    enrollment = enrollments.add()
    enrollments.delete_by_id(enrollment.enrollment_id)
    with pytest.raises(NotFoundError):
        _record(service, enrollment, 1)


def test_update_of_unknown_record_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.update_status(actor="admin", attendance_id=404, status="Present")


def test_update_requires_id_and_status(service):
    with pytest.raises(ValidationError):
        service.update_status(actor="admin", attendance_id=None, status="Present")
    with pytest.raises(ValidationError):
        service.update_status(actor="admin", attendance_id=1, status=None)


def test_mismatched_class_is_rejected(service, enrollments):
    enrollment = enrollments.add(class_id=1)
    with pytest.raises(ValidationError):
        service.record(
            actor="teacher",
            enrollment_id=enrollment.enrollment_id,
            class_id=2,
            student_id=enrollment.student_id,
            session_number=1,
            session_date="2026-03-01",
            status="Present",
        )


def test_session_date_must_be_a_date(service, enrollments):
    enrollment = enrollments.add()
    with pytest.raises(ValidationError):
        service.record(
            actor="teacher",
            enrollment_id=enrollment.enrollment_id,
            class_id=enrollment.class_id,
            student_id=enrollment.student_id,
            session_number=1,
            session_date="03/01/2026",
            status="Present",
        )


def test_quick_mark_creates_then_updates(service, enrollments):
    enrollment = enrollments.add()

    first = service.quick_mark(
        actor="teacher", enrollment_id=enrollment.enrollment_id, session_number=1,
        session_date="2026-03-01", token="p", now=NOW,
    )
    assert first.created
    assert first.record.display == "P"

    second = service.quick_mark(
        actor="teacher", enrollment_id=enrollment.enrollment_id, session_number=1,
        session_date="2026-03-01", token="M", note="moved to Saturday", now=NOW,
    )
    assert not second.created
    assert second.record.attendance_id == first.record.attendance_id
    assert second.record.status == AttendanceStatus.PRESENT
    assert second.record.reason == "Make up: moved to Saturday"
    assert second.record.display == "M"


def test_quick_mark_validation(service, enrollments):
    enrollment = enrollments.add()
    with pytest.raises(ValidationError):
        service.quick_mark(
            actor="teacher", enrollment_id=enrollment.enrollment_id, session_number=1,
            session_date="2026-03-01", token="xyz",
        )
    with pytest.raises(ValidationError):
        service.quick_mark(
            actor="teacher", enrollment_id=enrollment.enrollment_id, session_number=1,
            session_date="2026-03-01", token="m",
        )


def test_concurrent_creates_for_same_session_yield_one_record(service, enrollments, attendance):
    enrollment = enrollments.add()
    outcomes: list[str] = []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        try:
            _record(service, enrollment, 1)
            outcomes.append("created")
        except ConflictError:
            outcomes.append("conflict")

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("created") == 1
    assert outcomes.count("conflict") == 7
    assert attendance.count_for_enrollment(enrollment.enrollment_id) == 1


def test_list_is_ordered_by_session(service, enrollments):
    enrollment = enrollments.add()
    for n in (3, 1, 2):
        _record(service, enrollment, n)
    assert [r.session_number for r in service.list(enrollment_id=enrollment.enrollment_id)] == [1, 2, 3]


class SlowLookupAttendance(InMemoryAttendance):
    """Widens the gap between the existing-record lookup and the write."""

    def get_for_enrollment_session(self, enrollment_id, session_number):
        found = super().get_for_enrollment_session(enrollment_id, session_number)
        time.sleep(0.05)
        return found


def test_concurrent_quick_marks_on_new_session_create_then_update(enrollments):
    attendance = SlowLookupAttendance()
    service = AttendanceService(attendance, enrollments)
    enrollment = enrollments.add()
    results = []
    errors = []
    barrier = threading.Barrier(2)

    def worker(token):
        barrier.wait()
        try:
            results.append(
                service.quick_mark(
                    actor="teacher", enrollment_id=enrollment.enrollment_id, session_number=1,
                    session_date="2026-03-01", token=token, now=NOW,
                )
            )
        except ConflictError as e:
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(t,)) for t in ("P", "A")]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert sorted(r.created for r in results) == [False, True]
    assert attendance.count_for_enrollment(enrollment.enrollment_id) == 1
