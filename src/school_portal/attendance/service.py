from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import now_local, require_date
from ..common.locks import KeyedLocks
from ..common.validators import optional_text, require_enum, require_int
from ..core.enums import AttendanceStatus
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..enrollments.repository import EnrollmentRepository
from .eligibility import ensure_can_record
from .feed import AttendanceFeed, Listener
from .model import AttendanceMark, AttendanceRecord, NewAttendance
from .repository import AttendanceRepository
from .shorthand import parse_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkResult:
    record: AttendanceRecord
    created: bool


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        enrollments: EnrollmentRepository,
        *,
        feed: Optional[AttendanceFeed] = None,
        locks: Optional[KeyedLocks] = None,
    ):
        self._attendance = attendance
        self._enrollments = enrollments
        self._feed = feed or AttendanceFeed(
            lambda f: self._attendance.list_filtered(class_id=f.class_id, enrollment_id=f.enrollment_id)
        )
        self._locks = locks or KeyedLocks()

    def record(
        self,
        *,
        actor: str,
        enrollment_id: Any,
        class_id: Any,
        student_id: Any,
        session_number: Any,
        session_date: Any,
        status: Any,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        """Create the record for one session. Rejected sessions raise; nothing is dropped silently."""
        enrollment_id = require_int(enrollment_id, "enrollment_id")
        class_id = require_int(class_id, "class_id")
        student_id = require_int(student_id, "student_id")
        session_number = require_int(session_number, "session_number", minimum=1)
        session_date = require_date(session_date, "session_date")
        status = require_enum(status, AttendanceStatus, "status")
        mark = AttendanceMark.from_wire(status, optional_text(reason))

        return self._create(
            actor=actor,
            enrollment_id=enrollment_id,
            session_number=session_number,
            session_date=session_date,
            mark=mark,
            class_id=class_id,
            student_id=student_id,
            now=now,
        )

    def _create(
        self,
        *,
        actor: str,
        enrollment_id: int,
        session_number: int,
        session_date,
        mark: AttendanceMark,
        class_id: Optional[int] = None,
        student_id: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        # Check-then-insert is serialized per enrollment; the unique key covers other processes.
        with self._locks.hold(enrollment_id):
            record = self._insert(
                actor=actor,
                enrollment_id=enrollment_id,
                session_number=session_number,
                session_date=session_date,
                mark=mark,
                class_id=class_id,
                student_id=student_id,
                now=now,
            )
        self._feed.publish(record)
        return record

    def _insert(
        self,
        *,
        actor: str,
        enrollment_id: int,
        session_number: int,
        session_date,
        mark: AttendanceMark,
        class_id: Optional[int] = None,
        student_id: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        """Guarded insert. Callers hold the enrollment's lock."""
        enrollment = self._enrollments.get_by_id(enrollment_id)
        existing = self._attendance.get_for_enrollment_session(enrollment_id, session_number) if enrollment else None
        try:
            ensure_can_record(enrollment, session_number, existing=existing)
        except DomainError as e:
            logger.warning("Attendance for enrollment %s session %s rejected: %s", enrollment_id, session_number, e)
            raise

        if class_id is not None and class_id != enrollment.class_id:
            raise ValidationError("class_id does not match the enrollment")
        if student_id is not None and student_id != enrollment.student_id:
            raise ValidationError("student_id does not match the enrollment")

        attendance_id = self._attendance.create(
            NewAttendance(
                enrollment_id=enrollment_id,
                class_id=enrollment.class_id,
                student_id=enrollment.student_id,
                session_number=session_number,
                session_date=session_date,
                mark=mark,
            ),
            recorded_by=actor,
            recorded_at=now or now_local(),
        )
        record = self.get(attendance_id)
        logger.info(
            "Attendance %s recorded: enrollment=%s session=%s status=%s by %s",
            attendance_id, enrollment_id, session_number, record.status.value, actor,
        )
        return record

    def update_status(
        self,
        *,
        actor: str,
        attendance_id: Any,
        status: Any,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        """Overwrite status/reason of an existing record. No eligibility or duplicate check."""
        attendance_id = require_int(attendance_id, "attendance_id")
        status = require_enum(status, AttendanceStatus, "status")
        mark = AttendanceMark.from_wire(status, optional_text(reason))
        record = self._overwrite(actor=actor, current=self.get(attendance_id), mark=mark, now=now)
        self._feed.publish(record)
        return record

    def _overwrite(
        self,
        *,
        actor: str,
        current: AttendanceRecord,
        mark: AttendanceMark,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        self._attendance.update_mark(
            attendance_id=current.attendance_id,
            mark=mark,
            recorded_by=actor,
            recorded_at=now or now_local(),
        )
        record = self.get(current.attendance_id)
        logger.info(
            "Attendance %s updated: %s -> %s by %s",
            current.attendance_id, current.status.value, record.status.value, actor,
        )
        return record

    def quick_mark(
        self,
        *,
        actor: str,
        enrollment_id: Any,
        session_number: Any,
        session_date: Any,
        token: str,
        note: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> MarkResult:
        """Mark a session from a sheet shorthand token (P, A, L, M + note).

        Creates the session's record or overwrites the one already there; the
        lookup and the write happen under the enrollment's lock.
        """
        enrollment_id = require_int(enrollment_id, "enrollment_id")
        session_number = require_int(session_number, "session_number", minimum=1)

        parsed = parse_token(token)
        if not parsed.recognized:
            raise ValidationError(f"Unrecognized attendance token: {token!r}")
        if parsed.awaiting_note:
            if note is None:
                raise ValidationError("A make-up mark needs a note")
            mark = AttendanceMark.make_up(note)
        else:
            mark = parsed.mark

        with self._locks.hold(enrollment_id):
            existing = self._attendance.get_for_enrollment_session(enrollment_id, session_number)
            if existing:
                result = MarkResult(
                    record=self._overwrite(actor=actor, current=existing, mark=mark, now=now),
                    created=False,
                )
            else:
                result = MarkResult(
                    record=self._insert(
                        actor=actor,
                        enrollment_id=enrollment_id,
                        session_number=session_number,
                        session_date=require_date(session_date, "session_date"),
                        mark=mark,
                        now=now,
                    ),
                    created=True,
                )
        self._feed.publish(result.record)
        return result

    def get(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFoundError(f"Attendance record {attendance_id} not found")
        return record

    def list(self, *, class_id: Optional[int] = None, enrollment_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        return self._attendance.list_filtered(class_id=class_id, enrollment_id=enrollment_id)

    def subscribe(
        self,
        listener: Listener,
        *,
        class_id: Optional[int] = None,
        enrollment_id: Optional[int] = None,
    ) -> Callable[[], None]:
        return self._feed.subscribe(listener, class_id=class_id, enrollment_id=enrollment_id)
