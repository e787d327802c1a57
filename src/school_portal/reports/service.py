from __future__ import annotations

from typing import Optional

from ..academics.repository import ClassRepository
from ..attendance.repository import AttendanceRepository
from ..core.exceptions import NotFoundError
from ..enrollments.repository import EnrollmentRepository
from .aggregator import build_report
from .denominator.base import SessionDenominator
from .denominator.factory import denominator_for
from .model import AttendanceReport


class AttendanceReportService:
    def __init__(
        self,
        enrollments: EnrollmentRepository,
        attendance: AttendanceRepository,
        classes: Optional[ClassRepository] = None,
        *,
        denominator: Optional[SessionDenominator] = None,
    ):
        self._enrollments = enrollments
        self._attendance = attendance
        self._classes = classes
        self._denominator = denominator or denominator_for(None)

    def build_class_report(self, *, class_id: int, denominator: Optional[str] = None) -> AttendanceReport:
        class_session = None
        if self._classes:
            class_session = self._classes.get_by_id(int(class_id))
            if not class_session:
                raise NotFoundError(f"Class {class_id} not found")

        strategy = denominator_for(denominator) if denominator else self._denominator
        enrollments = self._enrollments.list_filtered(class_id=int(class_id))
        records = self._attendance.list_filtered(class_id=int(class_id))
        sessions = strategy.sessions(records, class_session)

        rows = build_report(enrollments, records, sessions)
        rows.sort(key=lambda s: (s.percentage, s.enrollment_id))
        return AttendanceReport(
            class_id=int(class_id),
            denominator=strategy.name,
            max_session_number=sessions,
            rows=rows,
        )
