from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceMark, AttendanceRecord, NewAttendance


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_enrollment_session(self, enrollment_id: int, session_number: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_filtered(
        self,
        *,
        class_id: Optional[int] = None,
        enrollment_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records ordered by session_number, then id."""

        raise NotImplementedError

    def create(self, attendance: NewAttendance, *, recorded_by: str, recorded_at: datetime) -> int:
        """Raises ConflictError when (enrollment_id, session_number) already exists."""

        raise NotImplementedError

    def update_mark(
        self,
        *,
        attendance_id: int,
        mark: AttendanceMark,
        recorded_by: str,
        recorded_at: datetime,
    ) -> bool:
        """Overwrite status/reason only; session and enrollment never change."""

        raise NotImplementedError

    def count_for_enrollment(self, enrollment_id: int) -> int:
        raise NotImplementedError
