from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Grade


@dataclass(frozen=True)
class StudentStats:
    enrollment_id: int
    student_id: int
    presents: int
    absents: int
    permissions: int
    make_ups: int
    percentage: int
    grade: Grade


@dataclass(frozen=True)
class AttendanceReport:
    class_id: int
    denominator: str
    max_session_number: int
    rows: list[StudentStats]
