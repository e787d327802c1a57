from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.constants import MAKE_UP_MARKER, MAKE_UP_PREFIX
from ..core.enums import AttendanceStatus, MarkKind

_DISPLAY = {
    MarkKind.PRESENT: "P",
    MarkKind.PRESENT_MAKE_UP: "M",
    MarkKind.ABSENT: "A",
    MarkKind.PERMISSION: "L",
}

_STORED_STATUS = {
    MarkKind.PRESENT: AttendanceStatus.PRESENT,
    MarkKind.PRESENT_MAKE_UP: AttendanceStatus.PRESENT,
    MarkKind.ABSENT: AttendanceStatus.ABSENT,
    MarkKind.PERMISSION: AttendanceStatus.PERMISSION,
}


@dataclass(frozen=True)
class AttendanceMark:
    """What happened at a session, as a tagged variant.

    PRESENT_MAKE_UP carries its note in ``note``; the other kinds may carry a
    free-text ``reason``. The flat ``(status, reason)`` storage shape only
    appears in :meth:`to_wire` / :meth:`from_wire`. Any Present reason
    mentioning "Make up" decodes as a make-up and keeps its stored text.
    """

    kind: MarkKind
    note: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def present(cls, reason: Optional[str] = None) -> "AttendanceMark":
        return cls(MarkKind.PRESENT, reason=reason or None)

    @classmethod
    def make_up(cls, note: str) -> "AttendanceMark":
        return cls(MarkKind.PRESENT_MAKE_UP, note=(note or "").strip())

    @classmethod
    def absent(cls, reason: Optional[str] = None) -> "AttendanceMark":
        return cls(MarkKind.ABSENT, reason=reason or None)

    @classmethod
    def permission(cls, reason: Optional[str] = None) -> "AttendanceMark":
        return cls(MarkKind.PERMISSION, reason=reason or None)

    @property
    def status(self) -> AttendanceStatus:
        return _STORED_STATUS[self.kind]

    @property
    def display(self) -> str:
        return _DISPLAY[self.kind]

    def to_wire(self) -> tuple[AttendanceStatus, Optional[str]]:
        if self.kind == MarkKind.PRESENT_MAKE_UP:
            return self.status, self.reason or f"{MAKE_UP_PREFIX}{self.note or ''}"
        return self.status, self.reason

    @classmethod
    def from_wire(cls, status: AttendanceStatus, reason: Optional[str]) -> "AttendanceMark":
        reason = reason or None
        if status == AttendanceStatus.PRESENT:
            if reason and MAKE_UP_MARKER in reason:
                if reason.startswith(MAKE_UP_MARKER + ":"):
                    note = reason[len(MAKE_UP_MARKER) + 1:]
                else:
                    note = reason.replace(MAKE_UP_PREFIX, "")
                return cls(MarkKind.PRESENT_MAKE_UP, note=note.strip(), reason=reason)
            return cls.present(reason)
        if status == AttendanceStatus.ABSENT:
            return cls.absent(reason)
        return cls.permission(reason)


@dataclass(frozen=True)
class AttendanceRecord:
    """One row per (enrollment, session_number). class/student ids are copies of the enrollment's."""

    attendance_id: int
    enrollment_id: int
    class_id: int
    student_id: int
    session_number: int
    session_date: date
    status: AttendanceStatus
    reason: Optional[str] = None
    recorded_by: Optional[str] = None
    recorded_at: Optional[datetime] = None

    @property
    def mark(self) -> AttendanceMark:
        return AttendanceMark.from_wire(self.status, self.reason)

    @property
    def display(self) -> str:
        return self.mark.display


@dataclass(frozen=True)
class NewAttendance:
    enrollment_id: int
    class_id: int
    student_id: int
    session_number: int
    session_date: date
    mark: AttendanceMark
