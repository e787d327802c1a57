from __future__ import annotations

from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence, Union

from ..attendance.model import AttendanceRecord
from ..core.constants import GRADE_GOOD_MIN_PERCENT, GRADE_WARNING_MIN_PERCENT
from ..core.enums import AttendanceStatus, Grade, MarkKind
from ..enrollments.model import Enrollment
from .model import StudentStats


def attendance_ratio(attended: int, max_session_number: int) -> Decimal:
    """Unrounded attended / max * 100; 0 when no sessions are counted."""
    if max_session_number <= 0:
        return Decimal(0)
    return Decimal(attended) * 100 / Decimal(max_session_number)


def attendance_percentage(attended: int, max_session_number: int) -> int:
    """Displayed percentage: the ratio with halves rounded up."""
    ratio = attendance_ratio(attended, max_session_number)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def grade_for(percentage: Union[int, Decimal]) -> Grade:
    """Grades the unrounded ratio, so 89.5 is still a Warning."""
    if percentage >= GRADE_GOOD_MIN_PERCENT:
        return Grade.GOOD
    if percentage >= GRADE_WARNING_MIN_PERCENT:
        return Grade.WARNING
    return Grade.CRITICAL


def build_report(
    enrollments: Iterable[Enrollment],
    records: Sequence[AttendanceRecord],
    max_session_number: int,
) -> list[StudentStats]:
    """Per-enrollment attendance summary. Permission counts as attended, Absent does not."""
    by_enrollment: dict[int, Counter] = {}
    make_ups: Counter = Counter()
    for r in records:
        by_enrollment.setdefault(r.enrollment_id, Counter())[r.status] += 1
        if r.mark.kind == MarkKind.PRESENT_MAKE_UP:
            make_ups[r.enrollment_id] += 1

    rows: list[StudentStats] = []
    for e in enrollments:
        counts = by_enrollment.get(e.enrollment_id, Counter())
        presents = counts[AttendanceStatus.PRESENT]
        permissions = counts[AttendanceStatus.PERMISSION]
        attended = presents + permissions
        rows.append(
            StudentStats(
                enrollment_id=e.enrollment_id,
                student_id=e.student_id,
                presents=presents,
                absents=counts[AttendanceStatus.ABSENT],
                permissions=permissions,
                make_ups=make_ups[e.enrollment_id],
                percentage=attendance_percentage(attended, max_session_number),
                grade=grade_for(attendance_ratio(attended, max_session_number)),
            )
        )
    return rows
