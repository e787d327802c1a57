from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import EnrollmentStatus, RejectionReason
from ..core.exceptions import BusinessRuleViolation, ConflictError, NotFoundError
from ..enrollments.model import Enrollment
from .model import AttendanceRecord


@dataclass(frozen=True)
class Eligibility:
    rejection: Optional[RejectionReason] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.rejection is None


ACCEPTED = Eligibility()


def can_record_attendance(
    enrollment: Optional[Enrollment],
    session_number: int,
    *,
    existing: Optional[AttendanceRecord] = None,
) -> Eligibility:
    """Decide whether a NEW record may be created for this session.

    Rules run in a fixed order and the first failure wins. ``existing`` is the
    record already stored for (enrollment, session_number), if any. Updates of
    an existing record by id never go through this check.
    """
    if enrollment is None:
        return Eligibility(RejectionReason.NOT_FOUND, "Enrollment not found")

    if session_number < enrollment.start_session:
        return Eligibility(
            RejectionReason.BEFORE_START_SESSION,
            f"Session {session_number} is before this enrollment's start session {enrollment.start_session}",
        )

    if enrollment.enrollment_status == EnrollmentStatus.HOLD:
        return Eligibility(
            RejectionReason.ENROLLMENT_ON_HOLD,
            "Enrollment is on hold; attendance cannot be recorded",
        )

    if existing is not None:
        return Eligibility(
            RejectionReason.DUPLICATE_SESSION,
            f"Attendance for session {session_number} is already recorded",
        )

    return ACCEPTED


def ensure_can_record(
    enrollment: Optional[Enrollment],
    session_number: int,
    *,
    existing: Optional[AttendanceRecord] = None,
) -> None:
    """Same as :func:`can_record_attendance` but raises the matching domain error."""
    result = can_record_attendance(enrollment, session_number, existing=existing)
    if result.ok:
        return
    if result.rejection == RejectionReason.NOT_FOUND:
        raise NotFoundError(result.message)
    if result.rejection == RejectionReason.DUPLICATE_SESSION:
        raise ConflictError(result.message)
    raise BusinessRuleViolation(result.message, rule=result.rejection.value)
