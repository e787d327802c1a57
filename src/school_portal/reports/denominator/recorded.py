from __future__ import annotations

from typing import Optional, Sequence

from ...academics.model import ClassSession
from ...attendance.model import AttendanceRecord
from .base import SessionDenominator


class RecordedSessionsDenominator(SessionDenominator):
    """Highest session number recorded so far for the class; grows as sessions are marked."""

    name = "recorded"

    def sessions(self, records: Sequence[AttendanceRecord], class_session: Optional[ClassSession]) -> int:
        return max((r.session_number for r in records), default=0)
