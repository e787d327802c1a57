from __future__ import annotations

from typing import Optional, Sequence

from ...academics.model import ClassSession
from ...attendance.model import AttendanceRecord
from .base import SessionDenominator
from .recorded import RecordedSessionsDenominator


class ConfiguredSessionsDenominator(SessionDenominator):
    """The class's configured total_sessions.

    Falls back to the recorded maximum when the class is unknown.
    """

    name = "configured"

    def sessions(self, records: Sequence[AttendanceRecord], class_session: Optional[ClassSession]) -> int:
        if class_session is None:
            return RecordedSessionsDenominator().sessions(records, None)
        return int(class_session.total_sessions)
