from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ...academics.model import ClassSession
from ...attendance.model import AttendanceRecord


class SessionDenominator(ABC):
    """Strategy: how many sessions a class's attendance percentage is measured against."""

    name: str = ""

    @abstractmethod
    def sessions(self, records: Sequence[AttendanceRecord], class_session: Optional[ClassSession]) -> int:
        raise NotImplementedError
