from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import StudentStatus
from .model import NewStudent, Student


class StudentRepository(Protocol):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def list_filtered(self, *, branch_id: Optional[int] = None, status: Optional[StudentStatus] = None) -> Sequence[Student]:
        raise NotImplementedError

    def create(self, student: NewStudent, *, created_by: str) -> int:
        raise NotImplementedError

    def set_status(self, student_id: int, *, status: StudentStatus) -> bool:
        raise NotImplementedError
