from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

from ..academics.repository import BranchRepository
from ..common.datetime_utils import now_local, require_date
from ..common.validators import optional_text, require_enum, require_int, require_non_empty
from ..core.enums import Gender, StudentStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import NewStudent, Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    """Use case: student admission."""

    def __init__(self, students: StudentRepository, branches: Optional[BranchRepository] = None):
        self._students = students
        self._branches = branches

    def admit(
        self,
        *,
        actor: str,
        name: str,
        gender: Any,
        dob: Any,
        nationality: str,
        branch_id: Any,
        phone: Optional[str] = None,
        parent_phone: Optional[str] = None,
        father_name: Optional[str] = None,
        mother_name: Optional[str] = None,
        today: Optional[date] = None,
    ) -> Student:
        birth = require_date(dob, "dob")
        if birth > (today or now_local().date()):
            raise ValidationError("dob cannot be in the future")

        branch = require_int(branch_id, "branch_id")
        if self._branches and not self._branches.get_by_id(branch):
            raise NotFoundError(f"Branch {branch} not found")

        new = NewStudent(
            name=require_non_empty(name, "name"),
            gender=require_enum(gender, Gender, "gender"),
            dob=birth,
            nationality=require_non_empty(nationality, "nationality"),
            branch_id=branch,
            phone=optional_text(phone),
            parent_phone=optional_text(parent_phone),
            father_name=optional_text(father_name),
            mother_name=optional_text(mother_name),
        )
        student_id = self._students.create(new, created_by=actor)
        logger.info("Student %s admitted to branch %s by %s", student_id, branch, actor)
        return self.get(student_id)

    def get(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError(f"Student {student_id} not found")
        return student

    def list(self, *, branch_id: Optional[int] = None, status: Any = None) -> Sequence[Student]:
        status_enum = require_enum(status, StudentStatus, "status") if status else None
        return self._students.list_filtered(branch_id=branch_id, status=status_enum)

    def set_status(self, *, actor: str, student_id: int, status: Any) -> Student:
        status_enum = require_enum(status, StudentStatus, "status")
        if not self._students.set_status(int(student_id), status=status_enum):
            raise NotFoundError(f"Student {student_id} not found")
        logger.info("Student %s set %s by %s", student_id, status_enum.value, actor)
        return self.get(student_id)
