from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import Gender, StudentStatus


@dataclass(frozen=True)
class Student:
    """Admitted student. A student belongs to exactly one branch."""

    student_id: int
    name: str
    gender: Gender
    dob: date
    nationality: str
    branch_id: int
    status: StudentStatus = StudentStatus.ACTIVE
    phone: Optional[str] = None
    parent_phone: Optional[str] = None
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewStudent:
    name: str
    gender: Gender
    dob: date
    nationality: str
    branch_id: int
    phone: Optional[str] = None
    parent_phone: Optional[str] = None
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
