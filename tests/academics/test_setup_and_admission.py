from __future__ import annotations

from datetime import date

import pytest

from portal_fakes import InMemoryBranches, InMemoryClasses, InMemoryPrograms, InMemoryStudents
from school_portal.academics.service import AcademicsService
from school_portal.core.enums import StudentStatus
from school_portal.core.exceptions import NotFoundError, ValidationError
from school_portal.students.service import StudentService


@pytest.fixture
def academics():
    return AcademicsService(InMemoryBranches(), InMemoryPrograms(), InMemoryClasses())


def _program(academics):
    branch = academics.create_branch(actor="admin", name="Phnom Penh")
    return academics.create_program(actor="admin", branch_id=branch.branch_id, name="English A1", duration_sessions=24, price="180")


def test_class_inherits_program_sessions(academics):
    program = _program(academics)

    cls = academics.create_class(
        actor="admin",
        branch_id=program.branch_id,
        program_id=program.program_id,
        class_name="Morning-A",
        start_time="08:00",
        end_time="09:30",
        max_students=15,
        days="mon, Wednesday,fri",
    )

    assert cls.total_sessions == 24
    assert cls.days == ("Mon", "Wed", "Fri")


def test_class_validation(academics):
    program = _program(academics)
    base = dict(actor="admin", branch_id=program.branch_id, program_id=program.program_id, class_name="X", max_students=10)
    with pytest.raises(ValidationError):
        academics.create_class(start_time="10:00", end_time="09:00", **base)
    with pytest.raises(ValidationError):
        academics.create_class(start_time="08:00", end_time="09:00", days=["Funday"], **base)


def test_program_needs_existing_branch(academics):
    with pytest.raises(NotFoundError):
        academics.create_program(actor="admin", branch_id=5, name="Math", duration_sessions=10, price="0")


def test_admission():
    branches = InMemoryBranches()
    branch_id = branches.create(name="Siem Reap", address=None, phone=None)
    service = StudentService(InMemoryStudents(), branches)

    student = service.admit(
        actor="admin",
        name="  Vannak ",
        gender="Male",
        dob="2014-02-10",
        nationality="Cambodian",
        branch_id=branch_id,
        today=date(2026, 1, 1),
    )
    assert student.name == "Vannak"
    assert student.status == StudentStatus.ACTIVE
    assert student.created_by == "admin"

    assert service.set_status(actor="admin", student_id=student.student_id, status="Inactive").status == StudentStatus.INACTIVE
    assert service.list(branch_id=branch_id, status="Active") == []

    with pytest.raises(ValidationError):
        service.admit(actor="admin", name="Future", gender="Male", dob="2030-01-01", nationality="KH", branch_id=branch_id, today=date(2026, 1, 1))
