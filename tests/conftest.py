from __future__ import annotations

import pytest

from portal_fakes import (
    InMemoryAttendance,
    InMemoryBranches,
    InMemoryClasses,
    InMemoryEnrollments,
    InMemoryInsurance,
    InMemoryPrograms,
    InMemoryStudents,
)
from school_portal.container import assemble


@pytest.fixture
def container():
    return assemble(
        branches_repo=InMemoryBranches(),
        programs_repo=InMemoryPrograms(),
        classes_repo=InMemoryClasses(),
        students_repo=InMemoryStudents(),
        enrollments_repo=InMemoryEnrollments(),
        attendance_repo=InMemoryAttendance(),
        insurance_repo=InMemoryInsurance(),
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from school_portal.main import create_app

    app = create_app(container)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
