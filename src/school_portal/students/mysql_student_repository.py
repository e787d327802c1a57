from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Gender, StudentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewStudent, Student
from .repository import StudentRepository

_COLUMNS = (
    "student_id, name, gender, dob, nationality, branch_id, status, phone, parent_phone, "
    "father_name, mother_name, created_by, created_at"
)


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _row(r) -> Student:
        return Student(
            student_id=int(r["student_id"]),
            name=r["name"],
            gender=Gender(r["gender"]),
            dob=r["dob"],
            nationality=r["nationality"],
            branch_id=int(r["branch_id"]),
            status=StudentStatus(r["status"]),
            phone=r.get("phone"),
            parent_phone=r.get("parent_phone"),
            father_name=r.get("father_name"),
            mother_name=r.get("mother_name"),
            created_by=r.get("created_by"),
            created_at=r.get("created_at"),
        )

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
            r = fetchone(cur)
            return self._row(r) if r else None

    def list_filtered(self, *, branch_id: Optional[int] = None, status: Optional[StudentStatus] = None) -> Sequence[Student]:
        clauses = ["1=1"]
        params: list[object] = []
        if branch_id is not None:
            clauses.append("branch_id=%s")
            params.append(int(branch_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM students WHERE {' AND '.join(clauses)} ORDER BY name",
                tuple(params),
            )
            return [self._row(r) for r in fetchall(cur)]

    def create(self, student: NewStudent, *, created_by: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(name, gender, dob, nationality, branch_id, phone, parent_phone,
                                     father_name, mother_name, created_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    student.name,
                    student.gender.value,
                    student.dob,
                    student.nationality,
                    int(student.branch_id),
                    student.phone,
                    student.parent_phone,
                    student.father_name,
                    student.mother_name,
                    created_by,
                ),
            )
            return int(cur.lastrowid)

    def set_status(self, student_id: int, *, status: StudentStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE students SET status=%s WHERE student_id=%s", (status.value, int(student_id)))
            return cur.rowcount > 0
