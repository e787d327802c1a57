from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceMark, AttendanceRecord, NewAttendance
from .repository import AttendanceRepository

_COLUMNS = (
    "attendance_id, enrollment_id, class_id, student_id, session_number, session_date, "
    "status, reason, recorded_by, recorded_at"
)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _row(r) -> AttendanceRecord:
        return AttendanceRecord(
            attendance_id=int(r["attendance_id"]),
            enrollment_id=int(r["enrollment_id"]),
            class_id=int(r["class_id"]),
            student_id=int(r["student_id"]),
            session_number=int(r["session_number"]),
            session_date=r["session_date"],
            status=AttendanceStatus(r["status"]),
            reason=r.get("reason"),
            recorded_by=r.get("recorded_by"),
            recorded_at=r.get("recorded_at"),
        )

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return self._row(r) if r else None

    def get_for_enrollment_session(self, enrollment_id: int, session_number: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE enrollment_id=%s AND session_number=%s
                """,
                (int(enrollment_id), int(session_number)),
            )
            r = fetchone(cur)
            return self._row(r) if r else None

    def list_filtered(
        self,
        *,
        class_id: Optional[int] = None,
        enrollment_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["1=1"]
        params: list[object] = []
        if class_id is not None:
            clauses.append("class_id=%s")
            params.append(int(class_id))
        if enrollment_id is not None:
            clauses.append("enrollment_id=%s")
            params.append(int(enrollment_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {' AND '.join(clauses)}
                ORDER BY session_number ASC, attendance_id ASC
                """,
                tuple(params),
            )
            return [self._row(r) for r in fetchall(cur)]

    def create(self, attendance: NewAttendance, *, recorded_by: str, recorded_at: datetime) -> int:
        status, reason = attendance.mark.to_wire()
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(enrollment_id, class_id, student_id, session_number,
                                                   session_date, status, reason, recorded_by, recorded_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(attendance.enrollment_id),
                        int(attendance.class_id),
                        int(attendance.student_id),
                        int(attendance.session_number),
                        attendance.session_date,
                        status.value,
                        reason,
                        recorded_by,
                        recorded_at,
                    ),
                )
                return int(cur.lastrowid)
        except mysql.connector.errors.IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError(
                    f"Attendance for session {attendance.session_number} is already recorded"
                ) from e
            raise

    def update_mark(
        self,
        *,
        attendance_id: int,
        mark: AttendanceMark,
        recorded_by: str,
        recorded_at: datetime,
    ) -> bool:
        status, reason = mark.to_wire()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, reason=%s, recorded_by=%s, recorded_at=%s
                WHERE attendance_id=%s
                """,
                (status.value, reason, recorded_by, recorded_at, int(attendance_id)),
            )
            return cur.rowcount > 0

    def count_for_enrollment(self, enrollment_id: int) -> int:
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.execute("SELECT COUNT(*) FROM attendance_records WHERE enrollment_id=%s", (int(enrollment_id),))
            row = cur.fetchone()
            return int(row[0]) if row else 0
