from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import EnrollmentStatus, PaymentStatus, PaymentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, money_or_zero
from .model import Enrollment, NewEnrollment
from .repository import EnrollmentRepository

_COLUMNS = (
    "enrollment_id, student_id, class_id, term, start_session, total_amount, discount, paid_amount, "
    "payment_status, payment_type, enrollment_status, payment_expired_date, created_by, enrolled_at"
)


class MySQLEnrollmentRepository(EnrollmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _row(r) -> Enrollment:
        return Enrollment(
            enrollment_id=int(r["enrollment_id"]),
            student_id=int(r["student_id"]),
            class_id=int(r["class_id"]),
            term=r.get("term"),
            start_session=int(r["start_session"]),
            total_amount=money_or_zero(r["total_amount"]),
            discount=money_or_zero(r.get("discount")),
            paid_amount=money_or_zero(r.get("paid_amount")),
            payment_status=PaymentStatus(r["payment_status"]),
            payment_type=PaymentType(r["payment_type"]),
            enrollment_status=EnrollmentStatus(r["enrollment_status"]),
            payment_expired_date=r.get("payment_expired_date"),
            created_by=r.get("created_by"),
            enrolled_at=r.get("enrolled_at"),
        )

    def get_by_id(self, enrollment_id: int) -> Optional[Enrollment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM enrollments WHERE enrollment_id=%s", (int(enrollment_id),))
            r = fetchone(cur)
            return self._row(r) if r else None

    def list_filtered(self, *, class_id: Optional[int] = None, student_id: Optional[int] = None) -> Sequence[Enrollment]:
        clauses = ["1=1"]
        params: list[object] = []
        if class_id is not None:
            clauses.append("class_id=%s")
            params.append(int(class_id))
        if student_id is not None:
            clauses.append("student_id=%s")
            params.append(int(student_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM enrollments WHERE {' AND '.join(clauses)} ORDER BY enrollment_id",
                tuple(params),
            )
            return [self._row(r) for r in fetchall(cur)]

    def create(self, enrollment: NewEnrollment, *, created_by: str, enrolled_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO enrollments(student_id, class_id, term, start_session, total_amount, discount,
                                        paid_amount, payment_status, payment_type, payment_expired_date,
                                        created_by, enrolled_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(enrollment.student_id),
                    int(enrollment.class_id),
                    enrollment.term,
                    int(enrollment.start_session),
                    enrollment.total_amount,
                    enrollment.discount,
                    enrollment.paid_amount,
                    enrollment.payment_status.value,
                    enrollment.payment_type.value,
                    enrollment.payment_expired_date,
                    created_by,
                    enrolled_at,
                ),
            )
            return int(cur.lastrowid)

    def update_financials(
        self,
        *,
        enrollment_id: int,
        total_amount: Decimal,
        discount: Decimal,
        paid_amount: Decimal,
        payment_status: PaymentStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE enrollments
                SET total_amount=%s, discount=%s, paid_amount=%s, payment_status=%s
                WHERE enrollment_id=%s
                """,
                (total_amount, discount, paid_amount, payment_status.value, int(enrollment_id)),
            )
            return cur.rowcount > 0

    def set_status(self, enrollment_id: int, *, status: EnrollmentStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE enrollments SET enrollment_status=%s WHERE enrollment_id=%s",
                (status.value, int(enrollment_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, enrollment_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM enrollments WHERE enrollment_id=%s", (int(enrollment_id),))
            return cur.rowcount > 0
