from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import InsuranceStatus, InsuranceType
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, money_or_zero
from .model import InsurancePolicy, NewPolicy
from .repository import InsuranceRepository

_COLUMNS = (
    "policy_id, student_id, student_name, policy_number, provider, type, start_date, end_date, status, "
    "coverage_amount, premium_amount, qr_code_url, created_by, created_at"
)


class MySQLInsuranceRepository(InsuranceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _row(r) -> InsurancePolicy:
        return InsurancePolicy(
            policy_id=int(r["policy_id"]),
            student_id=int(r["student_id"]),
            student_name=r["student_name"],
            policy_number=r["policy_number"],
            provider=r["provider"],
            type=InsuranceType(r["type"]),
            start_date=r["start_date"],
            end_date=r["end_date"],
            status=InsuranceStatus(r["status"]),
            coverage_amount=money_or_zero(r.get("coverage_amount")),
            premium_amount=money_or_zero(r.get("premium_amount")),
            qr_code_url=r.get("qr_code_url"),
            created_by=r.get("created_by"),
            created_at=r.get("created_at"),
        )

    def get_by_id(self, policy_id: int) -> Optional[InsurancePolicy]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM insurance_policies WHERE policy_id=%s", (int(policy_id),))
            r = fetchone(cur)
            return self._row(r) if r else None

    def get_by_number(self, policy_number: str) -> Optional[InsurancePolicy]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM insurance_policies WHERE policy_number=%s", (policy_number,))
            r = fetchone(cur)
            return self._row(r) if r else None

    def list_filtered(self, *, student_id: Optional[int] = None) -> Sequence[InsurancePolicy]:
        with db_cursor(self._conn_factory) as (_, cur):
            if student_id is None:
                cur.execute(f"SELECT {_COLUMNS} FROM insurance_policies ORDER BY end_date")
            else:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM insurance_policies WHERE student_id=%s ORDER BY end_date",
                    (int(student_id),),
                )
            return [self._row(r) for r in fetchall(cur)]

    def create(self, policy: NewPolicy, *, created_by: str) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO insurance_policies(student_id, student_name, policy_number, provider, type,
                                                   start_date, end_date, status, coverage_amount,
                                                   premium_amount, qr_code_url, created_by)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(policy.student_id),
                        policy.student_name,
                        policy.policy_number,
                        policy.provider,
                        policy.type.value,
                        policy.start_date,
                        policy.end_date,
                        policy.status.value,
                        policy.coverage_amount,
                        policy.premium_amount,
                        policy.qr_code_url,
                        created_by,
                    ),
                )
                return int(cur.lastrowid)
        except mysql.connector.errors.IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError(f"Policy number {policy.policy_number} already exists") from e
            raise
