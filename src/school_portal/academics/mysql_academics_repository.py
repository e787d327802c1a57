from __future__ import annotations

from datetime import time
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, money_or_zero, normalize_mysql_time
from .model import Branch, ClassSession, Program
from .repository import BranchRepository, ClassRepository, ProgramRepository


def _split_days(value: Any) -> tuple[str, ...]:
    return tuple(d for d in str(value or "").split(",") if d)


class MySQLBranchRepository(BranchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _row(r) -> Branch:
        return Branch(
            branch_id=int(r["branch_id"]),
            name=r["name"],
            address=r.get("address"),
            phone=r.get("phone"),
            created_at=r.get("created_at"),
        )

    def get_by_id(self, branch_id: int) -> Optional[Branch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT branch_id, name, address, phone, created_at FROM branches WHERE branch_id=%s",
                (int(branch_id),),
            )
            r = fetchone(cur)
            return self._row(r) if r else None

    def list_all(self) -> Sequence[Branch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT branch_id, name, address, phone, created_at FROM branches ORDER BY name")
            return [self._row(r) for r in fetchall(cur)]

    def create(self, *, name: str, address: Optional[str], phone: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO branches(name, address, phone) VALUES(%s,%s,%s)",
                (name, address, phone),
            )
            return int(cur.lastrowid)


class MySQLProgramRepository(ProgramRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    _COLUMNS = "program_id, branch_id, name, duration_sessions, price, description, created_at"

    @staticmethod
    def _row(r) -> Program:
        return Program(
            program_id=int(r["program_id"]),
            branch_id=int(r["branch_id"]),
            name=r["name"],
            duration_sessions=int(r["duration_sessions"]),
            price=money_or_zero(r.get("price")),
            description=r.get("description"),
            created_at=r.get("created_at"),
        )

    def get_by_id(self, program_id: int) -> Optional[Program]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {self._COLUMNS} FROM programs WHERE program_id=%s", (int(program_id),))
            r = fetchone(cur)
            return self._row(r) if r else None

    def list_for_branch(self, branch_id: Optional[int] = None) -> Sequence[Program]:
        with db_cursor(self._conn_factory) as (_, cur):
            if branch_id is None:
                cur.execute(f"SELECT {self._COLUMNS} FROM programs ORDER BY name")
            else:
                cur.execute(
                    f"SELECT {self._COLUMNS} FROM programs WHERE branch_id=%s ORDER BY name",
                    (int(branch_id),),
                )
            return [self._row(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        branch_id: int,
        name: str,
        duration_sessions: int,
        price: Decimal,
        description: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO programs(branch_id, name, duration_sessions, price, description)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(branch_id), name, int(duration_sessions), price, description),
            )
            return int(cur.lastrowid)


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    _COLUMNS = (
        "class_id, branch_id, program_id, class_name, days, start_time, end_time, "
        "max_students, total_sessions, created_at"
    )

    @staticmethod
    def _row(r) -> ClassSession:
        return ClassSession(
            class_id=int(r["class_id"]),
            branch_id=int(r["branch_id"]),
            program_id=int(r["program_id"]),
            class_name=r["class_name"],
            days=_split_days(r.get("days")),
            start_time=normalize_mysql_time(r["start_time"]),
            end_time=normalize_mysql_time(r["end_time"]),
            max_students=int(r["max_students"]),
            total_sessions=int(r["total_sessions"]),
            created_at=r.get("created_at"),
        )

    def get_by_id(self, class_id: int) -> Optional[ClassSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {self._COLUMNS} FROM classes WHERE class_id=%s", (int(class_id),))
            r = fetchone(cur)
            return self._row(r) if r else None

    def list_filtered(self, *, branch_id: Optional[int] = None, program_id: Optional[int] = None) -> Sequence[ClassSession]:
        clauses = ["1=1"]
        params: list[object] = []
        if branch_id is not None:
            clauses.append("branch_id=%s")
            params.append(int(branch_id))
        if program_id is not None:
            clauses.append("program_id=%s")
            params.append(int(program_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {self._COLUMNS} FROM classes WHERE {' AND '.join(clauses)} ORDER BY class_name",
                tuple(params),
            )
            return [self._row(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        branch_id: int,
        program_id: int,
        class_name: str,
        days: Sequence[str],
        start_time: time,
        end_time: time,
        max_students: int,
        total_sessions: int,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO classes(branch_id, program_id, class_name, days, start_time, end_time, max_students, total_sessions)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(branch_id),
                    int(program_id),
                    class_name,
                    ",".join(days),
                    start_time,
                    end_time,
                    int(max_students),
                    int(total_sessions),
                ),
            )
            return int(cur.lastrowid)
