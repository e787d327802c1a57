from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .academics.mysql_academics_repository import (
    MySQLBranchRepository,
    MySQLClassRepository,
    MySQLProgramRepository,
)
from .academics.repository import BranchRepository, ClassRepository, ProgramRepository
from .academics.service import AcademicsService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_INSURANCE_EXPIRING_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .enrollments.mysql_enrollment_repository import MySQLEnrollmentRepository
from .enrollments.repository import EnrollmentRepository
from .enrollments.service import EnrollmentService
from .insurance.mysql_insurance_repository import MySQLInsuranceRepository
from .insurance.repository import InsuranceRepository
from .insurance.service import InsuranceService
from .reports.denominator.factory import denominator_for
from .reports.service import AttendanceReportService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    branches_repo: BranchRepository
    programs_repo: ProgramRepository
    classes_repo: ClassRepository
    students_repo: StudentRepository
    enrollments_repo: EnrollmentRepository
    attendance_repo: AttendanceRepository
    insurance_repo: InsuranceRepository

    academics_service: AcademicsService
    student_service: StudentService
    enrollment_service: EnrollmentService
    attendance_service: AttendanceService
    report_service: AttendanceReportService
    insurance_service: InsuranceService


def assemble(
    *,
    branches_repo: BranchRepository,
    programs_repo: ProgramRepository,
    classes_repo: ClassRepository,
    students_repo: StudentRepository,
    enrollments_repo: EnrollmentRepository,
    attendance_repo: AttendanceRepository,
    insurance_repo: InsuranceRepository,
    conn: Optional[DatabaseConnection] = None,
    report_denominator: Optional[str] = None,
    insurance_expiring_days: int = DEFAULT_INSURANCE_EXPIRING_DAYS,
) -> Container:
    """Wire services over the given repositories (MySQL in the app, in-memory in tests)."""
    return Container(
        conn=conn,
        branches_repo=branches_repo,
        programs_repo=programs_repo,
        classes_repo=classes_repo,
        students_repo=students_repo,
        enrollments_repo=enrollments_repo,
        attendance_repo=attendance_repo,
        insurance_repo=insurance_repo,
        academics_service=AcademicsService(branches_repo, programs_repo, classes_repo),
        student_service=StudentService(students_repo, branches_repo),
        enrollment_service=EnrollmentService(enrollments_repo, attendance_repo, students_repo, classes_repo),
        attendance_service=AttendanceService(attendance_repo, enrollments_repo),
        report_service=AttendanceReportService(
            enrollments_repo,
            attendance_repo,
            classes_repo,
            denominator=denominator_for(report_denominator),
        ),
        insurance_service=InsuranceService(insurance_repo, students_repo, expiring_days=insurance_expiring_days),
    )


def build_container(
    *,
    db_config: dict,
    report_denominator: Optional[str] = None,
    insurance_expiring_days: int = DEFAULT_INSURANCE_EXPIRING_DAYS,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        connection_timeout=int(db_config.get("connection_timeout", 10)),
    )
    conn = DatabaseConnection.get_instance(config)

    return assemble(
        conn=conn,
        branches_repo=MySQLBranchRepository(conn),
        programs_repo=MySQLProgramRepository(conn),
        classes_repo=MySQLClassRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        enrollments_repo=MySQLEnrollmentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        insurance_repo=MySQLInsuranceRepository(conn),
        report_denominator=report_denominator,
        insurance_expiring_days=insurance_expiring_days,
    )
