"""Example: the attendance rules without Flask or MySQL.

Walks one enrollment through the payment calculator, the eligibility guard,
the shorthand cell and the class report.
"""

from datetime import date, datetime
from decimal import Decimal

from school_portal.attendance.eligibility import can_record_attendance
from school_portal.attendance.model import AttendanceMark, AttendanceRecord
from school_portal.attendance.shorthand import AttendanceCell
from school_portal.core.enums import EnrollmentStatus, PaymentStatus, PaymentType
from school_portal.enrollments.model import Enrollment
from school_portal.enrollments.payment import derive_payment_status
from school_portal.reports.aggregator import build_report


def main():
    status = derive_payment_status(Decimal("100"), Decimal("20"), Decimal("80"))
    enrollment = Enrollment(
        enrollment_id=1,
        student_id=10,
        class_id=5,
        start_session=3,
        total_amount=Decimal("100.00"),
        discount=Decimal("20.00"),
        paid_amount=Decimal("80.00"),
        payment_status=status,
        payment_type=PaymentType.CASH,
        enrollment_status=EnrollmentStatus.ACTIVE,
    )
    print("payment:", status.value)
    print("session 2:", can_record_attendance(enrollment, 2, existing=None))
    print("session 3:", can_record_attendance(enrollment, 3, existing=None))

    cell = AttendanceCell()
    cell.type("m")
    cell.commit()
    mark = cell.confirm_note("Sat 10am")
    print("cell:", cell.value, mark.to_wire())

    records = [
        AttendanceRecord(
            attendance_id=n,
            enrollment_id=1,
            class_id=5,
            student_id=10,
            session_number=n,
            session_date=date(2026, 1, n),
            status=m.status,
            reason=m.reason,
            recorded_at=datetime(2026, 1, n, 9, 0),
        )
        for n, m in ((3, AttendanceMark.present()), (4, AttendanceMark.absent()), (5, mark))
    ]
    for row in build_report([enrollment], records, 5):
        print("report:", row)

    assert status == PaymentStatus.PAID


if __name__ == "__main__":
    main()
