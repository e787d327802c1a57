from __future__ import annotations

from enum import Enum


class PaymentStatus(str, Enum):
    """Derived from the enrollment's financial fields, never set by hand."""

    PAID = "Paid"
    UNPAID = "Unpaid"


class PaymentType(str, Enum):
    CASH = "Cash"
    ABA = "ABA"
    BANK_TRANSFER = "Bank Transfer"


class EnrollmentStatus(str, Enum):
    """Administrative state of an enrollment. HOLD pauses attendance tracking."""

    ACTIVE = "Active"
    HOLD = "Hold"
    COMPLETED = "Completed"
    DROPPED = "Dropped"


class AttendanceStatus(str, Enum):
    """Stored attendance status (wire/DB value)."""

    PRESENT = "Present"
    ABSENT = "Absent"
    PERMISSION = "Permission"


class MarkKind(str, Enum):
    """In-memory attendance variant; PRESENT_MAKE_UP is stored as PRESENT plus a reason."""

    PRESENT = "Present"
    PRESENT_MAKE_UP = "PresentMakeUp"
    ABSENT = "Absent"
    PERMISSION = "Permission"


class RejectionReason(str, Enum):
    """Why the eligibility guard refused to record a session."""

    NOT_FOUND = "NotFound"
    BEFORE_START_SESSION = "BeforeStartSession"
    ENROLLMENT_ON_HOLD = "EnrollmentOnHold"
    DUPLICATE_SESSION = "DuplicateSession"


class Grade(str, Enum):
    GOOD = "Good"
    WARNING = "Warning"
    CRITICAL = "Critical"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class StudentStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class InsuranceStatus(str, Enum):
    ACTIVE = "Active"
    EXPIRED = "Expired"
    PENDING = "Pending"
    CANCELLED = "Cancelled"


class InsuranceType(str, Enum):
    HEALTH = "Health"
    ACCIDENT = "Accident"
    LIFE = "Life"
    COMPREHENSIVE = "Comprehensive"
