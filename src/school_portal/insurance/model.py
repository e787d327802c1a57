from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import InsuranceStatus, InsuranceType


@dataclass(frozen=True)
class InsurancePolicy:
    policy_id: int
    student_id: int
    student_name: str
    policy_number: str
    provider: str
    type: InsuranceType
    start_date: date
    end_date: date
    status: InsuranceStatus
    coverage_amount: Decimal
    premium_amount: Decimal
    qr_code_url: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    def effective_status(self, today: date) -> InsuranceStatus:
        """Stored status, except that a lapsed non-cancelled policy reads as EXPIRED."""
        if self.status != InsuranceStatus.CANCELLED and self.end_date < today:
            return InsuranceStatus.EXPIRED
        return self.status


@dataclass(frozen=True)
class NewPolicy:
    student_id: int
    student_name: str
    policy_number: str
    provider: str
    type: InsuranceType
    start_date: date
    end_date: date
    status: InsuranceStatus
    coverage_amount: Decimal
    premium_amount: Decimal
    qr_code_url: Optional[str] = None


@dataclass(frozen=True)
class InsuranceStats:
    total_policies: int
    active_policies: int
    expiring_soon: int
    total_coverage_value: Decimal
