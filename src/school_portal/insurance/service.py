from __future__ import annotations

import dataclasses
import io
import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_local, require_date
from ..common.money import require_amount
from ..common.validators import optional_text, require_enum, require_int, require_non_empty
from ..core.constants import DEFAULT_INSURANCE_EXPIRING_DAYS
from ..core.enums import InsuranceStatus, InsuranceType
from ..core.exceptions import NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .model import InsurancePolicy, InsuranceStats, NewPolicy
from .qr import render_qr_png
from .repository import InsuranceRepository

logger = logging.getLogger(__name__)


class InsuranceService:
    """Use case: student insurance policies and their digital cards.

    Policies come back with their *effective* status: a policy past its end
    date reads as Expired unless it was cancelled.
    """

    def __init__(
        self,
        policies: InsuranceRepository,
        students: Optional[StudentRepository] = None,
        *,
        expiring_days: int = DEFAULT_INSURANCE_EXPIRING_DAYS,
    ):
        self._policies = policies
        self._students = students
        self._expiring_days = int(expiring_days)

    @staticmethod
    def _effective(policy: InsurancePolicy, today: date) -> InsurancePolicy:
        status = policy.effective_status(today)
        if status == policy.status:
            return policy
        return dataclasses.replace(policy, status=status)

    def create(
        self,
        *,
        actor: str,
        student_id: Any,
        policy_number: str,
        provider: str,
        type: Any,
        start_date: Any,
        end_date: Any,
        coverage_amount: Any,
        premium_amount: Any = 0,
        status: Any = None,
        student_name: Optional[str] = None,
        qr_code_url: Optional[str] = None,
        today: Optional[date] = None,
    ) -> InsurancePolicy:
        student = require_int(student_id, "student_id")
        starts = require_date(start_date, "start_date")
        ends = require_date(end_date, "end_date")
        if ends < starts:
            raise ValidationError("end_date cannot be before start_date")

        name = optional_text(student_name)
        if self._students:
            found = self._students.get_by_id(student)
            if not found:
                raise NotFoundError(f"Student {student} not found")
            name = name or found.name

        new = NewPolicy(
            student_id=student,
            student_name=require_non_empty(name, "student_name"),
            policy_number=require_non_empty(policy_number, "policy_number"),
            provider=require_non_empty(provider, "provider"),
            type=require_enum(type, InsuranceType, "type"),
            start_date=starts,
            end_date=ends,
            status=require_enum(status, InsuranceStatus, "status") if status else InsuranceStatus.ACTIVE,
            coverage_amount=require_amount(coverage_amount, "coverage_amount"),
            premium_amount=require_amount(premium_amount, "premium_amount", default=0),
            qr_code_url=optional_text(qr_code_url),
        )
        policy_id = self._policies.create(new, created_by=actor)
        logger.info("Insurance policy %s (%s) created for student %s by %s", policy_id, new.policy_number, student, actor)
        return self.get(policy_id, today=today)

    def get(self, policy_id: int, *, today: Optional[date] = None) -> InsurancePolicy:
        policy = self._policies.get_by_id(int(policy_id))
        if not policy:
            raise NotFoundError(f"Insurance policy {policy_id} not found")
        return self._effective(policy, today or now_local().date())

    def verify(self, policy_number: str, *, today: Optional[date] = None) -> InsurancePolicy:
        """Look a policy up by the number printed on (and encoded in) its card."""
        number = require_non_empty(policy_number, "policy_number")
        policy = self._policies.get_by_number(number)
        if not policy:
            raise NotFoundError(f"Insurance policy {number} not found")
        return self._effective(policy, today or now_local().date())

    def list(
        self,
        *,
        student_id: Optional[int] = None,
        status: Any = None,
        today: Optional[date] = None,
    ) -> Sequence[InsurancePolicy]:
        wanted = require_enum(status, InsuranceStatus, "status") if status else None
        day = today or now_local().date()
        policies = [self._effective(p, day) for p in self._policies.list_filtered(student_id=student_id)]
        if wanted is not None:
            policies = [p for p in policies if p.status == wanted]
        return policies

    def stats(self, *, today: Optional[date] = None) -> InsuranceStats:
        day = today or now_local().date()
        horizon = day + timedelta(days=self._expiring_days)
        policies = self.list(today=day)
        active = [p for p in policies if p.status == InsuranceStatus.ACTIVE]
        return InsuranceStats(
            total_policies=len(policies),
            active_policies=len(active),
            expiring_soon=sum(1 for p in active if p.end_date <= horizon),
            total_coverage_value=sum((p.coverage_amount for p in active), Decimal("0.00")),
        )

    def qr_png(self, policy_id: int) -> io.BytesIO:
        policy = self._policies.get_by_id(int(policy_id))
        if not policy:
            raise NotFoundError(f"Insurance policy {policy_id} not found")
        return render_qr_png(policy.policy_number)
