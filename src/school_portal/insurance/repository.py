from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import InsurancePolicy, NewPolicy


class InsuranceRepository(Protocol):
    def get_by_id(self, policy_id: int) -> Optional[InsurancePolicy]:
        raise NotImplementedError

    def get_by_number(self, policy_number: str) -> Optional[InsurancePolicy]:
        raise NotImplementedError

    def list_filtered(self, *, student_id: Optional[int] = None) -> Sequence[InsurancePolicy]:
        raise NotImplementedError

    def create(self, policy: NewPolicy, *, created_by: str) -> int:
        """Raises ConflictError when the policy number is already taken."""

        raise NotImplementedError
