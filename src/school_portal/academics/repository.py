from __future__ import annotations

from datetime import time
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Branch, ClassSession, Program


class BranchRepository(Protocol):
    def get_by_id(self, branch_id: int) -> Optional[Branch]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Branch]:
        raise NotImplementedError

    def create(self, *, name: str, address: Optional[str], phone: Optional[str]) -> int:
        raise NotImplementedError


class ProgramRepository(Protocol):
    def get_by_id(self, program_id: int) -> Optional[Program]:
        raise NotImplementedError

    def list_for_branch(self, branch_id: Optional[int] = None) -> Sequence[Program]:
        raise NotImplementedError

    def create(
        self,
        *,
        branch_id: int,
        name: str,
        duration_sessions: int,
        price: Decimal,
        description: Optional[str],
    ) -> int:
        raise NotImplementedError


class ClassRepository(Protocol):
    def get_by_id(self, class_id: int) -> Optional[ClassSession]:
        raise NotImplementedError

    def list_filtered(self, *, branch_id: Optional[int] = None, program_id: Optional[int] = None) -> Sequence[ClassSession]:
        raise NotImplementedError

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
        raise NotImplementedError
