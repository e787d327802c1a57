from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from ..common.datetime_utils import require_clock_time
from ..common.money import require_amount
from ..common.validators import optional_text, require_int, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Branch, ClassSession, Program
from .repository import BranchRepository, ClassRepository, ProgramRepository

logger = logging.getLogger(__name__)

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class AcademicsService:
    """Use case: branch / program / class setup."""

    def __init__(self, branches: BranchRepository, programs: ProgramRepository, classes: ClassRepository):
        self._branches = branches
        self._programs = programs
        self._classes = classes

    # --- branches

    def create_branch(self, *, actor: str, name: str, address: Optional[str] = None, phone: Optional[str] = None) -> Branch:
        branch_id = self._branches.create(
            name=require_non_empty(name, "name"),
            address=optional_text(address),
            phone=optional_text(phone),
        )
        logger.info("Branch %s created by %s", branch_id, actor)
        return self.get_branch(branch_id)

    def get_branch(self, branch_id: int) -> Branch:
        branch = self._branches.get_by_id(int(branch_id))
        if not branch:
            raise NotFoundError(f"Branch {branch_id} not found")
        return branch

    def list_branches(self) -> Sequence[Branch]:
        return self._branches.list_all()

    # --- programs

    def create_program(
        self,
        *,
        actor: str,
        branch_id: Any,
        name: str,
        duration_sessions: Any,
        price: Any,
        description: Optional[str] = None,
    ) -> Program:
        branch = self.get_branch(require_int(branch_id, "branch_id"))
        program_id = self._programs.create(
            branch_id=branch.branch_id,
            name=require_non_empty(name, "name"),
            duration_sessions=require_int(duration_sessions, "duration_sessions", minimum=1),
            price=require_amount(price, "price", default=0),
            description=optional_text(description),
        )
        logger.info("Program %s created in branch %s by %s", program_id, branch.branch_id, actor)
        return self.get_program(program_id)

    def get_program(self, program_id: int) -> Program:
        program = self._programs.get_by_id(int(program_id))
        if not program:
            raise NotFoundError(f"Program {program_id} not found")
        return program

    def list_programs(self, *, branch_id: Optional[int] = None) -> Sequence[Program]:
        return self._programs.list_for_branch(branch_id)

    # --- classes

    @staticmethod
    def _normalize_days(days: Optional[Iterable[str]]) -> tuple[str, ...]:
        if days is None:
            return ()
        if isinstance(days, str):
            days = [d for d in days.split(",")]
        out: list[str] = []
        for d in days:
            day = str(d).strip().capitalize()[:3]
            if day not in WEEKDAYS:
                raise ValidationError(f"Unknown weekday: {d!r}")
            if day not in out:
                out.append(day)
        return tuple(sorted(out, key=WEEKDAYS.index))

    def create_class(
        self,
        *,
        actor: str,
        branch_id: Any,
        program_id: Any,
        class_name: str,
        start_time: Any,
        end_time: Any,
        max_students: Any,
        days: Optional[Iterable[str]] = None,
        total_sessions: Any = None,
    ) -> ClassSession:
        branch = self.get_branch(require_int(branch_id, "branch_id"))
        program = self.get_program(require_int(program_id, "program_id"))
        if program.branch_id != branch.branch_id:
            raise ValidationError("Program does not belong to this branch")

        start = require_clock_time(start_time, "start_time")
        end = require_clock_time(end_time, "end_time")
        if end <= start:
            raise ValidationError("end_time must be after start_time")

        # Classes inherit the program's session count unless overridden.
        sessions = program.duration_sessions
        if total_sessions not in (None, ""):
            sessions = require_int(total_sessions, "total_sessions", minimum=1)

        class_id = self._classes.create(
            branch_id=branch.branch_id,
            program_id=program.program_id,
            class_name=require_non_empty(class_name, "class_name"),
            days=self._normalize_days(days),
            start_time=start,
            end_time=end,
            max_students=require_int(max_students, "max_students", minimum=1),
            total_sessions=sessions,
        )
        logger.info("Class %s created for program %s by %s", class_id, program.program_id, actor)
        return self.get_class(class_id)

    def get_class(self, class_id: int) -> ClassSession:
        cls = self._classes.get_by_id(int(class_id))
        if not cls:
            raise NotFoundError(f"Class {class_id} not found")
        return cls

    def list_classes(self, *, branch_id: Optional[int] = None, program_id: Optional[int] = None) -> Sequence[ClassSession]:
        return self._classes.list_filtered(branch_id=branch_id, program_id=program_id)
