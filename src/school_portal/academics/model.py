from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Branch:
    branch_id: int
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Program:
    """A course offered by one branch; duration_sessions seeds its classes' total_sessions."""

    program_id: int
    branch_id: int
    name: str
    duration_sessions: int
    price: Decimal
    description: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ClassSession:
    """A scheduled class (e.g. "Morning-A") running a program at a branch."""

    class_id: int
    branch_id: int
    program_id: int
    class_name: str
    start_time: time
    end_time: time
    max_students: int
    total_sessions: int
    days: tuple[str, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None
