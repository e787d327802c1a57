"""Single-letter attendance entry.

Staff fill the attendance sheet by typing one letter per cell:

    P / PRESENT              -> Present
    A / ABSENT               -> Absent
    L / LEAVE / PERMISSION   -> Permission
    M / MAKEUP               -> Present with a "Make up: <note>" reason

Matching is by first letter after trimming and upper-casing, checked in the
order M, P, A, L. Because "P" is checked before the Permission keywords,
"PERMISSION" resolves to Present; existing sheets depend on that.

Make-up is the only two-step entry: the token asks for a note and nothing is
final until the note is confirmed. Every other token becomes a pending change
that needs an explicit save, so one stray keystroke cannot overwrite history.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.enums import AttendanceStatus, MarkKind
from .model import AttendanceMark, AttendanceRecord


@dataclass(frozen=True)
class ParsedToken:
    mark: Optional[AttendanceMark] = None
    awaiting_note: bool = False

    @property
    def recognized(self) -> bool:
        return self.mark is not None or self.awaiting_note


UNRECOGNIZED = ParsedToken()


def normalize(text: Optional[str]) -> str:
    return (text or "").strip().upper()


def parse_token(text: Optional[str]) -> ParsedToken:
    raw = normalize(text)
    if raw.startswith("M") or raw == "MAKEUP":
        return ParsedToken(awaiting_note=True)
    if raw.startswith("P") or raw == "PRESENT":
        return ParsedToken(mark=AttendanceMark.present())
    if raw.startswith("A") or raw == "ABSENT":
        return ParsedToken(mark=AttendanceMark.absent())
    if raw.startswith("L") or raw in ("LEAVE", "PERMISSION"):
        return ParsedToken(mark=AttendanceMark.permission())
    return UNRECOGNIZED


def display_for(record: Optional[AttendanceRecord]) -> str:
    return record.display if record else ""


class CellState(str, Enum):
    IDLE = "Idle"
    EDITING = "Editing"
    AWAITING_NOTE = "AwaitingNote"
    PENDING = "Pending"


class AttendanceCell:
    """Editing workflow for one (enrollment, session) cell of the sheet.

    ``commit`` is what happens when the cell loses focus. Methods that
    finalize a change return the :class:`AttendanceMark` the caller must
    persist; everything else returns ``None``.
    """

    def __init__(self, record: Optional[AttendanceRecord] = None):
        self.load(record)

    def load(self, record: Optional[AttendanceRecord]) -> None:
        self._record = record
        self.value = display_for(record)
        self.saved_value = self.value
        self.pending: Optional[AttendanceMark] = None
        self.note_draft = ""
        self.state = CellState.IDLE

    @property
    def has_pending_change(self) -> bool:
        return self.pending is not None

    def type(self, text: str) -> None:
        if self.state == CellState.AWAITING_NOTE:
            return
        self.value = text
        self.state = CellState.EDITING

    def commit(self) -> None:
        if self.state == CellState.AWAITING_NOTE:
            return

        parsed = parse_token(self.value)
        if parsed.awaiting_note:
            current = self._record.mark if self._record else None
            self.note_draft = (current.note or "") if current and current.kind == MarkKind.PRESENT_MAKE_UP else ""
            self.state = CellState.AWAITING_NOTE
            return

        if parsed.mark is None:
            self._revert()
            return

        stored: Optional[AttendanceStatus] = self._record.status if self._record else None
        if stored == parsed.mark.status:
            self._revert()
            return

        self.pending = parsed.mark
        self.value = parsed.mark.display
        self.state = CellState.PENDING

    def confirm_note(self, note: Optional[str] = None) -> Optional[AttendanceMark]:
        if self.state != CellState.AWAITING_NOTE:
            return None
        mark = AttendanceMark.make_up(self.note_draft if note is None else note)
        self.value = mark.display
        self.saved_value = mark.display
        self.pending = None
        self.note_draft = ""
        self.state = CellState.IDLE
        return mark

    def cancel_note(self) -> None:
        if self.state != CellState.AWAITING_NOTE:
            return
        self.note_draft = ""
        self._revert()

    def save(self) -> Optional[AttendanceMark]:
        if self.pending is None:
            return None
        mark = self.pending
        self.saved_value = self.value
        self.pending = None
        self.state = CellState.IDLE
        return mark

    def cancel(self) -> None:
        self._revert()

    def _revert(self) -> None:
        self.value = self.saved_value
        self.pending = None
        self.state = CellState.IDLE
