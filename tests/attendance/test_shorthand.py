from datetime import date

import pytest

from school_portal.attendance.model import AttendanceMark, AttendanceRecord
from school_portal.attendance.shorthand import AttendanceCell, CellState, parse_token
from school_portal.core.enums import AttendanceStatus, MarkKind


def _record(status, reason=None):
    return AttendanceRecord(
        attendance_id=1,
        enrollment_id=1,
        class_id=1,
        student_id=1,
        session_number=1,
        session_date=date(2026, 3, 2),
        status=status,
        reason=reason,
    )


@pytest.mark.parametrize(
    "text, status, display",
    [
        ("p", AttendanceStatus.PRESENT, "P"),
        (" present ", AttendanceStatus.PRESENT, "P"),
        ("absent", AttendanceStatus.ABSENT, "A"),
        ("A", AttendanceStatus.ABSENT, "A"),
        ("l", AttendanceStatus.PERMISSION, "L"),
        ("leave", AttendanceStatus.PERMISSION, "L"),
        # "P" is checked before the Permission keywords
        ("permission", AttendanceStatus.PRESENT, "P"),
    ],
)
def test_parse_token(text, status, display):
    parsed = parse_token(text)
    assert parsed.mark.status == status
    assert parsed.mark.display == display


def test_make_up_token_waits_for_note():
    parsed = parse_token("makeup")
    assert parsed.awaiting_note
    assert parsed.mark is None


@pytest.mark.parametrize("text", ["xyz", "", "   ", None])
def test_unrecognized_tokens(text):
    assert not parse_token(text).recognized


def test_display_from_stored_record():
    assert AttendanceCell(_record(AttendanceStatus.PRESENT)).value == "P"
    assert AttendanceCell(_record(AttendanceStatus.PRESENT, "Make up: Sat")).value == "M"
    assert AttendanceCell(_record(AttendanceStatus.ABSENT)).value == "A"
    assert AttendanceCell(_record(AttendanceStatus.PERMISSION)).value == "L"
    assert AttendanceCell(None).value == ""


def test_plain_status_goes_pending_until_saved():
    cell = AttendanceCell()
    cell.type("p")
    cell.commit()

    assert cell.state == CellState.PENDING
    assert cell.value == "P"
    assert cell.has_pending_change

    mark = cell.save()
    assert mark == AttendanceMark.present()
    assert cell.state == CellState.IDLE
    assert not cell.has_pending_change


def test_cancel_pending_reverts_to_saved_value():
    cell = AttendanceCell(_record(AttendanceStatus.ABSENT))
    cell.type("p")
    cell.commit()
    cell.cancel()

    assert cell.value == "A"
    assert cell.state == CellState.IDLE
    assert cell.save() is None


def test_unrecognized_input_reverts():
    cell = AttendanceCell(_record(AttendanceStatus.PRESENT))
    cell.type("xyz")
    cell.commit()

    assert cell.value == "P"
    assert cell.state == CellState.IDLE
    assert not cell.has_pending_change


def test_same_status_is_not_a_change():
    cell = AttendanceCell(_record(AttendanceStatus.ABSENT))
    cell.type("absent")
    cell.commit()

    assert cell.state == CellState.IDLE
    assert not cell.has_pending_change


def test_make_up_needs_note_confirmation():
    cell = AttendanceCell()
    cell.type("m")
    cell.commit()

    assert cell.state == CellState.AWAITING_NOTE
    assert cell.save() is None

    cell.type("p")
    assert cell.state == CellState.AWAITING_NOTE

    mark = cell.confirm_note("Saturday class")
    assert mark.kind == MarkKind.PRESENT_MAKE_UP
    assert mark.to_wire() == (AttendanceStatus.PRESENT, "Make up: Saturday class")
    assert cell.value == "M"
    assert cell.state == CellState.IDLE


def test_make_up_prefills_existing_note():
    cell = AttendanceCell(_record(AttendanceStatus.PRESENT, "Make up: Sat 10am"))
    cell.type("M")
    cell.commit()

    assert cell.note_draft == "Sat 10am"
    assert cell.confirm_note().note == "Sat 10am"


def test_make_up_cancel_reverts():
    cell = AttendanceCell(_record(AttendanceStatus.ABSENT))
    cell.type("m")
    cell.commit()
    cell.cancel_note()

    assert cell.value == "A"
    assert cell.state == CellState.IDLE


def test_wire_round_trip_keeps_plain_reason():
    mark = AttendanceMark.from_wire(AttendanceStatus.ABSENT, "sick")
    assert mark.kind == MarkKind.ABSENT
    assert mark.to_wire() == (AttendanceStatus.ABSENT, "sick")


@pytest.mark.parametrize(
    "reason, note",
    [("Make up: Sat", "Sat"), ("Make up:Sat", "Sat"), ("Sunday Make up", "Sunday Make up")],
)
def test_any_reason_mentioning_make_up_decodes_as_make_up(reason, note):
    mark = AttendanceMark.from_wire(AttendanceStatus.PRESENT, reason)

    assert mark.kind == MarkKind.PRESENT_MAKE_UP
    assert mark.note == note
    assert mark.to_wire() == (AttendanceStatus.PRESENT, reason)
    assert AttendanceCell(_record(AttendanceStatus.PRESENT, reason)).value == "M"


def test_make_up_marker_on_absent_stays_absent():
    assert AttendanceMark.from_wire(AttendanceStatus.ABSENT, "Make up later").kind == MarkKind.ABSENT
