from src.lesson_tracker.lesson_tracker.attendance.state_machine import STATUS_CYCLE, css_class_for, next_status
from src.lesson_tracker.lesson_tracker.core.enums import AttendanceStatus


def test_four_toggles_return_fresh_cell_to_unset():
    seen = []
    current = AttendanceStatus.UNSET
    for _ in range(4):
        current = next_status(current.value)
        seen.append(current)

    assert seen == [
        AttendanceStatus.PRESENT,
        AttendanceStatus.ABSENT,
        AttendanceStatus.PARTIAL,
        AttendanceStatus.UNSET,
    ]


def test_displayed_text_is_trimmed_before_lookup():
    assert next_status("  O \n") == AttendanceStatus.ABSENT
    assert next_status(None) == AttendanceStatus.PRESENT


def test_unrecognized_text_resets_to_unset():
    assert next_status("L") == AttendanceStatus.UNSET


def test_cycle_has_no_terminal_state():
    for status in STATUS_CYCLE:
        assert next_status(status) in STATUS_CYCLE
        assert next_status(status) != status


def test_css_classes():
    assert css_class_for("") == ""
    assert css_class_for("O") == "present"
    assert css_class_for(AttendanceStatus.ABSENT) == "absent"
    assert css_class_for("/") == "partial"
    assert css_class_for("?") == ""
