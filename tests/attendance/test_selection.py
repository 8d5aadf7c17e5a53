from __future__ import annotations

from datetime import date

from school_attendance.attendance.selection import ClassSectionSelection, PeriodSelection

DAY = date(2024, 5, 1)
ALL = [1, 2, 3, 4]


def test_changing_class_resets_section():
    sel = ClassSectionSelection(class_id=1, section_id=3)

    changed = sel.change_class(2)

    assert changed.class_id == 2
    assert changed.section_id is None
    assert not changed.is_complete


def test_change_section_keeps_class():
    sel = ClassSectionSelection(class_id=1).change_section(4)
    assert sel == ClassSectionSelection(class_id=1, section_id=4)
    assert sel.is_complete


def test_toggle_adds_in_order_and_removes():
    sel = PeriodSelection(DAY).toggle(3).toggle(1)
    assert sel.periods == (1, 3)

    assert sel.toggle(3).periods == (1,)


def test_toggle_all_selects_everything_then_clears():
    empty = PeriodSelection(DAY)

    full = empty.toggle_all(ALL)
    assert full.periods == (1, 2, 3, 4)
    assert full.all_selected(ALL)

    assert full.toggle_all(ALL) == empty


def test_toggle_all_twice_from_full_returns_full():
    full = PeriodSelection(DAY, (1, 2, 3, 4))
    assert full.toggle_all(ALL).toggle_all(ALL) == full


def test_toggle_all_from_partial_selects_everything():
    assert PeriodSelection(DAY, (2,)).toggle_all(ALL).periods == (1, 2, 3, 4)


def test_change_date_keeps_periods():
    sel = PeriodSelection(DAY, (2, 1)).change_date(date(2024, 5, 2))
    assert sel.selected_date == date(2024, 5, 2)
    assert sel.periods == (1, 2)
