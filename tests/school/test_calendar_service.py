from __future__ import annotations

import pytest

from school_attendance.core.exceptions import ValidationError
from school_attendance.school.service import SchoolCalendarService


def test_subjects_are_sorted_and_unique(state):
    svc = SchoolCalendarService(state)

    svc.add_subject("Português")
    svc.add_subject("Artes")
    svc.add_subject("Artes")

    assert state.registered_subjects == ["Artes", "Português"]
    assert svc.remove_subject("Artes") == ["Português"]


def test_holidays_unique_by_date_and_sorted(state):
    svc = SchoolCalendarService(state)

    svc.save_holiday(date="2025-11-15", name="Proclamação")
    svc.save_holiday(date="2025-04-21", name="Tiradentes")
    svc.save_holiday(date="2025-04-21", name="Tiradentes (feriado)")

    assert [(h.date, h.name) for h in state.holidays] == [
        ("2025-04-21", "Tiradentes (feriado)"),
        ("2025-11-15", "Proclamação"),
    ]


def test_editing_holiday_date_replaces_original(state):
    svc = SchoolCalendarService(state)
    svc.save_holiday(date="2025-04-21", name="Tiradentes")

    svc.save_holiday(date="2025-04-22", name="Tiradentes", original_date="2025-04-21")

    assert [h.date for h in state.holidays] == ["2025-04-22"]


def test_holiday_requires_iso_date(state):
    with pytest.raises(ValidationError):
        SchoolCalendarService(state).save_holiday(date="21/04/2025", name="Tiradentes")


def test_update_bimester_dates(state):
    svc = SchoolCalendarService(state)

    updated = svc.update_bimester(2, "end", "2025-07-18")

    assert updated.end == "2025-07-18"
    assert state.bimesters[1].end == "2025-07-18"
    with pytest.raises(ValidationError):
        svc.update_bimester(2, "name", "x")
    with pytest.raises(ValidationError):
        svc.update_bimester(9, "start", "2025-01-01")
