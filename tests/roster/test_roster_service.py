from __future__ import annotations

import pytest

from school_attendance.core.enums import AttendanceStatus, EnrollmentStatus
from school_attendance.core.exceptions import ValidationError
from school_attendance.roster import service as roster_module
from school_attendance.roster.model import ClassGroup, Student
from school_attendance.roster.service import sort_classes


def test_classes_sort_naturally_by_name():
    classes = [ClassGroup("a", "10º Ano"), ClassGroup("b", "2º ano"), ClassGroup("c", "1º Ano B")]

    assert [c.class_id for c in sort_classes(classes)] == ["c", "b", "a"]


def test_class_students_are_alphabetical_and_filterable(roster):
    assert [s.name for s in roster.class_students("c-1")] == ["Ana", "Bruno", "Carla"]
    assert [s.name for s in roster.class_students("c-1", status_filter="Evasão")] == ["Carla"]
    assert roster.class_students("c-404") == []


def test_add_student_mints_millisecond_id(roster, state, monkeypatch):
    monkeypatch.setattr(roster_module, "now_millis", lambda: 1700000000000)

    student = roster.add_student(name="  Davi ", class_id="c-1")

    assert student.student_id == "s-1700000000000"
    assert student.name == "Davi"
    assert student.status is EnrollmentStatus.ACTIVE
    assert state.students[-1] == student


def test_add_students_batch_ids(roster, monkeypatch):
    monkeypatch.setattr(roster_module, "now_millis", lambda: 42)

    created = roster.add_students(["Eva", "  ", "Fabio"], class_id="c-1")

    assert [s.student_id for s in created] == ["s-42-0", "s-42-1"]


def test_add_student_requires_name(roster):
    with pytest.raises(ValidationError):
        roster.add_student(name=" ", class_id="c-1")


def test_remove_student_cascades_attendance(roster, state):
    state.attendance.write("s-1", "2025-03-05", 0, AttendanceStatus.PRESENT)

    roster.remove_student("s-1")

    assert state.student_by_id("s-1") is None
    assert "s-1" not in state.attendance


def test_create_class_is_sorted_and_selected(roster, state, monkeypatch):
    monkeypatch.setattr(roster_module, "now_millis", lambda: 7)

    created = roster.create_class("0º Ano")

    assert created.class_id == "c-7"
    assert state.classes[0] == created
    assert state.selected_class_id == "c-7"


def test_remove_class_cascades_and_clears_selection(roster, state):
    state.attendance.write("s-2", "2025-03-05", 0, AttendanceStatus.ABSENT)

    removed = roster.remove_class("c-1")

    assert sorted(removed) == ["s-1", "s-2", "s-3"]
    assert state.students == []
    assert len(state.attendance) == 0
    assert state.selected_class_id == ""


def test_rename_unknown_class(roster):
    with pytest.raises(ValidationError):
        roster.rename_class("c-404", "Nova")


def test_set_student_status(roster, state):
    roster.set_student_status("s-1", EnrollmentStatus.TRANSFERRED)

    assert state.student_by_id("s-1").status is EnrollmentStatus.TRANSFERRED


def test_remove_class_leaves_other_classes_untouched(roster, state):
    state.classes = [*state.classes, ClassGroup("c-2", "2º Ano")]
    state.students = [*state.students, Student("s-9", "Zé", EnrollmentStatus.ACTIVE, "c-2")]
    state.attendance.write("s-1", "2025-03-05", 1, AttendanceStatus.ABSENT)
    state.attendance.write("s-9", "2025-03-05", 0, AttendanceStatus.PRESENT)

    roster.remove_class("c-1")

    assert [s.student_id for s in state.students] == ["s-9"]
    assert "s-1" not in state.attendance
    assert state.attendance.status_at("s-9", "2025-03-05", 0) is AttendanceStatus.PRESENT


def test_unknown_status_filter_is_rejected(roster):
    with pytest.raises(ValidationError):
        roster.class_students("c-1", status_filter="Formado")
