from __future__ import annotations

import re
from typing import Iterable, Optional

from ..common.datetime_utils import now_millis
from ..common.validators import require_non_empty
from ..core.constants import ALL
from ..core.enums import EnrollmentStatus
from ..core.exceptions import ValidationError
from ..state import AppState
from .model import ClassGroup, Student


def natural_key(name: str) -> list:
    """Case-insensitive sort key that orders embedded numbers numerically ("2º" < "10º")."""
    return [(0, int(part), "") if part.isdigit() else (1, 0, part.casefold()) for part in re.split(r"(\d+)", name)]


def sort_classes(classes: Iterable[ClassGroup]) -> list[ClassGroup]:
    return sorted(classes, key=lambda c: natural_key(c.name))


class RosterService:
    """Use case: local roster mutations (students and classes).

    Mutations here are the optimistic half of a save; pushing to the remote
    and rolling back is the :class:`~school_attendance.sync.coordinator.SyncCoordinator`'s job.
    """

    def __init__(self, state: AppState):
        self._state = state

    def class_students(self, class_id: Optional[str], *, status_filter: str = ALL) -> list[Student]:
        """Students shown in a class grid, alphabetical."""
        if not self._state.class_by_id(class_id):
            return []
        students = [s for s in self._state.students if s.class_id == class_id]
        if status_filter != ALL:
            try:
                wanted = EnrollmentStatus(status_filter)
            except ValueError:
                raise ValidationError(f"Situação inválida: {status_filter}")
            students = [s for s in students if s.status is wanted]
        return sorted(students, key=lambda s: s.name.casefold())

    def search(self, *, term: str = "", class_id: str = ALL, status: str = ALL) -> list[Student]:
        term = (term or "").casefold()
        out = []
        for s in self._state.students:
            if term and term not in s.name.casefold():
                continue
            if class_id != ALL and s.class_id != class_id:
                continue
            if status != ALL and s.status.value != status:
                continue
            out.append(s)
        return out

    def add_student(self, *, name: str, class_id: Optional[str], status: Optional[EnrollmentStatus] = None) -> Student:
        student = Student(
            student_id=f"s-{now_millis()}",
            name=require_non_empty(name, "Nome"),
            status=status or EnrollmentStatus.ACTIVE,
            class_id=class_id or None,
        )
        self._state.students = [*self._state.students, student]
        return student

    def add_students(self, names: Iterable[str], *, class_id: str, status: Optional[EnrollmentStatus] = None) -> list[Student]:
        stamp = now_millis()
        clean = [n.strip() for n in names if n and n.strip()]
        if not clean:
            raise ValidationError("Informe ao menos um nome")
        created = [
            Student(student_id=f"s-{stamp}-{i}", name=name, status=status or EnrollmentStatus.ACTIVE, class_id=class_id)
            for i, name in enumerate(clean)
        ]
        self._state.students = [*self._state.students, *created]
        return created

    def update_student(self, student: Student) -> Student:
        if not self._state.student_by_id(student.student_id):
            raise ValidationError("Aluno não encontrado")
        require_non_empty(student.name, "Nome")
        self._state.students = [student if s.student_id == student.student_id else s for s in self._state.students]
        return student

    def set_student_status(self, student_id: str, status: EnrollmentStatus) -> Student:
        current = self._state.student_by_id(student_id)
        if not current:
            raise ValidationError("Aluno não encontrado")
        return self.update_student(current.with_status(status))

    def remove_student(self, student_id: str) -> None:
        """Drop a student and, by cascade, their attendance entries."""
        self._state.students = [s for s in self._state.students if s.student_id != student_id]
        self._state.attendance.remove_students([student_id])

    def create_class(self, name: str) -> ClassGroup:
        created = ClassGroup(class_id=f"c-{now_millis()}", name=require_non_empty(name, "Nome da turma"))
        self._state.classes = sort_classes([*self._state.classes, created])
        self._state.selected_class_id = created.class_id
        return created

    def rename_class(self, class_id: str, name: str) -> ClassGroup:
        current = self._state.class_by_id(class_id)
        if not current:
            raise ValidationError("Turma não encontrada")
        updated = ClassGroup(class_id=current.class_id, name=require_non_empty(name, "Nome da turma"))
        self._state.classes = sort_classes(updated if c.class_id == class_id else c for c in self._state.classes)
        return updated

    def remove_class(self, class_id: str) -> list[str]:
        """Drop a class, its students and their attendance; returns removed student ids."""
        removed = [s.student_id for s in self._state.students if str(s.class_id) == str(class_id)]
        if str(self._state.selected_class_id) == str(class_id):
            self._state.selected_class_id = ""
        self._state.classes = [c for c in self._state.classes if str(c.class_id) != str(class_id)]
        self._state.students = [s for s in self._state.students if str(s.class_id) != str(class_id)]
        self._state.attendance.remove_students(removed)
        return removed

    def select_class(self, class_id: str) -> None:
        if not self._state.class_by_id(class_id):
            raise ValidationError("Turma não encontrada")
        self._state.selected_class_id = class_id
