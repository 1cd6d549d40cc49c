from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from ..core.enums import EnrollmentStatus


@dataclass(frozen=True)
class Student:
    """Domain entity: a student (protagonista) on the roster.

    Note: Plain data object, no remote access here.
    """

    student_id: str
    name: str
    status: EnrollmentStatus = EnrollmentStatus.ACTIVE
    class_id: Optional[str] = None

    def with_status(self, status: EnrollmentStatus) -> "Student":
        return replace(self, status=status)


@dataclass(frozen=True)
class ClassGroup:
    """Domain entity: a class (turma)."""

    class_id: str
    name: str
