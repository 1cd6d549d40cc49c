from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from ..attendance.model import PendingChange
from ..roster.model import ClassGroup, Student
from ..school.model import BimesterConfig


class RemoteDataSource(Protocol):
    """Data contract of the spreadsheet backend.

    Every write is fire-and-forget from the caller's side: it either returns
    or raises :class:`~school_attendance.core.exceptions.RemoteError`.
    Writes are idempotent per (studentId, date, lessonIndex).
    """

    def is_configured(self) -> bool:
        raise NotImplementedError

    def get_data(self) -> dict[str, Any]:
        raise NotImplementedError

    def save_student(self, student: Student) -> None:
        raise NotImplementedError

    def delete_student(self, student_id: str) -> None:
        raise NotImplementedError

    def save_class(self, class_group: ClassGroup) -> None:
        raise NotImplementedError

    def delete_class(self, class_id: str) -> None:
        raise NotImplementedError

    def save_attendance(self, change: PendingChange) -> None:
        raise NotImplementedError

    def save_attendance_batch(self, changes: Sequence[PendingChange]) -> None:
        raise NotImplementedError

    def save_config(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def save_all(
        self,
        *,
        students: Optional[Sequence[Student]] = None,
        classes: Optional[Sequence[ClassGroup]] = None,
        bimesters: Optional[Sequence[BimesterConfig]] = None,
    ) -> None:
        raise NotImplementedError
