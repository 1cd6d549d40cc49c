from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..core.enums import AttendanceStatus

CellKey = tuple[str, str, int]


@dataclass(frozen=True)
class PendingChange:
    """A locally applied cell edit not yet confirmed by the remote store.

    ``subject``/``topic`` are captured when the edit is made so the remote
    record stays self-describing even if the day configuration changes later.
    """

    student_id: str
    date: str
    lesson_index: int
    status: AttendanceStatus
    subject: str = ""
    topic: str = ""

    @property
    def key(self) -> CellKey:
        return (self.student_id, self.date, self.lesson_index)

    def to_dict(self) -> dict[str, Any]:
        return {
            "studentId": self.student_id,
            "date": self.date,
            "lessonIndex": self.lesson_index,
            "status": self.status.value,
            "subject": self.subject,
            "topic": self.topic,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "PendingChange":
        return cls(
            student_id=str(raw["studentId"]),
            date=str(raw["date"]),
            lesson_index=int(raw["lessonIndex"]),
            status=AttendanceStatus.from_wire(raw.get("status")),
            subject=str(raw.get("subject") or ""),
            topic=str(raw.get("topic") or ""),
        )


@dataclass(frozen=True)
class StudentGridStats:
    """Stats shown at the end of a grid row (visible month only)."""

    total_lessons: int
    present: int
    absent: int
    excused: int
    percentage: float
    display: str
    low_attendance: bool


@dataclass(frozen=True)
class GridCell:
    lesson_index: int
    status: AttendanceStatus
    pending: bool


@dataclass(frozen=True)
class GridDay:
    date: str
    active_indices: tuple[int, ...]
    weekend: bool
    holiday: Optional[str]

    @property
    def locked(self) -> bool:
        return self.holiday is not None
