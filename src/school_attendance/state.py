from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .attendance.store import AttendanceStore
from .core.constants import NO_CLASS_LABEL
from .core.enums import SyncState
from .lessons.registry import LessonConfigRegistry
from .roster.model import ClassGroup, Student
from .school.model import BimesterConfig, Holiday, default_bimesters
from .sync.queue import PendingChangeQueue


@dataclass(frozen=True)
class RosterSnapshot:
    """Pre-delete copy used to roll back an optimistic removal."""

    classes: list[ClassGroup]
    students: list[Student]
    attendance: AttendanceStore
    selected_class_id: str


@dataclass
class AppState:
    """All application data, owned by the container and passed to services.

    Lifecycle: ``SyncCoordinator.load`` fills it, services mutate it, the
    coordinator and the pending queue persist it.
    """

    pending: PendingChangeQueue
    classes: list[ClassGroup] = field(default_factory=list)
    students: list[Student] = field(default_factory=list)
    attendance: AttendanceStore = field(default_factory=AttendanceStore)
    lessons: LessonConfigRegistry = field(default_factory=LessonConfigRegistry)
    bimesters: list[BimesterConfig] = field(default_factory=lambda: default_bimesters(date.today().year))
    holidays: list[Holiday] = field(default_factory=list)
    registered_subjects: list[str] = field(default_factory=list)
    selected_class_id: str = ""
    online: bool = True
    sync_state: SyncState = SyncState.READY

    def student_by_id(self, student_id: str) -> Optional[Student]:
        return next((s for s in self.students if s.student_id == student_id), None)

    def class_by_id(self, class_id: Optional[str]) -> Optional[ClassGroup]:
        return next((c for c in self.classes if c.class_id == class_id), None)

    def class_name(self, class_id: Optional[str]) -> str:
        cls = self.class_by_id(class_id)
        return cls.name if cls else NO_CLASS_LABEL

    def holiday_on(self, iso_date: str) -> Optional[Holiday]:
        return next((h for h in self.holidays if h.date == iso_date), None)

    def snapshot(self) -> RosterSnapshot:
        return RosterSnapshot(
            classes=list(self.classes),
            students=list(self.students),
            attendance=self.attendance.copy(),
            selected_class_id=self.selected_class_id,
        )

    def restore(self, snap: RosterSnapshot) -> None:
        self.classes = list(snap.classes)
        self.students = list(snap.students)
        self.attendance = snap.attendance
        self.selected_class_id = snap.selected_class_id
