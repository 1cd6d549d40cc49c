from __future__ import annotations

from typing import Any, Optional

import pytest

from school_attendance.attendance.service import AttendanceService
from school_attendance.core.enums import EnrollmentStatus
from school_attendance.core.exceptions import RemoteError
from school_attendance.roster.model import ClassGroup, Student
from school_attendance.roster.service import RosterService
from school_attendance.school.model import BimesterConfig
from school_attendance.state import AppState
from school_attendance.storage.local import InMemoryStorage
from school_attendance.sync.coordinator import SyncCoordinator
from school_attendance.sync.queue import PendingChangeQueue


class FakeRemote:
    """In-memory stand-in for the spreadsheet web app.

    ``fail`` names the methods that raise RemoteError; every call is recorded.
    """

    def __init__(self, data: Optional[dict[str, Any]] = None, *, configured: bool = True):
        self.data = data if data is not None else {}
        self.configured = configured
        self.fail: set[str] = set()
        self.calls: list[tuple[str, Any]] = []
        self.batches: list[list] = []
        self.on_batch = None

    def _record(self, name: str, payload: Any = None) -> None:
        self.calls.append((name, payload))
        if name in self.fail:
            raise RemoteError(f"{name} failed")

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def is_configured(self) -> bool:
        return self.configured

    def get_data(self) -> dict[str, Any]:
        self._record("get_data")
        return self.data

    def save_student(self, student) -> None:
        self._record("save_student", student)

    def delete_student(self, student_id: str) -> None:
        self._record("delete_student", student_id)

    def save_class(self, class_group) -> None:
        self._record("save_class", class_group)

    def delete_class(self, class_id: str) -> None:
        self._record("delete_class", class_id)

    def save_attendance(self, change) -> None:
        self._record("save_attendance", change)

    def save_attendance_batch(self, changes) -> None:
        if self.on_batch:
            self.on_batch()
        self._record("save_attendance_batch", list(changes))
        self.batches.append(list(changes))

    def save_config(self, key: str, value: Any) -> None:
        self._record("save_config", (key, value))

    def save_all(self, *, students=None, classes=None, bimesters=None) -> None:
        self._record("save_all", {"students": students, "classes": classes, "bimesters": bimesters})


BIMESTERS_2025 = [
    BimesterConfig(1, "1º Bimestre", "2025-02-01", "2025-04-30"),
    BimesterConfig(2, "2º Bimestre", "2025-05-01", "2025-07-15"),
    BimesterConfig(3, "3º Bimestre", "2025-08-01", "2025-09-30"),
    BimesterConfig(4, "4º Bimestre", "2025-10-01", "2025-12-20"),
]


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def state(storage) -> AppState:
    return AppState(
        pending=PendingChangeQueue(storage),
        classes=[ClassGroup("c-1", "1º Ano A")],
        students=[
            Student("s-1", "Ana", EnrollmentStatus.ACTIVE, "c-1"),
            Student("s-2", "Bruno", EnrollmentStatus.ACTIVE, "c-1"),
            Student("s-3", "Carla", EnrollmentStatus.DROPOUT, "c-1"),
        ],
        bimesters=list(BIMESTERS_2025),
        selected_class_id="c-1",
    )


@pytest.fixture
def roster(state) -> RosterService:
    return RosterService(state)


@pytest.fixture
def attendance(state, roster) -> AttendanceService:
    return AttendanceService(state, roster)


@pytest.fixture
def coordinator(state, remote, storage, roster) -> SyncCoordinator:
    return SyncCoordinator(state, remote, storage, roster)


@pytest.fixture
def make_remote():
    return FakeRemote
