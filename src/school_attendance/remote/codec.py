"""Translation between the spreadsheet backend's wire shapes and domain objects.

Inbound payloads are sanitized here (dates to ISO, 1-based lesson indices to
0-based, shifted student columns healed); outbound records get the reverse
conversions so a cell read and written back lands on the same spreadsheet row.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from ..attendance.model import PendingChange
from ..attendance.store import AttendanceStore
from ..common.datetime_utils import to_br_date, to_iso_date
from ..core.constants import MAX_WIRE_LESSON_INDEX
from ..core.enums import AttendanceStatus, EnrollmentStatus
from ..roster.model import ClassGroup, Student
from ..school.model import BimesterConfig, Holiday

CLASS_ID_PREFIX = "c-"


@dataclass
class LoadedData:
    """A normalized ``getData`` payload. ``None`` means the field was absent."""

    classes: Optional[list[ClassGroup]] = None
    students: Optional[list[Student]] = None
    attendance: Optional[AttendanceStore] = None
    bimesters: list[BimesterConfig] = field(default_factory=list)
    config: Optional[dict[str, Any]] = None


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def student_from_wire(raw: Mapping[str, Any]) -> Student:
    """Build a Student, repairing rows whose columns shifted in the sheet.

    A class-id cell holding an enrollment label means the row is shifted: the
    label is the real status, and the real class id is the ``registration``
    cell when it looks like one (``c-...``).
    """
    class_id = _text(raw.get("classId"))
    status = EnrollmentStatus.normalize(raw.get("status") or raw.get("situation"))
    registration = _text(raw.get("registration"))

    if registration.startswith(CLASS_ID_PREFIX):
        class_id = registration

    if class_id in EnrollmentStatus.values():
        status = EnrollmentStatus(class_id)
        class_id = registration if registration.startswith(CLASS_ID_PREFIX) else ""

    return Student(
        student_id=str(raw.get("id")),
        name=_text(raw.get("name")),
        status=status,
        class_id=class_id or None,
    )


def class_from_wire(raw: Mapping[str, Any]) -> ClassGroup:
    return ClassGroup(class_id=str(raw.get("id")), name=_text(raw.get("name")))


def bimester_from_wire(raw: Mapping[str, Any]) -> BimesterConfig:
    return BimesterConfig(
        bimester_id=int(raw.get("id")),
        name=_text(raw.get("name")),
        start=to_iso_date(_text(raw.get("start"))),
        end=to_iso_date(_text(raw.get("end"))),
    )


def holiday_from_wire(raw: Mapping[str, Any]) -> Holiday:
    return Holiday(date=to_iso_date(_text(raw.get("date"))), name=_text(raw.get("name")))


def wire_lesson_index(raw: Any) -> int:
    """1-based spreadsheet index -> 0-based slot; junk and out-of-range read as slot 0."""
    try:
        idx = int(str(raw).strip())
    except (TypeError, ValueError):
        idx = 1
    if idx < 1 or idx > MAX_WIRE_LESSON_INDEX:
        idx = 1
    return idx - 1


def attendance_from_wire(records: Iterable[Mapping[str, Any]]) -> AttendanceStore:
    store = AttendanceStore()
    for rec in records:
        raw_date = rec.get("date")
        date = to_iso_date(raw_date if isinstance(raw_date, str) else "")
        if not date:
            continue
        store.write(
            str(rec.get("studentId")),
            date,
            wire_lesson_index(rec.get("lessonIndex")),
            AttendanceStatus.from_wire(rec.get("status")),
        )
    return store


def config_from_wire(rows: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    """Config rows hold JSON-encoded values; undecodable values are kept raw."""
    config: dict[str, Any] = {}
    for row in rows:
        value = row.get("value")
        try:
            config[row["key"]] = json.loads(value)
        except (TypeError, ValueError):
            config[row["key"]] = value
    return config


def decode_payload(data: Mapping[str, Any]) -> LoadedData:
    loaded = LoadedData()
    if data.get("classes") is not None:
        loaded.classes = [class_from_wire(c) for c in data["classes"]]
    if data.get("students") is not None:
        loaded.students = [student_from_wire(s) for s in data["students"]]
    if data.get("attendance") is not None:
        loaded.attendance = attendance_from_wire(data["attendance"])
    if data.get("bimesters"):
        loaded.bimesters = [bimester_from_wire(b) for b in data["bimesters"]]
    if data.get("config") is not None:
        loaded.config = config_from_wire(data["config"])
    return loaded


def student_to_wire(student: Student) -> dict[str, Any]:
    status = student.status or EnrollmentStatus.ACTIVE
    class_id = student.class_id or ""
    return {
        "id": student.student_id,
        "name": student.name,
        "registration": class_id,
        "classId": class_id,
        "situation": status.value,
        "status": status.value,
        "createdAt": datetime.now(timezone.utc).isoformat(),
    }


def class_to_wire(class_group: ClassGroup) -> dict[str, Any]:
    return {"id": class_group.class_id, "name": class_group.name}


def bimester_to_wire(bimester: BimesterConfig) -> dict[str, Any]:
    return {"id": bimester.bimester_id, "name": bimester.name, "start": bimester.start, "end": bimester.end}


def holiday_to_wire(holiday: Holiday) -> dict[str, Any]:
    return {"date": holiday.date, "name": holiday.name}


def change_to_wire(change: PendingChange) -> dict[str, Any]:
    return {
        "studentId": change.student_id,
        "date": to_br_date(change.date),
        "lessonIndex": change.lesson_index + 1,
        "status": change.status.value,
        "subject": change.subject or "",
        "notes": change.topic or "",
    }
