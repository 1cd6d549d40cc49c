from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Per-lesson status stored in the attendance grid (wire codes)."""

    PRESENT = "P"
    ABSENT = "F"
    EXCUSED = "J"
    UNDEFINED = "-"

    @classmethod
    def from_wire(cls, raw: object) -> "AttendanceStatus":
        value = str(raw if raw is not None else "").strip()
        for status in cls:
            if status.value == value:
                return status
        return cls.UNDEFINED

    def next_in_cycle(self) -> "AttendanceStatus":
        """UNDEFINED -> PRESENT -> ABSENT -> EXCUSED -> UNDEFINED."""
        if self is AttendanceStatus.UNDEFINED:
            return AttendanceStatus.PRESENT
        if self is AttendanceStatus.PRESENT:
            return AttendanceStatus.ABSENT
        if self is AttendanceStatus.ABSENT:
            return AttendanceStatus.EXCUSED
        if self is AttendanceStatus.EXCUSED:
            return AttendanceStatus.UNDEFINED
        raise ValueError(f"Unknown status {self!r}")


class EnrollmentStatus(str, Enum):
    """Situação da matrícula, as written in the spreadsheet."""

    ACTIVE = "Cursando"
    DROPOUT = "Evasão"
    TRANSFERRED = "Transferência"
    OTHER = "Outro"

    @classmethod
    def values(cls) -> set[str]:
        return {s.value for s in cls}

    @classmethod
    def normalize(cls, raw: object) -> "EnrollmentStatus":
        """Empty -> ACTIVE, known label -> itself, anything else -> OTHER."""
        value = str(raw or "").strip()
        if not value:
            return cls.ACTIVE
        for status in cls:
            if status.value == value:
                return status
        return cls.OTHER


class PerformanceLevel(str, Enum):
    EXCELLENT = "EXCELLENT"
    REGULAR = "REGULAR"
    CRITICAL = "CRITICAL"


class SyncState(str, Enum):
    LOADING = "LOADING"
    READY = "READY"
    ERROR = "ERROR"


class OutcomeKind(str, Enum):
    OK = "OK"
    QUEUED_OFFLINE = "QUEUED_OFFLINE"
    FAILED = "FAILED"
