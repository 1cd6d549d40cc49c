from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import ALL, ANNUAL
from ..core.enums import PerformanceLevel
from ..roster.model import Student
from ..school.model import BimesterConfig


@dataclass(frozen=True)
class AttendanceCounts:
    present: int = 0
    absent: int = 0
    excused: int = 0
    total: int = 0  # every status other than UNDEFINED

    def __add__(self, other: "AttendanceCounts") -> "AttendanceCounts":
        return AttendanceCounts(
            present=self.present + other.present,
            absent=self.absent + other.absent,
            excused=self.excused + other.excused,
            total=self.total + other.total,
        )


@dataclass(frozen=True)
class ReportFilters:
    class_id: str = ALL
    enrollment: str = ALL
    level: str = ALL
    bimester: str = ANNUAL


@dataclass(frozen=True)
class StudentFrequency:
    student: Student
    class_name: str
    counts: AttendanceCounts
    percentage: float
    level: PerformanceLevel


@dataclass(frozen=True)
class SubjectFrequency:
    name: str
    present: int
    absent: int
    total: int
    percentage: float


@dataclass(frozen=True)
class ClassAverage:
    name: str
    avg: float
    count: int


@dataclass(frozen=True)
class NamedRate:
    name: str
    value: float


@dataclass(frozen=True)
class ReportData:
    students: list[StudentFrequency]
    distribution: dict[PerformanceLevel, int]
    class_averages: list[ClassAverage]
    evolution: list[NamedRate]
    top_students: list[StudentFrequency]
    subjects: list[SubjectFrequency]


@dataclass(frozen=True)
class BimesterTotals:
    name: str
    present: int
    absent: int
    rate: float


@dataclass(frozen=True)
class AtRiskStudent:
    student: Student
    percentage: float
    absent: int
    total: int


@dataclass(frozen=True)
class DashboardData:
    enrollment_counts: dict[str, int]
    bimesters: list[BimesterTotals]
    at_risk: list[AtRiskStudent]
    total_present: int
    total_absent: int
    total_recorded: int
    global_rate: float
    class_rates: list[NamedRate]


@dataclass(frozen=True)
class BimesterFrequency:
    bimester: BimesterConfig
    counts: AttendanceCounts
    percentage: float


@dataclass(frozen=True)
class StudentDetail:
    student: Student
    bimesters: list[BimesterFrequency]
    annual: AttendanceCounts
    annual_percentage: float
    is_risk: bool
    subjects: list[SubjectFrequency] = field(default_factory=list)
    class_name: Optional[str] = None
