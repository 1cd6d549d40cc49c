"""Pure aggregation over the sparse attendance data.

Nothing here keeps running totals: every number is recomputed from the
attendance records, the lesson configuration and the filters passed in.
"""
from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.constants import EXCELLENT_THRESHOLD, RISK_THRESHOLD, UNSPECIFIED_SUBJECT
from ..core.enums import AttendanceStatus, PerformanceLevel
from ..lessons.registry import LessonConfigRegistry
from ..school.model import BimesterConfig
from .model import AttendanceCounts, SubjectFrequency

Period = Optional[tuple[date, date]]
Record = Mapping[str, Sequence[AttendanceStatus]]


def period_of(bimester: Optional[BimesterConfig]) -> Period:
    if bimester is None:
        return None
    return parse_iso_date(bimester.start), parse_iso_date(bimester.end)


def in_period(iso_date: str, period: Period) -> bool:
    """Inclusive on both ends; no period means every date."""
    if period is None:
        return True
    try:
        day = parse_iso_date(iso_date)
    except ValueError:
        return False
    return period[0] <= day <= period[1]


def _tally(statuses: Iterable[AttendanceStatus], acc: list[int]) -> None:
    for status in statuses:
        if status is AttendanceStatus.PRESENT:
            acc[0] += 1
        elif status is AttendanceStatus.ABSENT:
            acc[1] += 1
        elif status is AttendanceStatus.EXCUSED:
            acc[2] += 1
        elif status is AttendanceStatus.UNDEFINED:
            continue
        acc[3] += 1


def count_statuses(record: Record, period: Period = None) -> AttendanceCounts:
    """Per-student counts over every lesson slot of every date in ``period``."""
    acc = [0, 0, 0, 0]
    for iso_date, statuses in record.items():
        if in_period(iso_date, period):
            _tally(statuses, acc)
    return AttendanceCounts(present=acc[0], absent=acc[1], excused=acc[2], total=acc[3])


def count_active_slots(
    record: Record,
    dates: Iterable[str],
    class_id: Optional[str],
    registry: LessonConfigRegistry,
) -> AttendanceCounts:
    """Grid counts: only the given dates, only the slots configured active for each."""
    acc = [0, 0, 0, 0]
    for iso_date in dates:
        statuses = record.get(iso_date) or ()
        active = registry.active_indices(class_id, iso_date)
        _tally((statuses[i] for i in active if 0 <= i < len(statuses)), acc)
    return AttendanceCounts(present=acc[0], absent=acc[1], excused=acc[2], total=acc[3])


def classify(percentage: float) -> PerformanceLevel:
    if percentage >= EXCELLENT_THRESHOLD:
        return PerformanceLevel.EXCELLENT
    if percentage >= RISK_THRESHOLD:
        return PerformanceLevel.REGULAR
    return PerformanceLevel.CRITICAL


def ratio(numerator: int, total: int) -> float:
    return numerator / total * 100 if total > 0 else 0.0


def subject_frequencies(
    records: Iterable[tuple[Optional[str], Record]],
    registry: LessonConfigRegistry,
    period: Period = None,
) -> list[SubjectFrequency]:
    """Group recorded cells by the subject configured for their slot.

    ``records`` pairs each student's class id with their attendance record.
    Present counts PRESENT and EXCUSED; cells without a subject fall under
    the unspecified label. Sorted by percentage, highest first.
    """
    totals: dict[str, list[int]] = {}
    for class_id, record in records:
        for iso_date, statuses in record.items():
            if not in_period(iso_date, period):
                continue
            day = registry.resolve(class_id, iso_date)
            for idx, status in enumerate(statuses):
                if status is AttendanceStatus.UNDEFINED:
                    continue
                name = day.subject_for(idx) or UNSPECIFIED_SUBJECT
                bucket = totals.setdefault(name, [0, 0, 0])
                bucket[2] += 1
                if status in (AttendanceStatus.PRESENT, AttendanceStatus.EXCUSED):
                    bucket[0] += 1
                else:
                    bucket[1] += 1

    out = [
        SubjectFrequency(name=name, present=p, absent=a, total=t, percentage=ratio(p, t))
        for name, (p, a, t) in totals.items()
    ]
    out.sort(key=lambda s: s.percentage, reverse=True)
    return out
