from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import is_weekend, month_dates, parse_iso_date
from ..core.constants import ALL, RISK_THRESHOLD
from ..core.enums import AttendanceStatus, EnrollmentStatus
from ..core.exceptions import ValidationError
from ..reports import aggregator
from ..reports.calculator.base import FrequencyCalculator
from ..reports.calculator.standard_calculator import GridFrequencyCalculator
from ..roster.model import Student
from ..roster.service import RosterService
from ..state import AppState
from .factory import TransitionStrategyFactory
from .model import GridCell, GridDay, PendingChange, StudentGridStats


@dataclass(frozen=True)
class GridRow:
    student: Student
    cells: dict[str, tuple[GridCell, ...]]
    stats: StudentGridStats


@dataclass(frozen=True)
class MonthGrid:
    class_id: str
    days: list[GridDay]
    rows: list[GridRow]


class AttendanceService:
    """Use case: edit attendance cells and build the monthly class grid."""

    def __init__(
        self,
        state: AppState,
        roster: RosterService,
        *,
        strategy_factory: Optional[TransitionStrategyFactory] = None,
        grid_calculator: Optional[FrequencyCalculator] = None,
    ):
        self._state = state
        self._roster = roster
        self._factory = strategy_factory or TransitionStrategyFactory()
        self._grid_calculator = grid_calculator or GridFrequencyCalculator()

    def _class_id(self, class_id: Optional[str]) -> str:
        return class_id if class_id is not None else self._state.selected_class_id

    def toggle(
        self,
        student_id: str,
        date: str,
        lesson_index: int,
        forced_status: Optional[AttendanceStatus] = None,
        *,
        class_id: Optional[str] = None,
    ) -> Optional[AttendanceStatus]:
        """Advance (or force) one cell; returns the new status, ``None`` when nothing changed."""
        if lesson_index < 0:
            raise ValidationError("Índice de aula inválido")
        try:
            parse_iso_date(date)
        except ValueError:
            raise ValidationError("Data inválida (AAAA-MM-DD)")
        holiday = self._state.holiday_on(date)
        if holiday:
            raise ValidationError(f"Dia bloqueado: {holiday.name}")

        day = self._state.lessons.resolve(self._class_id(class_id), date)
        current = self._state.attendance.status_at(student_id, date, lesson_index)

        strategy = self._factory.for_toggle(forced_status=forced_status)
        decision = strategy.decide(current)
        if not decision.changes(current):
            return None

        min_length = max((*day.active_indices, lesson_index)) + 1
        self._state.attendance.write(student_id, date, lesson_index, decision.status, min_length=min_length)
        self._state.pending.enqueue(
            PendingChange(
                student_id=student_id,
                date=date,
                lesson_index=lesson_index,
                status=decision.status,
                subject=day.subject_for(lesson_index),
                topic=day.topic_for(lesson_index),
            )
        )
        return decision.status

    def bulk_apply(
        self,
        date: str,
        lesson_index: int,
        status: AttendanceStatus,
        *,
        class_id: Optional[str] = None,
        status_filter: str = ALL,
    ) -> list[str]:
        """Fill one lesson column for ACTIVE students whose cell is still UNDEFINED.

        Returns the ids of the students that were changed.
        """
        cid = self._class_id(class_id)
        changed: list[str] = []
        for student in self._roster.class_students(cid, status_filter=status_filter):
            if student.status is not EnrollmentStatus.ACTIVE:
                continue
            if self._state.attendance.status_at(student.student_id, date, lesson_index) is not AttendanceStatus.UNDEFINED:
                continue
            if self.toggle(student.student_id, date, lesson_index, status, class_id=cid) is not None:
                changed.append(student.student_id)
        return changed

    def is_pending(self, student_id: str, date: str, lesson_index: int) -> bool:
        return self._state.pending.is_pending(student_id, date, lesson_index)

    def student_grid_stats(self, student_id: str, class_id: str, dates: list[str]) -> StudentGridStats:
        counts = aggregator.count_active_slots(
            self._state.attendance.record(student_id), dates, class_id, self._state.lessons
        )
        percentage = self._grid_calculator.percentage(counts)
        return StudentGridStats(
            total_lessons=counts.total,
            present=counts.present,
            absent=counts.absent,
            excused=counts.excused,
            percentage=percentage,
            display="-" if counts.total == 0 else f"{percentage:.0f}%",
            low_attendance=percentage < RISK_THRESHOLD and counts.total > 0,
        )

    def month_grid(self, *, year: int, month: int, class_id: Optional[str] = None, status_filter: str = ALL) -> MonthGrid:
        cid = self._class_id(class_id)
        dates = month_dates(year, month)

        days = []
        for d in dates:
            holiday = self._state.holiday_on(d)
            days.append(
                GridDay(
                    date=d,
                    active_indices=self._state.lessons.active_indices(cid, d),
                    weekend=is_weekend(d),
                    holiday=holiday.name if holiday else None,
                )
            )

        rows = []
        for student in self._roster.class_students(cid, status_filter=status_filter):
            cells = {
                day.date: tuple(
                    GridCell(
                        lesson_index=idx,
                        status=self._state.attendance.status_at(student.student_id, day.date, idx),
                        pending=self.is_pending(student.student_id, day.date, idx),
                    )
                    for idx in day.active_indices
                )
                for day in days
            }
            rows.append(GridRow(student=student, cells=cells, stats=self.student_grid_stats(student.student_id, cid, dates)))

        return MonthGrid(class_id=cid, days=days, rows=rows)
