from __future__ import annotations

from typing import Optional

from ..core.constants import ALL, ANNUAL, DEFAULT_TOP_STUDENTS, RISK_THRESHOLD
from ..core.enums import EnrollmentStatus, PerformanceLevel
from ..core.exceptions import ValidationError
from ..state import AppState
from . import aggregator
from .calculator.base import FrequencyCalculator
from .calculator.standard_calculator import StandardFrequencyCalculator
from .model import (
    AtRiskStudent,
    AttendanceCounts,
    BimesterFrequency,
    BimesterTotals,
    ClassAverage,
    DashboardData,
    NamedRate,
    ReportData,
    ReportFilters,
    StudentDetail,
    StudentFrequency,
)


class ReportService:
    """Read-only views over AppState: reports page, dashboard and student detail."""

    def __init__(self, state: AppState, *, calculator: Optional[FrequencyCalculator] = None):
        self._state = state
        self._calculator = calculator or StandardFrequencyCalculator()

    def _bimester(self, bimester_id: str):
        return next((b for b in self._state.bimesters if str(b.bimester_id) == str(bimester_id)), None)

    def build_report(self, filters: ReportFilters = ReportFilters(), *, top_n: int = DEFAULT_TOP_STUDENTS) -> ReportData:
        period = None
        if filters.bimester != ANNUAL:
            period = aggregator.period_of(self._bimester(filters.bimester))

        students: list[StudentFrequency] = []
        for s in self._state.students:
            if filters.class_id != ALL and s.class_id != filters.class_id:
                continue
            if filters.enrollment != ALL and s.status.value != filters.enrollment:
                continue

            counts = aggregator.count_statuses(self._state.attendance.record(s.student_id), period)
            percentage = self._calculator.percentage(counts)
            level = aggregator.classify(percentage)
            if filters.level != ALL and level.value != filters.level:
                continue

            students.append(
                StudentFrequency(
                    student=s,
                    class_name=self._state.class_name(s.class_id),
                    counts=counts,
                    percentage=percentage,
                    level=level,
                )
            )

        distribution = {level: 0 for level in PerformanceLevel}
        for sf in students:
            distribution[sf.level] += 1

        class_ids: list[str] = []
        for sf in students:
            if sf.student.class_id and sf.student.class_id not in class_ids:
                class_ids.append(sf.student.class_id)
        class_averages = []
        for cid in class_ids:
            in_class = [sf for sf in students if sf.student.class_id == cid]
            avg = sum(sf.percentage for sf in in_class) / len(in_class)
            class_averages.append(ClassAverage(name=self._state.class_name(cid), avg=round(avg, 1), count=len(in_class)))
        class_averages.sort(key=lambda c: c.avg, reverse=True)

        evolution: list[NamedRate] = []
        if filters.bimester == ANNUAL:
            for bim in self._state.bimesters:
                bim_period = aggregator.period_of(bim)
                rates = []
                for sf in students:
                    counts = aggregator.count_statuses(self._state.attendance.record(sf.student.student_id), bim_period)
                    if counts.total > 0:
                        rates.append(self._calculator.percentage(counts))
                evolution.append(NamedRate(name=bim.name, value=round(sum(rates) / len(rates), 1) if rates else 0.0))

        top_students = sorted(students, key=lambda sf: sf.percentage, reverse=True)[:top_n]

        subjects = aggregator.subject_frequencies(
            ((sf.student.class_id, self._state.attendance.record(sf.student.student_id)) for sf in students),
            self._state.lessons,
            period,
        )

        return ReportData(
            students=students,
            distribution=distribution,
            class_averages=class_averages,
            evolution=evolution,
            top_students=top_students,
            subjects=subjects,
        )

    def build_dashboard(self, *, class_id: str = ALL) -> DashboardData:
        students = [s for s in self._state.students if class_id == ALL or s.class_id == class_id]

        enrollment_counts = {status.value: 0 for status in EnrollmentStatus}
        for s in students:
            enrollment_counts[s.status.value] += 1

        bimesters: list[BimesterTotals] = []
        grand = AttendanceCounts()
        for bim in self._state.bimesters:
            period = aggregator.period_of(bim)
            counts = AttendanceCounts()
            for s in students:
                counts = counts + aggregator.count_statuses(self._state.attendance.record(s.student_id), period)
            grand = grand + counts
            bimesters.append(
                BimesterTotals(
                    name=bim.name,
                    present=counts.present,
                    absent=counts.absent,
                    rate=round(aggregator.ratio(counts.present, counts.total), 1),
                )
            )

        at_risk: list[AtRiskStudent] = []
        for s in students:
            if s.status is not EnrollmentStatus.ACTIVE:
                continue
            counts = aggregator.count_statuses(self._state.attendance.record(s.student_id))
            if counts.total == 0:
                continue
            percentage = self._calculator.percentage(counts)
            if percentage < RISK_THRESHOLD:
                at_risk.append(AtRiskStudent(student=s, percentage=percentage, absent=counts.absent, total=counts.total))
        at_risk.sort(key=lambda r: r.percentage)

        relevant = self._state.classes if class_id == ALL else [c for c in self._state.classes if c.class_id == class_id]
        class_rates = []
        for cls in relevant:
            counts = AttendanceCounts()
            for s in self._state.students:
                if s.class_id == cls.class_id:
                    counts = counts + aggregator.count_statuses(self._state.attendance.record(s.student_id))
            class_rates.append(NamedRate(name=cls.name, value=aggregator.ratio(counts.present + counts.excused, counts.total)))

        return DashboardData(
            enrollment_counts=enrollment_counts,
            bimesters=bimesters,
            at_risk=at_risk,
            total_present=grand.present,
            total_absent=grand.absent,
            total_recorded=grand.total,
            global_rate=round(aggregator.ratio(grand.present, grand.total), 1),
            class_rates=class_rates,
        )

    def build_student_detail(self, student_id: str) -> StudentDetail:
        student = self._state.student_by_id(student_id)
        if not student:
            raise ValidationError("Aluno não encontrado")

        record = self._state.attendance.record(student_id)
        per_bimester = []
        annual = AttendanceCounts()
        for bim in self._state.bimesters:
            counts = aggregator.count_statuses(record, aggregator.period_of(bim))
            annual = annual + counts
            per_bimester.append(BimesterFrequency(bimester=bim, counts=counts, percentage=self._calculator.percentage(counts)))

        annual_percentage = self._calculator.percentage(annual)
        return StudentDetail(
            student=student,
            bimesters=per_bimester,
            annual=annual,
            annual_percentage=annual_percentage,
            is_risk=annual_percentage < RISK_THRESHOLD,
            subjects=aggregator.subject_frequencies([(student.class_id, record)], self._state.lessons),
            class_name=self._state.class_name(student.class_id),
        )
