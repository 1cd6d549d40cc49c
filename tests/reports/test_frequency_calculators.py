import pytest

from school_attendance.core.enums import PerformanceLevel
from school_attendance.reports.aggregator import classify
from school_attendance.reports.calculator.standard_calculator import GridFrequencyCalculator, StandardFrequencyCalculator
from school_attendance.reports.model import AttendanceCounts


def test_standard_counts_excused_as_present():
    counts = AttendanceCounts(present=3, absent=1, excused=1, total=5)

    assert StandardFrequencyCalculator().percentage(counts) == pytest.approx(80.0)


def test_standard_is_zero_without_records():
    assert StandardFrequencyCalculator().percentage(AttendanceCounts()) == 0.0


def test_grid_divides_by_one_without_records():
    assert GridFrequencyCalculator().percentage(AttendanceCounts()) == 0.0
    assert GridFrequencyCalculator().percentage(AttendanceCounts(present=1, total=1)) == 100.0


@pytest.mark.parametrize(
    "percentage, level",
    [
        (80.0, PerformanceLevel.REGULAR),
        (75.0, PerformanceLevel.REGULAR),
        (74.99, PerformanceLevel.CRITICAL),
        (89.999, PerformanceLevel.REGULAR),
        (90.0, PerformanceLevel.EXCELLENT),
        (0.0, PerformanceLevel.CRITICAL),
    ],
)
def test_classification_thresholds(percentage, level):
    assert classify(percentage) is level
