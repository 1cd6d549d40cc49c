from __future__ import annotations

from ..model import AttendanceCounts
from .base import FrequencyCalculator


class StandardFrequencyCalculator(FrequencyCalculator):
    """Reports rule: (present + excused) / recorded * 100, 0 when nothing recorded."""

    def percentage(self, counts: AttendanceCounts) -> float:
        if counts.total == 0:
            return 0.0
        return (counts.present + counts.excused) / counts.total * 100


class GridFrequencyCalculator(FrequencyCalculator):
    """Class grid rule: same ratio, but an empty denominator counts as 1."""

    def percentage(self, counts: AttendanceCounts) -> float:
        total = counts.total if counts.total > 0 else 1
        return (counts.present + counts.excused) / total * 100
