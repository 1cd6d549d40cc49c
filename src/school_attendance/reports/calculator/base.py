from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import AttendanceCounts


class FrequencyCalculator(ABC):
    """Calculator interface (Strategy Pattern for the frequency percentage)."""

    @abstractmethod
    def percentage(self, counts: AttendanceCounts) -> float:
        raise NotImplementedError
