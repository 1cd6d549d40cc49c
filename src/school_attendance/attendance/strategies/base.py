from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus

    def changes(self, current: AttendanceStatus) -> bool:
        return self.status is not current


class TransitionStrategy(ABC):
    """Strategy Pattern: encapsulate how the next cell status is decided."""

    @abstractmethod
    def decide(self, current: AttendanceStatus) -> StatusDecision:
        raise NotImplementedError
