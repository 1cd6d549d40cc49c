from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import StatusDecision, TransitionStrategy


class CycleStrategy(TransitionStrategy):
    """Plain click on a cell: advance one step in the fixed cycle."""

    def decide(self, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current.next_in_cycle())
