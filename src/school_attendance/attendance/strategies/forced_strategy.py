from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import StatusDecision, TransitionStrategy


class ForcedStrategy(TransitionStrategy):
    """Explicit status (bulk fill, API callers)."""

    def __init__(self, status: AttendanceStatus):
        self._status = status

    def decide(self, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=self._status)
