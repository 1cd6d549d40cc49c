from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceStatus
from .strategies.base import TransitionStrategy
from .strategies.cycle_strategy import CycleStrategy
from .strategies.forced_strategy import ForcedStrategy


@dataclass
class TransitionStrategyFactory:
    """Factory Pattern: choose the transition rule for a toggle."""

    def for_toggle(self, *, forced_status: Optional[AttendanceStatus] = None) -> TransitionStrategy:
        if forced_status is None:
            return CycleStrategy()
        return ForcedStrategy(forced_status)
