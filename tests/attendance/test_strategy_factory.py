from school_attendance.attendance.factory import TransitionStrategyFactory
from school_attendance.attendance.strategies.cycle_strategy import CycleStrategy
from school_attendance.attendance.strategies.forced_strategy import ForcedStrategy
from school_attendance.core.enums import AttendanceStatus


def test_factory_plain_toggle_uses_cycle():
    strategy = TransitionStrategyFactory().for_toggle()

    assert isinstance(strategy, CycleStrategy)


def test_factory_forced_status_uses_forced():
    strategy = TransitionStrategyFactory().for_toggle(forced_status=AttendanceStatus.ABSENT)

    assert isinstance(strategy, ForcedStrategy)
    assert strategy.decide(AttendanceStatus.PRESENT).status is AttendanceStatus.ABSENT


def test_cycle_order():
    strategy = CycleStrategy()
    seen = []
    current = AttendanceStatus.UNDEFINED
    for _ in range(4):
        current = strategy.decide(current).status
        seen.append(current)

    assert seen == [
        AttendanceStatus.PRESENT,
        AttendanceStatus.ABSENT,
        AttendanceStatus.EXCUSED,
        AttendanceStatus.UNDEFINED,
    ]


def test_forced_same_status_is_not_a_change():
    decision = ForcedStrategy(AttendanceStatus.PRESENT).decide(AttendanceStatus.PRESENT)

    assert not decision.changes(AttendanceStatus.PRESENT)
