from datetime import time

from hr_workflow.attendance.factory import AttendanceStrategyFactory
from hr_workflow.attendance.strategies.late_strategy import LateStrategy
from hr_workflow.attendance.strategies.present_strategy import PresentStrategy
from hr_workflow.core.enums import AttendanceStatus


def test_factory_checkin_on_time_within_grace():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(at=time(9, 4, 59), shift_start=time(9, 0), grace_minutes=5)

    assert isinstance(strategy, PresentStrategy)


def test_factory_checkin_late_after_grace():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(at=time(9, 6), shift_start=time(9, 0), grace_minutes=5)

    assert isinstance(strategy, LateStrategy)


def test_factory_without_shift_is_present():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(at=time(23, 0), shift_start=None, grace_minutes=5)

    assert isinstance(strategy, PresentStrategy)


def test_late_strategy_notes_the_delay():
    decision = LateStrategy().decide_checkin(at=time(9, 20), shift_start=time(9, 0), grace_minutes=5)

    assert decision.status == AttendanceStatus.LATE
    assert decision.note == "20 min after shift start"
