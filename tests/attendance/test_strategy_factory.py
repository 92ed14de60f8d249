from datetime import datetime

from src.school_attendance.school_attendance.attendance.factory import AttendanceStrategyFactory
from src.school_attendance.school_attendance.attendance.strategies.early_strategy import LeftEarlyStrategy
from src.school_attendance.school_attendance.attendance.strategies.late_strategy import LateStrategy
from src.school_attendance.school_attendance.attendance.strategies.normal_strategy import NormalStrategy
from src.school_attendance.school_attendance.core.enums import AttendanceStatus


def test_factory_checkin_on_time_at_last_tolerated_second(rule_factory):
    hours = rule_factory(check_in="07:00", late=15)
    now = datetime(2025, 1, 6, 7, 15, 0)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, hours=hours)

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkin(now=now, hours=hours).status == AttendanceStatus.ON_TIME


def test_factory_checkin_late_one_second_after_tolerance(rule_factory):
    hours = rule_factory(check_in="07:00", late=15)
    now = datetime(2025, 1, 6, 7, 15, 1)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, hours=hours)

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide_checkin(now=now, hours=hours).status == AttendanceStatus.LATE


def test_factory_checkout_before_check_out_time_is_left_early(rule_factory):
    hours = rule_factory(check_out="13:00")
    now = datetime(2025, 1, 6, 12, 59, 59)

    strategy = AttendanceStrategyFactory().for_checkout(now=now, hours=hours)

    assert isinstance(strategy, LeftEarlyStrategy)
    assert strategy.decide_checkout(now=now, hours=hours).status == AttendanceStatus.LEFT_EARLY


def test_factory_checkout_at_check_out_time_is_on_time(rule_factory):
    hours = rule_factory(check_out="13:00")
    now = datetime(2025, 1, 6, 13, 0, 0)

    strategy = AttendanceStrategyFactory().for_checkout(now=now, hours=hours)

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkout(now=now, hours=hours).status == AttendanceStatus.ON_TIME


def test_factory_checkout_uses_early_dismissal_time(rule_factory):
    hours = rule_factory(check_out="13:00").with_check_out("10:00")

    strategy = AttendanceStrategyFactory().for_checkout(now=datetime(2025, 1, 6, 10, 30), hours=hours)

    assert isinstance(strategy, NormalStrategy)
