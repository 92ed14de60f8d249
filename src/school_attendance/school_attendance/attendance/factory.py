from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..common.datetime_utils import to_minutes
from ..schedules.model import OperatingHoursRule
from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import LeftEarlyStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


def _at_minute(now: datetime, minutes: int) -> datetime:
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(minutes=minutes)


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, now: datetime, hours: OperatingHoursRule) -> AttendanceStrategy:
        # The last on-time instant is exactly checkInTime + lateTolerance.
        if now <= _at_minute(now, hours.late_deadline):
            return NormalStrategy()
        return LateStrategy()

    def for_checkout(self, *, now: datetime, hours: OperatingHoursRule) -> AttendanceStrategy:
        if now < _at_minute(now, to_minutes(hours.check_out_time)):
            return LeftEarlyStrategy()
        return NormalStrategy()
