from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ...schedules.model import OperatingHoursRule
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """On-time check-in, check-out at or after the official time."""

    def decide_checkin(self, *, now: datetime, hours: OperatingHoursRule) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)

    def decide_checkout(self, *, now: datetime, hours: OperatingHoursRule) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)
