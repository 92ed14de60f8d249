from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ...schedules.model import OperatingHoursRule
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Check-in after the late tolerance has run out."""

    def decide_checkin(self, *, now: datetime, hours: OperatingHoursRule) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)

    def decide_checkout(self, *, now: datetime, hours: OperatingHoursRule) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)
