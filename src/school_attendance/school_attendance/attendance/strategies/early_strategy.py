from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ...schedules.model import OperatingHoursRule
from .base import AttendanceStrategy, StatusDecision


class LeftEarlyStrategy(AttendanceStrategy):
    """Check-out inside the scan-out window but before the official time."""

    def decide_checkin(self, *, now: datetime, hours: OperatingHoursRule) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)

    def decide_checkout(self, *, now: datetime, hours: OperatingHoursRule) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LEFT_EARLY)
