from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...core.enums import AttendanceStatus
from ...schedules.model import OperatingHoursRule


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide_checkin(self, *, now: datetime, hours: OperatingHoursRule) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_checkout(self, *, now: datetime, hours: OperatingHoursRule) -> StatusDecision:
        raise NotImplementedError
