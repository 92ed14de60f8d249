from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

from ..common.datetime_utils import to_minutes
from ..core.enums import DayGroup, RejectionReason


@dataclass(frozen=True)
class OperatingHoursRule:
    """Weekly operating hours for one weekday group.

    Times are civil "HH:MM" strings, offsets are whole minutes.
    """

    day_group: DayGroup
    check_in_time: str
    late_tolerance: int
    scan_in_before: int
    check_out_time: str
    scan_out_before: int
    scan_out_end_time: str
    enabled: bool = True

    @property
    def scan_in_start(self) -> int:
        return to_minutes(self.check_in_time) - self.scan_in_before

    @property
    def scan_out_start(self) -> int:
        return to_minutes(self.check_out_time) - self.scan_out_before

    @property
    def scan_out_end(self) -> int:
        return to_minutes(self.scan_out_end_time)

    @property
    def late_deadline(self) -> int:
        return to_minutes(self.check_in_time) + self.late_tolerance

    def with_check_out(self, check_out_time: str) -> "OperatingHoursRule":
        return replace(self, check_out_time=check_out_time)

    @classmethod
    def from_dict(cls, data: dict) -> "OperatingHoursRule":
        return cls(
            day_group=DayGroup(data["dayGroup"]),
            check_in_time=str(data.get("checkInTime") or ""),
            late_tolerance=int(data.get("lateTolerance") or 0),
            scan_in_before=int(data.get("scanInBefore") or 0),
            check_out_time=str(data.get("checkOutTime") or ""),
            scan_out_before=int(data.get("scanOutBefore") or 0),
            scan_out_end_time=str(data.get("scanOutEndTime") or ""),
            enabled=bool(data.get("enabled", False)),
        )

    def to_dict(self) -> dict:
        return {
            "dayGroup": self.day_group.value,
            "checkInTime": self.check_in_time,
            "lateTolerance": self.late_tolerance,
            "scanInBefore": self.scan_in_before,
            "checkOutTime": self.check_out_time,
            "scanOutBefore": self.scan_out_before,
            "scanOutEndTime": self.scan_out_end_time,
            "enabled": self.enabled,
        }


@dataclass(frozen=True)
class EarlyDismissal:
    """One-off earlier check-out time for a date.

    An empty ``class_ids`` applies the dismissal to every class.
    """

    date: date
    time: str
    reason: str = ""
    class_ids: tuple[str, ...] = ()
    dismissal_id: Optional[str] = None

    def applies_to(self, class_id: Optional[str]) -> bool:
        return not self.class_ids or class_id in self.class_ids

    @classmethod
    def from_dict(cls, data: dict) -> "EarlyDismissal":
        return cls(
            date=date.fromisoformat(str(data["date"])),
            time=str(data.get("time") or ""),
            reason=str(data.get("reason") or ""),
            class_ids=tuple(str(c) for c in data.get("classIds") or ()),
            dismissal_id=data.get("id"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.dismissal_id,
            "date": self.date.isoformat(),
            "time": self.time,
            "reason": self.reason,
            "classIds": list(self.class_ids),
        }


@dataclass(frozen=True)
class SpecificSchedule:
    """Weekly hours followed by a subset of classes instead of the general rules."""

    schedule_id: str
    name: str
    class_ids: tuple[str, ...]
    operating_hours: tuple[OperatingHoursRule, ...] = field(default_factory=tuple)

    def rule_for(self, day_group: DayGroup) -> Optional[OperatingHoursRule]:
        return next((r for r in self.operating_hours if r.day_group == day_group), None)

    @classmethod
    def from_dict(cls, data: dict) -> "SpecificSchedule":
        return cls(
            schedule_id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            class_ids=tuple(str(c) for c in data.get("classIds") or ()),
            operating_hours=tuple(OperatingHoursRule.from_dict(r) for r in data.get("operatingHours") or ()),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.schedule_id,
            "name": self.name,
            "classIds": list(self.class_ids),
            "operatingHours": [r.to_dict() for r in self.operating_hours],
        }


@dataclass(frozen=True)
class ClosedDay:
    """Resolution result for a date on which no attendance can be taken."""

    reason: RejectionReason


def day_group_for(day: date) -> Optional[DayGroup]:
    weekday = day.weekday()
    if weekday <= 3:
        return DayGroup.MON_THU
    if weekday == 4:
        return DayGroup.FRI
    if weekday == 5:
        return DayGroup.SAT
    return None
