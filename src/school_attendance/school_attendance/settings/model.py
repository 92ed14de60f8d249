from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import DayGroup
from ..schedules.model import EarlyDismissal, OperatingHoursRule, SpecificSchedule


@dataclass(frozen=True)
class SchoolSettings:
    """School-wide configuration read by the attendance core."""

    school_name: str
    operating_hours: tuple[OperatingHoursRule, ...]
    holidays: frozenset[date] = frozenset()
    early_dismissals: tuple[EarlyDismissal, ...] = ()
    specific_schedules: tuple[SpecificSchedule, ...] = ()
    school_logo_url: str = ""
    running_text: str = ""

    def rule_for(self, day_group: DayGroup) -> Optional[OperatingHoursRule]:
        return next((r for r in self.operating_hours if r.day_group == day_group), None)

    def is_holiday(self, day: date) -> bool:
        return day in self.holidays

    def dismissal_for(self, day: date, class_id: Optional[str]) -> Optional[EarlyDismissal]:
        return next((d for d in self.early_dismissals if d.date == day and d.applies_to(class_id)), None)

    def schedule_for_class(self, class_id: Optional[str]) -> Optional[SpecificSchedule]:
        if class_id is None:
            return None
        return next((s for s in self.specific_schedules if class_id in s.class_ids), None)

    @classmethod
    def from_dict(cls, data: dict) -> "SchoolSettings":
        return cls(
            school_name=str(data.get("schoolName") or ""),
            school_logo_url=str(data.get("schoolLogoUrl") or ""),
            running_text=str(data.get("runningText") or ""),
            operating_hours=tuple(OperatingHoursRule.from_dict(r) for r in data.get("operatingHours") or ()),
            holidays=frozenset(date.fromisoformat(str(d)) for d in data.get("holidays") or ()),
            early_dismissals=tuple(EarlyDismissal.from_dict(d) for d in data.get("earlyDismissals") or ()),
            specific_schedules=tuple(SpecificSchedule.from_dict(s) for s in data.get("specificSchedules") or ()),
        )

    def to_dict(self) -> dict:
        return {
            "schoolName": self.school_name,
            "schoolLogoUrl": self.school_logo_url,
            "runningText": self.running_text,
            "operatingHours": [r.to_dict() for r in self.operating_hours],
            "holidays": sorted(d.isoformat() for d in self.holidays),
            "earlyDismissals": [d.to_dict() for d in self.early_dismissals],
            "specificSchedules": [s.to_dict() for s in self.specific_schedules],
        }


def default_settings() -> SchoolSettings:
    """Settings written the first time the settings row is read."""

    return SchoolSettings(
        school_name="MI Islamiyah Rowosari",
        operating_hours=(
            OperatingHoursRule(DayGroup.MON_THU, "07:00", 15, 60, "13:00", 15, "15:00", True),
            OperatingHoursRule(DayGroup.FRI, "07:00", 15, 60, "11:00", 15, "13:00", True),
            OperatingHoursRule(DayGroup.SAT, "08:00", 15, 45, "12:00", 15, "14:00", False),
        ),
        holidays=frozenset({date(2024, 12, 25)}),
    )
