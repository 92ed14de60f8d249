from __future__ import annotations

from datetime import date
from typing import Optional, Union

from ..core.enums import RejectionReason
from ..settings.model import SchoolSettings
from .model import ClosedDay, OperatingHoursRule, day_group_for

Resolution = Union[OperatingHoursRule, ClosedDay]


class ScheduleResolver:
    """Produce the effective operating hours for a civil date.

    Priority, lowest to highest: general weekly rule, the class's specific
    schedule, then an early dismissal for the date. Holidays and Sundays
    close the day outright.
    """

    def resolve(self, day: date, settings: SchoolSettings, class_id: Optional[str] = None) -> Resolution:
        if settings.is_holiday(day):
            return ClosedDay(RejectionReason.HOLIDAY)

        day_group = day_group_for(day)
        if day_group is None:
            return ClosedDay(RejectionReason.UNAVAILABLE_TODAY)

        rule = settings.rule_for(day_group)
        if rule is None or not rule.enabled:
            return ClosedDay(RejectionReason.UNAVAILABLE_NOW)

        specific = settings.schedule_for_class(class_id)
        if specific is not None:
            specific_rule = specific.rule_for(day_group)
            if specific_rule is not None and specific_rule.enabled:
                rule = specific_rule

        # Only the check-out time moves; scan windows keep their configured offsets.
        dismissal = settings.dismissal_for(day, class_id)
        if dismissal is not None:
            rule = rule.with_check_out(dismissal.time)

        return rule

    def latest_scan_out_end(self, day: date, settings: SchoolSettings) -> Optional[int]:
        """Latest scan-out close (minutes) of any schedule running on ``day``.

        Returns None when the day is closed for the general schedule.
        """
        general = self.resolve(day, settings)
        if isinstance(general, ClosedDay):
            return None

        latest = general.scan_out_end
        day_group = general.day_group
        for specific in settings.specific_schedules:
            rule = specific.rule_for(day_group)
            if rule is not None and rule.enabled:
                latest = max(latest, rule.scan_out_end)
        return latest
