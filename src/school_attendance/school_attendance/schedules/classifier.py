from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendancePeriod
from .model import OperatingHoursRule


@dataclass(frozen=True)
class ScanWindows:
    """Minute offsets of the check-in and check-out windows.

    Check-in is ``[in_start, out_start)``, check-out is ``[out_start, out_end]``.
    """

    in_start: int
    out_start: int
    out_end: int


def scan_windows(hours: OperatingHoursRule) -> ScanWindows:
    return ScanWindows(in_start=hours.scan_in_start, out_start=hours.scan_out_start, out_end=hours.scan_out_end)


def classify(current_minutes: int, hours: OperatingHoursRule) -> AttendancePeriod:
    windows = scan_windows(hours)
    if windows.in_start <= current_minutes < windows.out_start:
        return AttendancePeriod.CHECK_IN
    if windows.out_start <= current_minutes <= windows.out_end:
        return AttendancePeriod.CHECK_OUT
    return AttendancePeriod.CLOSED
