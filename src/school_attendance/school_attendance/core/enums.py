from __future__ import annotations

from enum import Enum


class DayGroup(str, Enum):
    """Weekday groups that share one operating-hours rule."""

    MON_THU = "mon-thu"
    FRI = "fri"
    SAT = "sat"


class LogType(str, Enum):
    IN = "in"
    OUT = "out"


class AttendanceStatus(str, Enum):
    """Status labels stored on attendance logs."""

    ON_TIME = "ON_TIME"
    LATE = "LATE"
    LEFT_EARLY = "LEFT_EARLY"
    ABSENT = "ABSENT"
    SICK = "SICK"
    PERMIT = "PERMIT"
    NO_CHECKOUT = "NO_CHECKOUT"

    @property
    def is_manual(self) -> bool:
        return self in MANUAL_STATUSES


MANUAL_STATUSES = frozenset({AttendanceStatus.ABSENT, AttendanceStatus.SICK, AttendanceStatus.PERMIT})

# Statuses a kiosk check-in can produce.
SCAN_IN_STATUSES = frozenset({AttendanceStatus.ON_TIME, AttendanceStatus.LATE})


class AttendancePeriod(str, Enum):
    CHECK_IN = "CHECK_IN"
    CHECK_OUT = "CHECK_OUT"
    CLOSED = "CLOSED"


class RejectionReason(str, Enum):
    """Expected, user-facing reasons a scan is not recorded."""

    HOLIDAY = "holiday"
    UNAVAILABLE_TODAY = "unavailable-today"
    UNAVAILABLE_NOW = "unavailable-now"
    WINDOW_CLOSED = "window-closed"
    ALREADY_CHECKED_IN = "already-checked-in"
    NOT_CHECKED_IN_YET = "not-checked-in-yet"
    ALREADY_CHECKED_OUT = "already-checked-out"
    RECORDED_MANUALLY = "recorded-manually"
    NOT_RECOGNIZED = "not-recognized"
