from __future__ import annotations

from datetime import date, datetime

import pytest

from src.school_attendance.school_attendance.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from src.school_attendance.school_attendance.attendance.reconciler import MissingCheckoutReconciler
from src.school_attendance.school_attendance.attendance.service import AttendanceService
from src.school_attendance.school_attendance.core.enums import DayGroup
from src.school_attendance.school_attendance.schedules.model import OperatingHoursRule
from src.school_attendance.school_attendance.settings.memory_settings_repository import InMemorySettingsRepository
from src.school_attendance.school_attendance.settings.model import SchoolSettings
from src.school_attendance.school_attendance.students.memory_student_repository import (
    InMemorySchoolClassRepository,
    InMemoryStudentRepository,
)
from src.school_attendance.school_attendance.students.model import SchoolClass, Student

# 2025-01-06 is a Monday.
MONDAY = date(2025, 1, 6)


class FixedClock:
    """Naive civil-time clock the tests move by hand."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def make_rule(
    day_group: DayGroup = DayGroup.MON_THU,
    *,
    check_in: str = "07:00",
    late: int = 15,
    scan_in_before: int = 60,
    check_out: str = "13:00",
    scan_out_before: int = 15,
    scan_out_end: str = "15:00",
    enabled: bool = True,
) -> OperatingHoursRule:
    return OperatingHoursRule(
        day_group=day_group,
        check_in_time=check_in,
        late_tolerance=late,
        scan_in_before=scan_in_before,
        check_out_time=check_out,
        scan_out_before=scan_out_before,
        scan_out_end_time=scan_out_end,
        enabled=enabled,
    )


def at(hhmmss: str, day: date = MONDAY) -> datetime:
    h, m, *s = (int(p) for p in hhmmss.split(":"))
    return datetime(day.year, day.month, day.day, h, m, s[0] if s else 0)


@pytest.fixture
def rule_factory():
    return make_rule


@pytest.fixture
def at_time():
    return at


@pytest.fixture
def school_settings() -> SchoolSettings:
    return SchoolSettings(
        school_name="SD Uji",
        operating_hours=(
            make_rule(DayGroup.MON_THU),
            make_rule(DayGroup.FRI, check_out="11:00", scan_out_end="13:00"),
            make_rule(DayGroup.SAT, check_in="08:00", scan_in_before=45, check_out="12:00", scan_out_end="14:00", enabled=False),
        ),
    )


@pytest.fixture
def classes() -> list[SchoolClass]:
    return [SchoolClass("c-1a", "Kelas 1A"), SchoolClass("c-2b", "Kelas 2B")]


@pytest.fixture
def students() -> list[Student]:
    return [
        Student("s-1", "250101", "Ahmad Subarjo", "c-1a", rfid_uid="100001", photo_url="/img/s-1.jpg"),
        Student("s-2", "250102", "Siti Aminah", "c-1a", rfid_uid="100002"),
        Student("s-3", "250201", "Budi Santoso", "c-2b"),
    ]


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(at("06:30"))


@pytest.fixture
def attendance_repo() -> InMemoryAttendanceRepository:
    return InMemoryAttendanceRepository()


@pytest.fixture
def settings_repo(school_settings) -> InMemorySettingsRepository:
    return InMemorySettingsRepository(school_settings)


@pytest.fixture
def attendance_service(attendance_repo, settings_repo, students, classes, clock) -> AttendanceService:
    return AttendanceService(
        attendance_repo,
        InMemoryStudentRepository(students),
        InMemorySchoolClassRepository(classes),
        settings_repo,
        clock=clock,
    )


@pytest.fixture
def reconciler(attendance_repo, settings_repo, clock) -> MissingCheckoutReconciler:
    return MissingCheckoutReconciler(attendance_repo, settings_repo, clock=clock)
