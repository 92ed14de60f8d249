from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .attendance.factory import AttendanceStrategyFactory
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.reconciler import MissingCheckoutReconciler
from .attendance.repository import AttendanceLogRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import CivilClock
from .core.constants import DEFAULT_RECONCILE_BUFFER_MINUTES, DEFAULT_SCHOOL_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .schedules.resolver import ScheduleResolver
from .settings.memory_settings_repository import InMemorySettingsRepository
from .settings.model import SchoolSettings
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .students.memory_student_repository import InMemorySchoolClassRepository, InMemoryStudentRepository
from .students.model import SchoolClass, Student
from .students.mysql_student_repository import MySQLSchoolClassRepository, MySQLStudentRepository
from .students.repository import SchoolClassRepository, StudentRepository


@dataclass(frozen=True)
class Container:
    clock: CivilClock

    students_repo: StudentRepository
    classes_repo: SchoolClassRepository
    attendance_repo: AttendanceLogRepository
    settings_repo: SettingsRepository

    attendance_service: AttendanceService
    settings_service: SettingsService
    reconciler: MissingCheckoutReconciler


def _wire(
    *,
    clock: CivilClock,
    students_repo: StudentRepository,
    classes_repo: SchoolClassRepository,
    attendance_repo: AttendanceLogRepository,
    settings_repo: SettingsRepository,
    buffer_minutes: int,
) -> Container:
    resolver = ScheduleResolver()
    attendance_service = AttendanceService(
        attendance_repo,
        students_repo,
        classes_repo,
        settings_repo,
        resolver=resolver,
        strategy_factory=AttendanceStrategyFactory(),
        clock=clock,
    )
    reconciler = MissingCheckoutReconciler(
        attendance_repo,
        settings_repo,
        resolver=resolver,
        clock=clock,
        buffer_minutes=buffer_minutes,
    )
    return Container(
        clock=clock,
        students_repo=students_repo,
        classes_repo=classes_repo,
        attendance_repo=attendance_repo,
        settings_repo=settings_repo,
        attendance_service=attendance_service,
        settings_service=SettingsService(settings_repo),
        reconciler=reconciler,
    )


def build_container(
    *,
    db_config: dict,
    tz_name: str = DEFAULT_SCHOOL_TIMEZONE,
    buffer_minutes: int = DEFAULT_RECONCILE_BUFFER_MINUTES,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return _wire(
        clock=CivilClock(tz_name),
        students_repo=MySQLStudentRepository(conn),
        classes_repo=MySQLSchoolClassRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        buffer_minutes=buffer_minutes,
    )


def build_memory_container(
    *,
    students: Iterable[Student] = (),
    classes: Iterable[SchoolClass] = (),
    settings: SchoolSettings | None = None,
    tz_name: str = DEFAULT_SCHOOL_TIMEZONE,
    buffer_minutes: int = DEFAULT_RECONCILE_BUFFER_MINUTES,
) -> Container:
    """Same wiring with process-local stores; for demos and tests."""
    return _wire(
        clock=CivilClock(tz_name),
        students_repo=InMemoryStudentRepository(students),
        classes_repo=InMemorySchoolClassRepository(classes),
        attendance_repo=InMemoryAttendanceRepository(),
        settings_repo=InMemorySettingsRepository(settings),
        buffer_minutes=buffer_minutes,
    )
