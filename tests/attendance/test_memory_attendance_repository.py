from datetime import date, datetime

import pytest

from src.school_attendance.school_attendance.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from src.school_attendance.school_attendance.attendance.model import AttendanceLog
from src.school_attendance.school_attendance.core.enums import AttendanceStatus, LogType
from src.school_attendance.school_attendance.core.exceptions import DuplicateLogError
from src.school_attendance.school_attendance.students.model import Student

DAY = date(2025, 1, 6)
STUDENT = Student("s-1", "250101", "Ahmad Subarjo", "c-1a", rfid_uid="100001")


def _log(log_type=LogType.IN, status=AttendanceStatus.ON_TIME, hour=7, student=STUDENT):
    return AttendanceLog.for_student(
        student,
        class_name="Kelas 1A",
        timestamp=datetime(2025, 1, 6, hour, 0),
        log_type=log_type,
        status=status,
    )


def test_append_refuses_second_log_of_same_type():
    repo = InMemoryAttendanceRepository()
    repo.append(_log())

    with pytest.raises(DuplicateLogError) as exc:
        repo.append(_log(hour=8))

    assert exc.value.log_type == LogType.IN
    assert len(repo.all()) == 1


def test_append_many_skips_existing_keys():
    repo = InMemoryAttendanceRepository([_log()])
    other = Student("s-2", "250102", "Siti Aminah", "c-1a")

    written = repo.append_many([_log(LogType.OUT, AttendanceStatus.NO_CHECKOUT, 15), _log(student=other), _log(hour=9)])

    assert written == 2
    assert len(repo.list_for_day(DAY)) == 3


def test_replace_day_frees_the_keys():
    repo = InMemoryAttendanceRepository([_log(), _log(LogType.OUT, hour=13)])

    repo.replace_day(_log(status=AttendanceStatus.PERMIT, hour=0))

    assert [l.status for l in repo.list_for_student_on("s-1", DAY)] == [AttendanceStatus.PERMIT]
    repo.append(_log(LogType.OUT, hour=13))
    assert len(repo.all()) == 2


def test_log_ids_are_unique_and_serialized_in_camel_case():
    first, second = _log(), _log(LogType.OUT)

    assert first.log_id != second.log_id
    data = first.to_dict()
    assert data["studentName"] == "Ahmad Subarjo"
    assert data["type"] == "in"
    assert data["status"] == "ON_TIME"
    assert data["date"] == "2025-01-06"
