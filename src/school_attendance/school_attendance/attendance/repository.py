from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceLog


class AttendanceLogRepository(Protocol):
    """Append-only store for attendance logs.

    Implementations must refuse a second log for the same
    (student, date, type) key; that is what keeps concurrent taps of one
    card from double-inserting.
    """

    def list_for_student_on(self, student_id: str, log_date: date) -> Sequence[AttendanceLog]:
        raise NotImplementedError

    def list_for_day(self, log_date: date) -> Sequence[AttendanceLog]:
        raise NotImplementedError

    def append(self, log: AttendanceLog) -> None:
        """Raises DuplicateLogError when the key is already taken."""

        raise NotImplementedError

    def append_many(self, logs: Sequence[AttendanceLog]) -> int:
        """Insert in one batch, skipping keys that already exist.

        Returns the number of rows written.
        """

        raise NotImplementedError

    def replace_day(self, log: AttendanceLog) -> None:
        """Admin-only: drop the student's logs for the day, then write ``log``."""

        raise NotImplementedError
