from __future__ import annotations

import threading
from datetime import date
from typing import Iterable, Sequence

from ..core.exceptions import DuplicateLogError
from .model import AttendanceLog
from .repository import AttendanceLogRepository


class InMemoryAttendanceRepository(AttendanceLogRepository):
    """Process-local log store; one lock serializes every check-then-write."""

    def __init__(self, logs: Iterable[AttendanceLog] = ()):
        self._lock = threading.Lock()
        self._logs: list[AttendanceLog] = []
        self._keys: set = set()
        for log in logs:
            self.append(log)

    def all(self) -> list[AttendanceLog]:
        with self._lock:
            return list(self._logs)

    def list_for_student_on(self, student_id: str, log_date: date) -> Sequence[AttendanceLog]:
        with self._lock:
            return [r for r in self._logs if r.student_id == student_id and r.log_date == log_date]

    def list_for_day(self, log_date: date) -> Sequence[AttendanceLog]:
        with self._lock:
            return [r for r in self._logs if r.log_date == log_date]

    def append(self, log: AttendanceLog) -> None:
        with self._lock:
            if log.key in self._keys:
                raise DuplicateLogError(log.student_id, log.log_date, log.log_type)
            self._logs.append(log)
            self._keys.add(log.key)

    def append_many(self, logs: Sequence[AttendanceLog]) -> int:
        written = 0
        with self._lock:
            for log in logs:
                if log.key in self._keys:
                    continue
                self._logs.append(log)
                self._keys.add(log.key)
                written += 1
        return written

    def replace_day(self, log: AttendanceLog) -> None:
        with self._lock:
            kept = [r for r in self._logs if not (r.student_id == log.student_id and r.log_date == log.log_date)]
            kept.append(log)
            self._logs = kept
            self._keys = {r.key for r in kept}
