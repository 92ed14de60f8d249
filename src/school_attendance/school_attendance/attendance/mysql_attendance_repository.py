from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import AttendanceStatus, LogType
from ..core.exceptions import DuplicateLogError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, is_duplicate_key
from .model import AttendanceLog
from .repository import AttendanceLogRepository

_SELECT = """
    SELECT log_id, student_id, student_name, student_photo_url, class_name,
           log_date, logged_at, log_type, status
    FROM attendance_logs
"""

_INSERT = """
    INSERT INTO attendance_logs(
        log_id, student_id, student_name, student_photo_url, class_name,
        log_date, logged_at, log_type, status
    )
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
"""


def _to_log(r: dict) -> AttendanceLog:
    return AttendanceLog(
        log_id=str(r["log_id"]),
        student_id=str(r["student_id"]),
        student_name=r["student_name"],
        student_photo_url=r.get("student_photo_url") or "",
        class_name=r.get("class_name") or "",
        log_date=r["log_date"],
        timestamp=r["logged_at"],
        log_type=LogType(r["log_type"]),
        status=AttendanceStatus(r["status"]),
    )


def _params(log: AttendanceLog) -> tuple:
    # logged_at holds civil wall-clock time; the column has no zone.
    return (
        log.log_id,
        log.student_id,
        log.student_name,
        log.student_photo_url,
        log.class_name,
        log.log_date,
        log.timestamp.replace(tzinfo=None),
        log.log_type.value,
        log.status.value,
    )


class MySQLAttendanceRepository(AttendanceLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_student_on(self, student_id: str, log_date: date) -> Sequence[AttendanceLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE student_id=%s AND log_date=%s ORDER BY logged_at",
                (student_id, log_date),
            )
            return [_to_log(r) for r in fetchall(cur)]

    def list_for_day(self, log_date: date) -> Sequence[AttendanceLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE log_date=%s ORDER BY logged_at", (log_date,))
            return [_to_log(r) for r in fetchall(cur)]

    def append(self, log: AttendanceLog) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(_INSERT, _params(log))
        except Exception as e:
            if is_duplicate_key(e):
                raise DuplicateLogError(log.student_id, log.log_date, log.log_type) from e
            raise

    def append_many(self, logs: Sequence[AttendanceLog]) -> int:
        if not logs:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            # A no-op update on the unique key skips rows a live scan already wrote.
            cur.executemany(_INSERT + " ON DUPLICATE KEY UPDATE log_id=log_id", [_params(log) for log in logs])
            return max(int(cur.rowcount), 0)

    def replace_day(self, log: AttendanceLog) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_logs WHERE student_id=%s AND log_date=%s",
                (log.student_id, log.log_date),
            )
            cur.execute(_INSERT, _params(log))
