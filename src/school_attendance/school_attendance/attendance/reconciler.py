from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable

from ..common.datetime_utils import CivilClock, minute_of_day, to_civil
from ..core.constants import DEFAULT_RECONCILE_BUFFER_MINUTES
from ..core.enums import SCAN_IN_STATUSES, AttendanceStatus, LogType
from ..schedules.resolver import ScheduleResolver
from ..settings.repository import SettingsRepository
from .model import AttendanceLog
from .repository import AttendanceLogRepository

logger = logging.getLogger(__name__)


class MissingCheckoutReconciler:
    """Backfill NO_CHECKOUT logs for students who scanned in but never out.

    Runs after the last scan-out window of the day has closed. Writing is a
    single batch that skips keys already present, so repeated sweeps and a
    late live scan racing a sweep both leave one ``out`` log per student.
    """

    def __init__(
        self,
        attendance: AttendanceLogRepository,
        settings: SettingsRepository,
        *,
        resolver: ScheduleResolver | None = None,
        clock: Callable[[], datetime] | None = None,
        buffer_minutes: int = DEFAULT_RECONCILE_BUFFER_MINUTES,
    ):
        self._attendance = attendance
        self._settings = settings
        self._resolver = resolver or ScheduleResolver()
        self._clock = clock or CivilClock()
        self._tz = getattr(self._clock, "tz", None)
        self._buffer_minutes = buffer_minutes

    def run_sweep(self, now: datetime | None = None) -> int:
        try:
            return self._sweep(now)
        except Exception:
            logger.exception("missing-checkout sweep failed")
            return 0

    def _sweep(self, now: datetime | None) -> int:
        now = now or self._clock()
        if self._tz is not None:
            now = to_civil(now, self._tz)
        today = now.date()

        latest_end = self._resolver.latest_scan_out_end(today, self._settings.get_or_initialize())
        if latest_end is None:
            return 0
        if minute_of_day(now) <= latest_end + self._buffer_minutes:
            return 0

        ins: dict[str, AttendanceLog] = {}
        outs: set[str] = set()
        for log in self._attendance.list_for_day(today):
            if log.log_type == LogType.OUT:
                outs.add(log.student_id)
            elif log.status in SCAN_IN_STATUSES:
                ins[log.student_id] = log

        missing = [
            AttendanceLog(
                log_id=str(uuid.uuid4()),
                student_id=log.student_id,
                student_name=log.student_name,
                student_photo_url=log.student_photo_url,
                class_name=log.class_name,
                log_date=today,
                timestamp=now,
                log_type=LogType.OUT,
                status=AttendanceStatus.NO_CHECKOUT,
            )
            for student_id, log in ins.items()
            if student_id not in outs
        ]
        if not missing:
            return 0

        written = self._attendance.append_many(missing)
        logger.info("backfilled %d missing check-outs for %s", written, today.isoformat())
        return written
