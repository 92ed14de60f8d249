from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import CivilClock, minute_of_day, to_civil
from ..core.enums import AttendancePeriod, AttendanceStatus, LogType, RejectionReason
from ..core.exceptions import DuplicateLogError, NotFoundError, ValidationError
from ..schedules.classifier import classify, scan_windows
from ..schedules.model import ClosedDay
from ..schedules.resolver import Resolution, ScheduleResolver
from ..settings.repository import SettingsRepository
from ..students.model import Student
from ..students.repository import SchoolClassRepository, StudentRepository
from .factory import AttendanceStrategyFactory
from .model import Accepted, AttendanceLog, Decision, Rejected, ScanResult
from .repository import AttendanceLogRepository

logger = logging.getLogger(__name__)

REJECTION_MESSAGES = {
    RejectionReason.HOLIDAY: "Hari ini adalah hari libur",
    RejectionReason.UNAVAILABLE_TODAY: "Absensi tidak tersedia hari ini",
    RejectionReason.UNAVAILABLE_NOW: "Absensi tidak tersedia saat ini untuk kelas ini",
    RejectionReason.WINDOW_CLOSED: "Waktu absensi ditutup",
    RejectionReason.ALREADY_CHECKED_IN: "Anda sudah absen masuk hari ini",
    RejectionReason.NOT_CHECKED_IN_YET: "Anda belum absen masuk hari ini",
    RejectionReason.ALREADY_CHECKED_OUT: "Anda sudah absen pulang hari ini",
    RejectionReason.RECORDED_MANUALLY: "Kehadiran Anda hari ini sudah dicatat oleh admin",
    RejectionReason.NOT_RECOGNIZED: "Kartu tidak terdaftar",
}

STATUS_LABELS = {
    AttendanceStatus.ON_TIME: "Tepat Waktu",
    AttendanceStatus.LATE: "Terlambat",
    AttendanceStatus.LEFT_EARLY: "Pulang Cepat",
    AttendanceStatus.ABSENT: "Alfa",
    AttendanceStatus.SICK: "Sakit",
    AttendanceStatus.PERMIT: "Izin",
    AttendanceStatus.NO_CHECKOUT: "Tidak Scan Pulang",
}

PERIOD_LABELS = {
    AttendancePeriod.CHECK_IN: "SCAN MASUK",
    AttendancePeriod.CHECK_OUT: "SCAN PULANG",
    AttendancePeriod.CLOSED: "WAKTU ABSENSI DITUTUP",
}


class AttendanceService:
    """Use case: record a kiosk scan as a check-in or check-out.

    The decision itself (:meth:`decide`) is pure; :meth:`record_attendance`
    fetches its inputs, and writing the log is always the last step.
    """

    def __init__(
        self,
        attendance: AttendanceLogRepository,
        students: StudentRepository,
        classes: SchoolClassRepository,
        settings: SettingsRepository,
        *,
        resolver: ScheduleResolver | None = None,
        strategy_factory: AttendanceStrategyFactory | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._attendance = attendance
        self._students = students
        self._classes = classes
        self._settings = settings
        self._resolver = resolver or ScheduleResolver()
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._clock = clock or CivilClock()
        self._tz = getattr(self._clock, "tz", None)

    def _civil_now(self, now: datetime | None) -> datetime:
        now = now or self._clock()
        return to_civil(now, self._tz) if self._tz is not None else now

    def decide(
        self,
        student: Student,
        *,
        class_name: str,
        now: datetime,
        todays_logs: Sequence[AttendanceLog],
        resolution: Resolution,
    ) -> Decision:
        if isinstance(resolution, ClosedDay):
            return Rejected(resolution.reason)

        period = classify(minute_of_day(now), resolution)
        if period == AttendancePeriod.CLOSED:
            return Rejected(RejectionReason.WINDOW_CLOSED)

        # Absent, sick and permit entries close the day for the kiosk.
        if any(prior.status.is_manual for prior in todays_logs):
            return Rejected(RejectionReason.RECORDED_MANUALLY)

        has_in = any(prior.log_type == LogType.IN for prior in todays_logs)
        has_out = any(prior.log_type == LogType.OUT for prior in todays_logs)

        if period == AttendancePeriod.CHECK_IN:
            if has_in:
                return Rejected(RejectionReason.ALREADY_CHECKED_IN)
            strategy = self._factory.for_checkin(now=now, hours=resolution)
            decision = strategy.decide_checkin(now=now, hours=resolution)
            log_type = LogType.IN
            message = f"Selamat Pagi, {student.name}!"
        else:
            if not has_in:
                return Rejected(RejectionReason.NOT_CHECKED_IN_YET)
            if has_out:
                return Rejected(RejectionReason.ALREADY_CHECKED_OUT)
            strategy = self._factory.for_checkout(now=now, hours=resolution)
            decision = strategy.decide_checkout(now=now, hours=resolution)
            log_type = LogType.OUT
            message = f"Selamat Jalan, {student.name}!"

        log = AttendanceLog.for_student(
            student,
            class_name=class_name,
            timestamp=now,
            log_type=log_type,
            status=decision.status,
            log_date=now.date(),
        )
        return Accepted(log=log, message=message)

    def record_attendance(self, student: Student, *, now: datetime | None = None) -> ScanResult:
        now = self._civil_now(now)
        today = now.date()

        resolution = self._resolver.resolve(today, self._settings.get_or_initialize(), student.class_id)
        if isinstance(resolution, ClosedDay):
            return _rejected(resolution.reason)

        decision = self.decide(
            student,
            class_name=self._class_name(student.class_id),
            now=now,
            todays_logs=self._attendance.list_for_student_on(student.student_id, today),
            resolution=resolution,
        )
        if isinstance(decision, Rejected):
            return _rejected(decision.reason)

        try:
            self._attendance.append(decision.log)
        except DuplicateLogError:
            # Another tap of the same card won the race between our read and write.
            if decision.log.log_type == LogType.IN:
                return _rejected(RejectionReason.ALREADY_CHECKED_IN)
            return _rejected(RejectionReason.ALREADY_CHECKED_OUT)

        logger.info(
            "recorded %s/%s for student %s at %s",
            decision.log.log_type.value,
            decision.log.status.value,
            student.student_id,
            now.isoformat(),
        )
        return ScanResult(success=True, message=decision.message, log=decision.log)

    def record_by_rfid(self, rfid_uid: str, *, now: datetime | None = None) -> ScanResult:
        uid = (rfid_uid or "").strip()
        student = self._students.get_by_rfid(uid) if uid else None
        if not student:
            return ScanResult(success=False, message="Kartu tidak terdaftar", reason=RejectionReason.NOT_RECOGNIZED)
        return self.record_attendance(student, now=now)

    def record_by_nis(self, nis: str, *, now: datetime | None = None) -> ScanResult:
        nis = (nis or "").strip()
        student = self._students.get_by_nis(nis) if nis else None
        if not student:
            return ScanResult(success=False, message="NIS tidak ditemukan", reason=RejectionReason.NOT_RECOGNIZED)
        return self.record_attendance(student, now=now)

    def current_period(self, *, now: datetime | None = None, class_id: Optional[str] = None) -> dict:
        """Kiosk banner: which scan the next tap would be, if any."""
        now = self._civil_now(now)
        resolution = self._resolver.resolve(now.date(), self._settings.get_or_initialize(), class_id)
        out = {"date": now.date().isoformat(), "time": now.strftime("%H:%M")}

        if isinstance(resolution, ClosedDay):
            out.update(
                period=AttendancePeriod.CLOSED.value,
                label=PERIOD_LABELS[AttendancePeriod.CLOSED],
                reason=resolution.reason.value,
                message=REJECTION_MESSAGES[resolution.reason],
            )
            return out

        period = classify(minute_of_day(now), resolution)
        windows = scan_windows(resolution)
        out.update(
            period=period.value,
            label=PERIOD_LABELS[period],
            checkInTime=resolution.check_in_time,
            checkOutTime=resolution.check_out_time,
            scanInStart=_fmt_minutes(windows.in_start),
            scanOutStart=_fmt_minutes(windows.out_start),
            scanOutEnd=_fmt_minutes(windows.out_end),
        )
        return out

    def record_manual_status(self, *, student_id: str, status: AttendanceStatus, day: date) -> AttendanceLog:
        """Admin entry of absent/sick/permit; replaces whatever was logged that day."""
        if not status.is_manual:
            raise ValidationError("Status manual harus Alfa, Sakit, atau Izin")

        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Siswa tidak ditemukan")

        log = AttendanceLog.for_student(
            student,
            class_name=self._class_name(student.class_id),
            timestamp=datetime.combine(day, time.min, tzinfo=self._tz),
            log_type=LogType.IN,
            status=status,
            log_date=day,
        )
        self._attendance.replace_day(log)
        logger.info("manual %s recorded for student %s on %s", status.value, student_id, day.isoformat())
        return log

    def list_logs(self, day: date) -> list[dict]:
        rows = sorted(self._attendance.list_for_day(day), key=lambda log: log.timestamp.replace(tzinfo=None))
        return [self._to_view(log) for log in rows]

    def _class_name(self, class_id: Optional[str]) -> str:
        if not class_id:
            return ""
        school_class = self._classes.get_by_id(class_id)
        return school_class.name if school_class else ""

    def _to_view(self, log: AttendanceLog) -> dict:
        view = log.to_dict()
        view["statusLabel"] = STATUS_LABELS.get(log.status, log.status.value)
        view["time"] = log.timestamp.strftime("%H:%M:%S")
        return view


def _rejected(reason: RejectionReason) -> ScanResult:
    return ScanResult(success=False, message=REJECTION_MESSAGES[reason], reason=reason)


def _fmt_minutes(minutes: int) -> str:
    minutes = max(minutes, 0)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
