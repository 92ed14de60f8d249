from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from ..core.enums import AttendanceStatus, LogType, RejectionReason
from ..students.model import Student


@dataclass(frozen=True)
class AttendanceLog:
    """One check-in or check-out, immutable once written.

    Student name, photo and class name are copies taken when the log was
    created; later edits to the student do not touch them.
    """

    log_id: str
    student_id: str
    student_name: str
    student_photo_url: str
    class_name: str
    log_date: date
    timestamp: datetime
    log_type: LogType
    status: AttendanceStatus

    @property
    def key(self) -> tuple[str, date, LogType]:
        return (self.student_id, self.log_date, self.log_type)

    @classmethod
    def for_student(
        cls,
        student: Student,
        *,
        class_name: str,
        timestamp: datetime,
        log_type: LogType,
        status: AttendanceStatus,
        log_date: Optional[date] = None,
    ) -> "AttendanceLog":
        return cls(
            log_id=str(uuid.uuid4()),
            student_id=student.student_id,
            student_name=student.name,
            student_photo_url=student.photo_url,
            class_name=class_name,
            log_date=log_date or timestamp.date(),
            timestamp=timestamp,
            log_type=log_type,
            status=status,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.log_id,
            "studentId": self.student_id,
            "studentName": self.student_name,
            "studentPhotoUrl": self.student_photo_url,
            "className": self.class_name,
            "date": self.log_date.isoformat(),
            "timestamp": self.timestamp.isoformat(),
            "type": self.log_type.value,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class Accepted:
    log: AttendanceLog
    message: str


@dataclass(frozen=True)
class Rejected:
    reason: RejectionReason


Decision = Union[Accepted, Rejected]


@dataclass(frozen=True)
class ScanResult:
    """Outcome returned to the kiosk for one card tap or NIS entry."""

    success: bool
    message: str
    log: Optional[AttendanceLog] = None
    reason: Optional[RejectionReason] = None

    def to_dict(self) -> dict:
        out: dict = {"success": self.success, "message": self.message}
        if self.log is not None:
            out["log"] = self.log.to_dict()
        if self.reason is not None:
            out["reason"] = self.reason.value
        return out
