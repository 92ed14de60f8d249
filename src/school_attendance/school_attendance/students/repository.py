from __future__ import annotations

from typing import Optional, Protocol

from .model import SchoolClass, Student


class StudentRepository(Protocol):
    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_rfid(self, rfid_uid: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_nis(self, nis: str) -> Optional[Student]:
        raise NotImplementedError


class SchoolClassRepository(Protocol):
    def get_by_id(self, class_id: str) -> Optional[SchoolClass]:
        raise NotImplementedError
