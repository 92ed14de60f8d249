from __future__ import annotations

from typing import Iterable, Optional

from .model import SchoolClass, Student
from .repository import SchoolClassRepository, StudentRepository


class InMemoryStudentRepository(StudentRepository):
    def __init__(self, students: Iterable[Student] = ()):
        self._by_id: dict[str, Student] = {s.student_id: s for s in students}

    def add(self, student: Student) -> None:
        self._by_id[student.student_id] = student

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return self._by_id.get(student_id)

    def get_by_rfid(self, rfid_uid: str) -> Optional[Student]:
        return next((s for s in self._by_id.values() if s.rfid_uid and s.rfid_uid == rfid_uid), None)

    def get_by_nis(self, nis: str) -> Optional[Student]:
        return next((s for s in self._by_id.values() if s.nis == nis), None)


class InMemorySchoolClassRepository(SchoolClassRepository):
    def __init__(self, classes: Iterable[SchoolClass] = ()):
        self._by_id: dict[str, SchoolClass] = {c.class_id: c for c in classes}

    def get_by_id(self, class_id: str) -> Optional[SchoolClass]:
        return self._by_id.get(class_id)
