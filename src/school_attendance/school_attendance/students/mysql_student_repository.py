from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import SchoolClass, Student
from .repository import SchoolClassRepository, StudentRepository

_STUDENT_COLUMNS = "student_id, nis, full_name, class_id, rfid_uid, photo_url"


def _to_student(row: dict) -> Student:
    return Student(
        student_id=str(row["student_id"]),
        nis=str(row["nis"]),
        name=row["full_name"],
        class_id=row.get("class_id"),
        rfid_uid=row.get("rfid_uid"),
        photo_url=row.get("photo_url") or "",
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_STUDENT_COLUMNS} FROM students WHERE {column}=%s", (value,))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return self._get_one("student_id", student_id)

    def get_by_rfid(self, rfid_uid: str) -> Optional[Student]:
        return self._get_one("rfid_uid", rfid_uid)

    def get_by_nis(self, nis: str) -> Optional[Student]:
        return self._get_one("nis", nis)


class MySQLSchoolClassRepository(SchoolClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, class_id: str) -> Optional[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT class_id, class_name FROM school_classes WHERE class_id=%s", (class_id,))
            row = fetchone(cur)
            if not row:
                return None
            return SchoolClass(class_id=str(row["class_id"]), name=row["class_name"])
