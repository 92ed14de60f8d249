from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SchoolClass:
    class_id: str
    name: str


@dataclass(frozen=True)
class Student:
    """A student as the kiosk sees it.

    ``rfid_uid`` is optional: students without a card use their NIS on the
    manual entry page.
    """

    student_id: str
    nis: str
    name: str
    class_id: Optional[str]
    rfid_uid: Optional[str] = None
    photo_url: str = ""
