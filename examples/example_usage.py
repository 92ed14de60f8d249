"""Example: drive the attendance core without Flask or MySQL.

Simulates one school day on the in-memory backend: two card taps in the
morning, one in the afternoon, then the missing-checkout sweep.
"""

from datetime import datetime

from src.school_attendance.school_attendance.container import build_memory_container
from src.school_attendance.school_attendance.students.model import SchoolClass, Student


def main():
    container = build_memory_container(
        classes=[SchoolClass("c-1a", "Kelas 1A")],
        students=[
            Student("s-1", "250101", "Ahmad Subarjo", "c-1a", rfid_uid="100001"),
            Student("s-2", "250102", "Siti Aminah", "c-1a", rfid_uid="100002"),
        ],
    )
    service = container.attendance_service

    # 2025-01-06 is a Monday; default hours are 07:00-13:00.
    for uid, at in [("100001", "06:30"), ("100002", "07:20"), ("100001", "06:45"), ("100001", "13:05")]:
        result = service.record_by_rfid(uid, now=datetime.fromisoformat(f"2025-01-06T{at}:00"))
        print(at, uid, result.to_dict()["message"])

    written = container.reconciler.run_sweep(now=datetime.fromisoformat("2025-01-06T15:05:00"))
    print("backfilled:", written)
    for row in service.list_logs(datetime(2025, 1, 6).date()):
        print(row["time"], row["studentName"], row["type"], row["statusLabel"])


if __name__ == "__main__":
    main()
