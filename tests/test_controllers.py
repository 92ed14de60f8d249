import pytest

from src.school_attendance.school_attendance.container import build_memory_container
from src.school_attendance.school_attendance.main import create_app


@pytest.fixture
def container(students, classes, school_settings):
    return build_memory_container(students=students, classes=classes, settings=school_settings)


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


def test_unknown_card_is_404(client):
    resp = client.post("/api/attendance/record-rfid", json={"rfidUid": "999999"})

    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "message": "Kartu tidak terdaftar", "reason": "not-recognized"}


def test_unknown_nis_is_404(client):
    resp = client.post("/api/attendance/record-nis", json={"nis": "000000"})

    assert resp.status_code == 404
    assert resp.get_json()["message"] == "NIS tidak ditemukan"


@pytest.mark.parametrize("path", ["/api/attendance/record-rfid", "/api/attendance/record-nis"])
def test_scan_requires_identifier(client, path):
    resp = client.post(path, json={})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_known_card_returns_scan_result(client):
    resp = client.post("/api/attendance/record-rfid", json={"rfidUid": "100001"})
    body = resp.get_json()

    # Outcome depends on the wall clock; the shape does not.
    assert resp.status_code == 200
    assert set(body) >= {"success", "message"}
    assert ("log" in body) == body["success"]
    assert ("reason" in body) != body["success"]


def test_storage_failure_is_generic_500(client, container, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("connection lost")

    monkeypatch.setattr(container.attendance_service, "record_by_rfid", boom)

    resp = client.post("/api/attendance/record-rfid", json={"rfidUid": "100001"})

    assert resp.status_code == 500
    assert "connection lost" not in resp.get_json()["message"]


def test_period_endpoint(client):
    resp = client.get("/api/attendance/period?classId=c-1a")

    assert resp.status_code == 200
    assert resp.get_json()["period"] in {"CHECK_IN", "CHECK_OUT", "CLOSED"}


def test_manual_entry_then_listing(client):
    resp = client.post("/api/attendance/manual", json={"studentId": "s-3", "status": "SICK", "date": "2025-01-06"})

    assert resp.status_code == 201
    assert resp.get_json()["log"]["status"] == "SICK"

    rows = client.get("/api/attendance/logs?date=2025-01-06").get_json()
    assert [(r["studentId"], r["statusLabel"]) for r in rows] == [("s-3", "Sakit")]


@pytest.mark.parametrize(
    "payload, status_code",
    [
        ({"studentId": "s-1", "status": "LATE", "date": "2025-01-06"}, 400),
        ({"studentId": "s-1", "status": "TIDUR", "date": "2025-01-06"}, 400),
        ({"studentId": "s-1", "status": "SICK", "date": "06-01-2025"}, 400),
        ({"studentId": "nobody", "status": "SICK", "date": "2025-01-06"}, 404),
    ],
)
def test_manual_entry_errors(client, payload, status_code):
    assert client.post("/api/attendance/manual", json=payload).status_code == status_code


def test_logs_rejects_bad_date(client):
    assert client.get("/api/attendance/logs?date=kemarin").status_code == 400


def test_settings_get_and_put(client):
    current = client.get("/api/settings").get_json()
    assert current["schoolName"] == "SD Uji"

    current["holidays"] = ["2025-01-01"]
    current["schoolName"] = "SD Uji 2"
    resp = client.put("/api/settings", json=current)

    assert resp.status_code == 200
    assert client.get("/api/settings").get_json()["holidays"] == ["2025-01-01"]


def test_settings_put_validation_error(client):
    resp = client.put("/api/settings", json={"operatingHours": [{"dayGroup": "mon-thu", "checkInTime": "7"}]})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_settings_put_requires_object(client):
    assert client.put("/api/settings", json=["x"]).status_code == 400
