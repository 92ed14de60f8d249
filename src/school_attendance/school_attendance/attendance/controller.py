from __future__ import annotations

import logging
from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.enums import AttendanceStatus, RejectionReason
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)

RETRY_MESSAGE = "Terjadi kesalahan pada server, silakan coba lagi"


def register(app: Flask, container: Container) -> None:
    def _scan_response(result):
        if result.success:
            return jsonify(result.to_dict()), 200
        if result.reason == RejectionReason.NOT_RECOGNIZED:
            return jsonify(result.to_dict()), 404
        return jsonify(result.to_dict()), 200

    def _retry():
        return jsonify({"success": False, "message": RETRY_MESSAGE}), 500

    @app.route("/api/attendance/record-rfid", methods=["POST"], endpoint="record_rfid")
    def record_rfid():
        data = request.get_json(silent=True) or {}
        uid = str(data.get("rfidUid") or "").strip()
        if not uid:
            return jsonify({"success": False, "message": "RFID UID wajib diisi"}), 400
        try:
            return _scan_response(container.attendance_service.record_by_rfid(uid))
        except Exception:
            logger.exception("rfid scan failed")
            return _retry()

    @app.route("/api/attendance/record-nis", methods=["POST"], endpoint="record_nis")
    def record_nis():
        data = request.get_json(silent=True) or {}
        nis = str(data.get("nis") or "").strip()
        if not nis:
            return jsonify({"success": False, "message": "NIS wajib diisi"}), 400
        try:
            return _scan_response(container.attendance_service.record_by_nis(nis))
        except Exception:
            logger.exception("nis scan failed")
            return _retry()

    @app.route("/api/attendance/period", methods=["GET"], endpoint="attendance_period")
    def attendance_period():
        class_id = request.args.get("classId") or None
        try:
            return jsonify(container.attendance_service.current_period(class_id=class_id)), 200
        except Exception:
            logger.exception("period lookup failed")
            return _retry()

    @app.route("/api/attendance/logs", methods=["GET"], endpoint="attendance_logs")
    def attendance_logs():
        try:
            day = parse_iso_date(request.args["date"]) if request.args.get("date") else container.clock().date()
        except ValueError:
            return jsonify({"success": False, "message": "Format tanggal harus YYYY-MM-DD"}), 400
        try:
            return jsonify(container.attendance_service.list_logs(day)), 200
        except Exception:
            logger.exception("log listing failed")
            return _retry()

    @app.route("/api/attendance/manual", methods=["POST"], endpoint="attendance_manual")
    def attendance_manual():
        data = request.get_json(silent=True) or {}
        try:
            status = AttendanceStatus(str(data.get("status") or ""))
            day: date = parse_iso_date(str(data.get("date") or ""))
        except ValueError:
            return jsonify({"success": False, "message": "Status atau tanggal tidak valid"}), 400

        try:
            log = container.attendance_service.record_manual_status(
                student_id=str(data.get("studentId") or ""),
                status=status,
                day=day,
            )
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("manual attendance failed")
            return _retry()
        return jsonify({"success": True, "message": "Absensi manual berhasil disimpan", "log": log.to_dict()}), 201
