from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings", methods=["GET"], endpoint="settings_get")
    def settings_get():
        return jsonify(container.settings_service.get().to_dict()), 200

    @app.route("/api/settings", methods=["PUT"], endpoint="settings_update")
    def settings_update():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({"success": False, "message": "Body harus berupa objek JSON"}), 400
        try:
            settings = container.settings_service.update(payload)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("settings update failed")
            return jsonify({"success": False, "message": "Gagal menyimpan pengaturan"}), 500
        return jsonify(settings.to_dict()), 200
