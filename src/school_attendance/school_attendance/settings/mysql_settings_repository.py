from __future__ import annotations

import json

from ..core.constants import SETTINGS_ROW_ID
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import SchoolSettings, default_settings
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_or_initialize(self) -> SchoolSettings:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT payload FROM school_settings WHERE settings_id=%s", (SETTINGS_ROW_ID,))
            row = fetchone(cur)
            if row:
                payload = row["payload"]
                if isinstance(payload, (bytes, bytearray)):
                    payload = payload.decode("utf-8")
                if isinstance(payload, str):
                    payload = json.loads(payload)
                return SchoolSettings.from_dict(payload)

            settings = default_settings()
            # INSERT IGNORE: two workers may initialize at the same time.
            cur.execute(
                "INSERT IGNORE INTO school_settings(settings_id, payload) VALUES(%s,%s)",
                (SETTINGS_ROW_ID, json.dumps(settings.to_dict())),
            )
            return settings

    def save(self, settings: SchoolSettings) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO school_settings(settings_id, payload)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE payload=VALUES(payload)
                """,
                (SETTINGS_ROW_ID, json.dumps(settings.to_dict())),
            )
