from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "school_attendance")),
        )


class DatabaseConnection:
    """Connection factory, one shared instance per database config.

    Note: Connections are short-lived, one per operation (a kiosk scan, a
    sweep, a settings write), so nothing is shared between threads.
    """

    _instances: ClassVar[dict[DBConfig, "DatabaseConnection"]] = {}

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if config not in cls._instances:
            cls._instances[config] = DatabaseConnection(config)
        return cls._instances[config]

    def connect(self, *, with_database: bool = True):
        params = {
            "host": self._config.host,
            "port": self._config.port,
            "user": self._config.user,
            "password": self._config.password,
        }
        if with_database:
            params["database"] = self._config.database
        return mysql.connector.connect(**params)
