from __future__ import annotations

import logging.config

from pythonjsonlogger import jsonlogger


def configure_logging(*, level: str = "INFO", json_output: bool = False) -> None:
    """Install root handlers once at startup.

    JSON output uses python-json-logger so log shippers can parse records.
    """
    formatters = {
        "standard": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "json": {
            "()": jsonlogger.JsonFormatter,
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    }
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": formatters,
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json" if json_output else "standard",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"level": level.upper(), "handlers": ["console"]},
            "loggers": {
                "apscheduler": {"level": "WARNING"},
                "werkzeug": {"level": "WARNING"},
            },
        }
    )
