from __future__ import annotations

import threading
from typing import Optional

from .model import SchoolSettings, default_settings
from .repository import SettingsRepository


class InMemorySettingsRepository(SettingsRepository):
    def __init__(self, settings: Optional[SchoolSettings] = None):
        self._settings = settings
        self._lock = threading.Lock()

    def get_or_initialize(self) -> SchoolSettings:
        with self._lock:
            if self._settings is None:
                self._settings = default_settings()
            return self._settings

    def save(self, settings: SchoolSettings) -> None:
        with self._lock:
            self._settings = settings
