from __future__ import annotations

from typing import Protocol

from .model import SchoolSettings


class SettingsRepository(Protocol):
    def get_or_initialize(self) -> SchoolSettings:
        """Return the stored settings, writing the defaults on first access."""

        raise NotImplementedError

    def save(self, settings: SchoolSettings) -> None:
        raise NotImplementedError
