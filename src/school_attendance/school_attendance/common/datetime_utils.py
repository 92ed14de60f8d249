from __future__ import annotations

import re
from datetime import date, datetime, tzinfo
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_SCHOOL_TIMEZONE
from ..core.exceptions import ValidationError

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def to_minutes(hhmm: str | None) -> int:
    """Convert "HH:MM" into minutes after midnight.

    Empty or malformed values map to 0. Settings are validated with
    :func:`parse_hhmm` on write, so this fallback only covers legacy rows.
    """
    if not hhmm or ":" not in hhmm:
        return 0
    hours, _, minutes = hhmm.partition(":")
    try:
        return int(hours) * 60 + int(minutes[:2])
    except ValueError:
        return 0


def parse_hhmm(value, field_name: str) -> str:
    """Strict 24h "HH:MM" check used when settings are written."""
    text = str(value or "").strip()
    if not _HHMM.match(text):
        raise ValidationError(f"{field_name} harus berformat HH:MM")
    return text


def minute_of_day(dt: datetime) -> int:
    return dt.hour * 60 + dt.minute


def to_civil(dt: datetime, tz: tzinfo) -> datetime:
    """Express ``dt`` in the school's civil zone.

    Naive datetimes are taken to be civil time already.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(tz)


class CivilClock:
    """Current time in the school's fixed civil timezone.

    Note: Wrapped so services can take a fake clock in tests.
    """

    def __init__(self, tz_name: str = DEFAULT_SCHOOL_TIMEZONE):
        self.tz = ZoneInfo(tz_name)

    def __call__(self) -> datetime:
        return datetime.now(self.tz)
