from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Iterable

from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_non_empty, require_non_negative_int
from ..core.enums import DayGroup
from ..core.exceptions import ValidationError
from ..schedules.model import EarlyDismissal, OperatingHoursRule, SpecificSchedule, day_group_for
from .model import SchoolSettings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SettingsService:
    """Use case: read and replace the school settings.

    Every write is validated so the read path (resolver, classifier) can
    trust the stored times and window geometry.
    """

    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def get(self) -> SchoolSettings:
        return self._settings.get_or_initialize()

    def update(self, payload: dict) -> SchoolSettings:
        if not isinstance(payload, dict):
            raise ValidationError("Format pengaturan tidak valid")

        current = self.get()
        operating_hours = _parse_rules(payload.get("operatingHours", [r.to_dict() for r in current.operating_hours]), "Jam operasional")
        specific_schedules = tuple(
            _parse_specific(s, index) for index, s in enumerate(_as_list(payload.get("specificSchedules", []), "Jadwal khusus"))
        )
        early_dismissals = tuple(
            _parse_dismissal(d, index) for index, d in enumerate(_as_list(payload.get("earlyDismissals", []), "Pulang awal"))
        )
        holidays = frozenset(_parse_date(h, "Hari libur") for h in _as_list(payload.get("holidays", []), "Hari libur"))

        settings = SchoolSettings(
            school_name=str(payload.get("schoolName", current.school_name) or ""),
            school_logo_url=str(payload.get("schoolLogoUrl", current.school_logo_url) or ""),
            running_text=str(payload.get("runningText", current.running_text) or ""),
            operating_hours=operating_hours,
            holidays=holidays,
            early_dismissals=early_dismissals,
            specific_schedules=specific_schedules,
        )
        for dismissal in early_dismissals:
            _check_dismissal_geometry(dismissal, settings)

        self._settings.save(settings)
        logger.info(
            "settings updated: %s rules, %s holidays, %s early dismissals, %s specific schedules",
            len(operating_hours),
            len(holidays),
            len(early_dismissals),
            len(specific_schedules),
        )
        return settings


def _as_list(value, label: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"{label} harus berupa daftar")
    return value


def _parse_date(value, label: str) -> date:
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValidationError(f"{label}: tanggal '{value}' tidak valid") from None


def _parse_rule(data, label: str) -> OperatingHoursRule:
    if not isinstance(data, dict):
        raise ValidationError(f"{label} tidak valid")
    try:
        day_group = DayGroup(data.get("dayGroup"))
    except ValueError:
        raise ValidationError(f"{label}: kelompok hari '{data.get('dayGroup')}' tidak dikenal") from None

    prefix = f"{label} ({day_group.value})"
    rule = OperatingHoursRule(
        day_group=day_group,
        check_in_time=parse_hhmm(data.get("checkInTime"), f"{prefix} jam masuk"),
        late_tolerance=require_non_negative_int(data.get("lateTolerance", 0), f"{prefix} toleransi terlambat"),
        scan_in_before=require_non_negative_int(data.get("scanInBefore", 0), f"{prefix} scan masuk sebelum"),
        check_out_time=parse_hhmm(data.get("checkOutTime"), f"{prefix} jam pulang"),
        scan_out_before=require_non_negative_int(data.get("scanOutBefore", 0), f"{prefix} scan pulang sebelum"),
        scan_out_end_time=parse_hhmm(data.get("scanOutEndTime"), f"{prefix} batas scan pulang"),
        enabled=bool(data.get("enabled", False)),
    )
    _check_geometry(rule, prefix)
    return rule


def _parse_rules(items, label: str) -> tuple[OperatingHoursRule, ...]:
    rules = tuple(_parse_rule(r, label) for r in _as_list(items, label))
    groups = [r.day_group for r in rules]
    if len(groups) != len(set(groups)):
        raise ValidationError(f"{label}: kelompok hari tidak boleh ganda")
    return rules


def _parse_specific(data, index: int) -> SpecificSchedule:
    if not isinstance(data, dict):
        raise ValidationError("Jadwal khusus tidak valid")
    name = require_non_empty(data.get("name"), f"Nama jadwal khusus #{index + 1}")
    class_ids = tuple(str(c) for c in _as_list(data.get("classIds"), f"Kelas jadwal '{name}'"))
    if not class_ids:
        raise ValidationError(f"Jadwal khusus '{name}' harus memiliki kelas")
    return SpecificSchedule(
        schedule_id=str(data.get("id") or uuid.uuid4()),
        name=name,
        class_ids=class_ids,
        operating_hours=_parse_rules(data.get("operatingHours"), f"Jadwal '{name}'"),
    )


def _parse_dismissal(data, index: int) -> EarlyDismissal:
    if not isinstance(data, dict):
        raise ValidationError("Pulang awal tidak valid")
    label = f"Pulang awal #{index + 1}"
    return EarlyDismissal(
        date=_parse_date(data.get("date"), label),
        time=parse_hhmm(data.get("time"), f"{label} jam pulang"),
        reason=str(data.get("reason") or ""),
        class_ids=tuple(str(c) for c in _as_list(data.get("classIds"), label)),
        dismissal_id=str(data.get("id") or uuid.uuid4()),
    )


def _check_geometry(rule: OperatingHoursRule, label: str) -> None:
    if rule.scan_in_start < 0:
        raise ValidationError(f"{label}: scan masuk dimulai sebelum tengah malam")
    if rule.scan_in_start > rule.scan_out_start:
        raise ValidationError(f"{label}: scan pulang dimulai sebelum scan masuk dibuka")
    if rule.scan_out_start > rule.scan_out_end:
        raise ValidationError(f"{label}: batas scan pulang lebih awal dari mulai scan pulang")


def _rules_touched_by(dismissal: EarlyDismissal, settings: SchoolSettings) -> Iterable[OperatingHoursRule]:
    day_group = day_group_for(dismissal.date)
    if day_group is None:
        return
    general = settings.rule_for(day_group)
    if general is not None and general.enabled:
        yield general
    for specific in settings.specific_schedules:
        if dismissal.class_ids and not set(dismissal.class_ids) & set(specific.class_ids):
            continue
        rule = specific.rule_for(day_group)
        if rule is not None and rule.enabled:
            yield rule


def _check_dismissal_geometry(dismissal: EarlyDismissal, settings: SchoolSettings) -> None:
    for rule in _rules_touched_by(dismissal, settings):
        _check_geometry(rule.with_check_out(dismissal.time), f"Pulang awal {dismissal.date.isoformat()}")
